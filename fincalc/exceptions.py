"""Errors raised by the calculators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class FieldError:
    """A single rejected form field.

    ``bound`` holds the ``(low, high)`` range that was violated for range
    errors and is ``None`` for missing or malformed values.
    """

    field: str
    message: str
    bound: Optional[Tuple[float, float]] = None


class ValidationError(ValueError):
    """Raised when one or more input fields are invalid.

    The exception always carries every failing field, never just the first
    one, so a form can show all messages at once.
    """

    def __init__(self, errors: Dict[str, FieldError]) -> None:
        if not errors:
            raise ValueError("ValidationError requires at least one field error")
        self.errors = dict(errors)
        super().__init__("; ".join(e.message for e in self.errors.values()))

    def messages(self) -> Dict[str, str]:
        """Return a plain ``field -> message`` mapping."""
        return {name: err.message for name, err in self.errors.items()}
