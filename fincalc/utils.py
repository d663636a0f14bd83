"""Utility functions for the financial calculators.

This module provides helpers for turning raw form values into numbers and for
formatting amounts for display. Amount strings may contain thousands
separators and shorthand suffixes (``k`` thousand, ``l`` lakh, ``m`` million).
"""

from __future__ import annotations

import math
from typing import Optional, Union

from .data_models import CURRENCY

LAKH = 100_000

_SUFFIXES = {
    "k": 1_000.0,
    "l": float(LAKH),
    "m": 1_000_000.0,
}

RawValue = Union[str, int, float, None]


def parse_number(value: RawValue) -> Optional[float]:
    """Convert a raw form value into a float.

    Returns ``None`` when the value is missing, blank, malformed or not finite
    so that the caller can decide which message to report.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    text = value.strip().lower().replace(",", "")
    if text.endswith("%"):
        text = text[:-1].strip()
    if not text:
        return None
    factor = 1.0
    if text[-1] in _SUFFIXES:
        factor = _SUFFIXES[text[-1]]
        text = text[:-1]
    try:
        number = float(text) * factor
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_whole_number(value: RawValue) -> Optional[int]:
    """Like :func:`parse_number` but only accepts integral values ("10", "10.0")."""
    number = parse_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def format_amount(value: float, decimals: int = 2) -> str:
    """Format a number with thousands separators, e.g. ``14,347.09``."""
    return f"{value:,.{decimals}f}"


def format_currency(value: float, decimals: int = 2) -> str:
    return f"{CURRENCY} {format_amount(value, decimals)}"


def format_lakhs(value: float, decimals: int = 1) -> str:
    """Express an amount in lakhs, e.g. ``722051`` -> ``NPR 7.2L``."""
    return f"{CURRENCY} {value / LAKH:.{decimals}f}L"


def format_percent(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"
