"""Validation of raw calculator inputs.

Both validators take the raw values of a form (usually strings) plus the
selected category and either return a typed, immutable input record or raise
:class:`~fincalc.exceptions.ValidationError` listing every rejected field.
They never return a partially validated record.

Range conventions:

* loan amount must be > 0 and at most ``LOAN_AMOUNT_CEILING``
* interest rate and return rate: ``0 < r <= 50``
* processing fee: ``0 <= f <= 10`` (a blank fee means no fee)
* investment period: whole years in ``[1, 40]``
* inflation rate: ``0 <= i <= 20``
* loan tenure: whole years within the selected loan type's range
"""

from __future__ import annotations

import logging
from typing import Dict, Union

from .data_models import (
    Frequency,
    InvestmentInput,
    LOAN_CATEGORIES,
    LoanInput,
    LoanType,
)
from .exceptions import FieldError, ValidationError
from .utils import RawValue, parse_number, parse_whole_number

logger = logging.getLogger(__name__)

LOAN_AMOUNT_CEILING = 100_000_000
MAX_INTEREST_RATE = 50.0
MAX_PROCESSING_FEE = 10.0
MIN_INVESTMENT_YEARS = 1
MAX_INVESTMENT_YEARS = 40
MAX_RETURN_RATE = 50.0
MAX_INFLATION_RATE = 20.0


def _coerce_loan_type(value: Union[LoanType, str, None], errors: Dict[str, FieldError]):
    try:
        return LoanType(value) if value is not None else LoanType.HOME
    except ValueError:
        choices = ", ".join(t.value for t in LoanType)
        errors["loan_type"] = FieldError("loan_type", f"Loan type must be one of: {choices}")
        return None


def _coerce_frequency(value: Union[Frequency, str, None], errors: Dict[str, FieldError]):
    try:
        return Frequency(value) if value is not None else Frequency.MONTHLY
    except ValueError:
        choices = ", ".join(f.value for f in Frequency)
        errors["frequency"] = FieldError("frequency", f"Frequency must be one of: {choices}")
        return None


def validate_loan_input(
    loan_amount: RawValue,
    interest_rate: RawValue,
    tenure_years: RawValue,
    processing_fee_percent: RawValue = "0",
    loan_type: Union[LoanType, str, None] = LoanType.HOME,
) -> LoanInput:
    """Validate the loan form and return a :class:`LoanInput`.

    Raises
    ------
    ValidationError
        If any field is missing, malformed or out of range. Tenure errors name
        the valid range and the loan type, e.g. ``"Tenure must be between 5 and
        30 years for Home Loan"``.
    """
    errors: Dict[str, FieldError] = {}
    category_type = _coerce_loan_type(loan_type, errors)

    amount = parse_number(loan_amount)
    if amount is None or amount <= 0:
        errors["loan_amount"] = FieldError(
            "loan_amount", "Loan amount must be greater than 0", (0, LOAN_AMOUNT_CEILING)
        )
    elif amount > LOAN_AMOUNT_CEILING:
        errors["loan_amount"] = FieldError(
            "loan_amount", "Loan amount seems too high", (0, LOAN_AMOUNT_CEILING)
        )

    rate = parse_number(interest_rate)
    if rate is None or rate <= 0 or rate > MAX_INTEREST_RATE:
        errors["interest_rate"] = FieldError(
            "interest_rate",
            "Interest rate must be between 0% and 50%",
            (0, MAX_INTEREST_RATE),
        )

    tenure = parse_whole_number(tenure_years)
    if category_type is not None:
        category = LOAN_CATEGORIES[category_type]
        if tenure is None or tenure < category.min_tenure or tenure > category.max_tenure:
            errors["tenure_years"] = FieldError(
                "tenure_years",
                f"Tenure must be between {category.min_tenure} and "
                f"{category.max_tenure} years for {category.name}",
                (category.min_tenure, category.max_tenure),
            )
    elif tenure is None or tenure <= 0:
        errors["tenure_years"] = FieldError("tenure_years", "Tenure must be a whole number of years")

    if processing_fee_percent is None or str(processing_fee_percent).strip() == "":
        fee = 0.0
    else:
        fee = parse_number(processing_fee_percent)
    if fee is None or fee < 0 or fee > MAX_PROCESSING_FEE:
        errors["processing_fee_percent"] = FieldError(
            "processing_fee_percent",
            "Processing fee must be between 0% and 10%",
            (0, MAX_PROCESSING_FEE),
        )

    if errors:
        logger.info("Rejected loan input: %s", ", ".join(sorted(errors)))
        raise ValidationError(errors)

    return LoanInput(
        principal=amount,
        annual_rate_percent=rate,
        tenure_years=tenure,
        processing_fee_percent=fee,
        loan_type=category_type,
    )


def validate_investment_input(
    amount: RawValue,
    years: RawValue,
    return_rate: RawValue,
    inflation_rate: RawValue,
    frequency: Union[Frequency, str, None] = Frequency.MONTHLY,
) -> InvestmentInput:
    """Validate the periodic-investment form and return an :class:`InvestmentInput`."""
    errors: Dict[str, FieldError] = {}
    freq = _coerce_frequency(frequency, errors)

    contribution = parse_number(amount)
    if contribution is None or contribution <= 0:
        errors["amount"] = FieldError("amount", "Investment amount must be greater than 0")

    tenure = parse_whole_number(years)
    if tenure is None or tenure < MIN_INVESTMENT_YEARS or tenure > MAX_INVESTMENT_YEARS:
        errors["years"] = FieldError(
            "years",
            "Investment period must be between 1 and 40 years",
            (MIN_INVESTMENT_YEARS, MAX_INVESTMENT_YEARS),
        )

    rate = parse_number(return_rate)
    if rate is None or rate <= 0 or rate > MAX_RETURN_RATE:
        errors["return_rate"] = FieldError(
            "return_rate",
            "Expected return must be between 0% and 50%",
            (0, MAX_RETURN_RATE),
        )

    inflation = parse_number(inflation_rate)
    if inflation is None or inflation < 0 or inflation > MAX_INFLATION_RATE:
        errors["inflation_rate"] = FieldError(
            "inflation_rate",
            "Inflation rate must be between 0% and 20%",
            (0, MAX_INFLATION_RATE),
        )

    if errors:
        logger.info("Rejected investment input: %s", ", ".join(sorted(errors)))
        raise ValidationError(errors)

    return InvestmentInput(
        periodic_contribution=contribution,
        tenure_years=tenure,
        annual_return_rate_percent=rate,
        annual_inflation_rate_percent=inflation,
        frequency=freq,
    )
