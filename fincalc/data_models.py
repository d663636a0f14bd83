"""Data models for the financial calculators.

This module defines dataclasses representing the entities used by the two
calculators: validated inputs, aggregate results and the per-period ledger rows
for both the loan (EMI) and the periodic-investment (SIP) calculator. It also
holds the fixed category tables (loan types and contribution frequencies) that
supply bounds and defaults to the validator. All values are transient: they are
recomputed from scratch whenever an input changes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


CURRENCY = "NPR"


class LoanType(str, Enum):
    HOME = "home"
    PERSONAL = "personal"
    AUTO = "auto"
    EDUCATION = "education"
    BUSINESS = "business"


@dataclass(frozen=True)
class LoanCategory:
    """Bounds and defaults attached to a loan type.

    Attributes
    ----------
    name: str
        Display name, also used in tenure error messages.
    default_rate: float
        Annual interest rate (percent) suggested when the type is selected.
    min_tenure, max_tenure: int
        Inclusive tenure range in years.
    description: str
        One-line description shown next to the type.
    """

    name: str
    default_rate: float
    min_tenure: int
    max_tenure: int
    description: str


LOAN_CATEGORIES: Dict[LoanType, LoanCategory] = {
    LoanType.HOME: LoanCategory(
        "Home Loan", 9.5, 5, 30, "Long-term housing finance with tax benefits"
    ),
    LoanType.PERSONAL: LoanCategory(
        "Personal Loan", 14.5, 1, 7, "Unsecured loan for personal needs"
    ),
    LoanType.AUTO: LoanCategory(
        "Auto/Vehicle Loan", 11.5, 1, 7, "Finance your dream vehicle"
    ),
    LoanType.EDUCATION: LoanCategory(
        "Education Loan", 10.5, 5, 15, "Invest in your future education"
    ),
    LoanType.BUSINESS: LoanCategory(
        "Business Loan", 13.5, 1, 10, "Grow your business with capital"
    ),
}


class Frequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUALLY = "semi-annually"
    ANNUALLY = "annually"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]

    @property
    def label(self) -> str:
        return self.value.title()


_PERIODS_PER_YEAR = {
    Frequency.MONTHLY: 12,
    Frequency.QUARTERLY: 4,
    Frequency.SEMI_ANNUALLY: 2,
    Frequency.ANNUALLY: 1,
}


# Form defaults, kept as strings because they prefill raw form fields.
LOAN_DEFAULTS = {
    "loan_amount": "1000000",
    "interest_rate": "12",
    "tenure_years": "10",
    "processing_fee_percent": "1",
    "loan_type": LoanType.HOME.value,
}

INVESTMENT_DEFAULTS = {
    "amount": "5000",
    "years": "10",
    "return_rate": "12",
    "inflation_rate": "6",
    "frequency": Frequency.MONTHLY.value,
}


def clamp_tenure(loan_type: LoanType, years: int) -> int:
    """Pull ``years`` into the tenure range of ``loan_type``.

    Used when the selected loan type changes so that a tenure valid for the
    previous type does not immediately produce a range error.
    """
    category = LOAN_CATEGORIES[loan_type]
    if years < category.min_tenure:
        return category.min_tenure
    if years > category.max_tenure:
        return category.max_tenure
    return years


@dataclass(frozen=True)
class LoanInput:
    """Validated loan parameters.

    ``principal`` is the amount borrowed, ``annual_rate_percent`` the nominal
    annual rate (e.g. ``12`` for 12 %), ``tenure_years`` a whole number of years
    and ``processing_fee_percent`` the one-off fee charged on the principal.
    """

    principal: float
    annual_rate_percent: float
    tenure_years: int
    processing_fee_percent: float
    loan_type: LoanType = LoanType.HOME


@dataclass(frozen=True)
class LoanResult:
    periodic_payment: float
    total_payment: float
    total_interest: float
    processing_fee_amount: float
    total_cost: float
    periodic_rate: float
    total_periods: int


@dataclass(frozen=True)
class AmortizationRow:
    """One month of the amortization schedule.

    ``remaining_balance`` is clamped at zero, so the final row always shows a
    fully repaid loan even when floating-point residue is left over.
    """

    period_index: int
    principal_component: float
    interest_component: float
    periodic_payment: float
    remaining_balance: float
    cumulative_principal: float
    cumulative_interest: float


@dataclass(frozen=True)
class InvestmentInput:
    periodic_contribution: float
    tenure_years: int
    annual_return_rate_percent: float
    annual_inflation_rate_percent: float
    frequency: Frequency = Frequency.MONTHLY


@dataclass(frozen=True)
class InvestmentResult:
    total_invested: float
    maturity_value: float  # nominal future value
    real_value: float  # maturity value in today's money
    total_gains: float
    real_gains: float
    effective_rate_percent: float
    periodic_contribution: float
    total_periods: int


@dataclass(frozen=True)
class GrowthRow:
    """Accumulated position of the investment at the end of one period."""

    period_index: int
    year_index: int
    cumulative_invested: float
    maturity_value_at_period: float
    inflation_adjusted_value_at_period: float
    gains: float
    real_gains: float
