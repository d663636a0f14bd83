"""Core calculation engine for the financial calculators.

This module implements the two closed-form engines behind the calculator
pages:

* the loan amortization engine, which computes a fixed monthly installment
  (EMI) and unrolls the month-by-month amortization schedule, and
* the periodic-investment growth engine, which projects the future value of a
  recurring contribution (SIP) and the period-by-period growth ledger, both in
  nominal terms and deflated by inflation.

Both engines are pure functions of an already validated input record. The
``calculate_*`` helpers accept raw form values, run the validator first and
then the engine, so callers get either a complete result or a
:class:`~fincalc.exceptions.ValidationError`, never both.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Tuple, Union

from .data_models import (
    AmortizationRow,
    Frequency,
    GrowthRow,
    InvestmentInput,
    InvestmentResult,
    LoanInput,
    LoanResult,
    LoanType,
)
from .utils import RawValue
from .validation import validate_investment_input, validate_loan_input

logger = logging.getLogger(__name__)

RESIDUAL_TOLERANCE = 0.005


def _calculate_annuity_payment(principal: float, rate_per_period: float, periods: int) -> float:
    """Return the equal installment that amortizes ``principal`` over ``periods``.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the periodic interest rate and
    ``n`` is the number of payments. When the interest rate is zero, the
    payment simplifies to ``P / n``.
    """
    if periods <= 0:
        raise ValueError("Term must be positive")
    if rate_per_period == 0:
        return principal / periods
    factor = (1 + rate_per_period) ** periods
    return principal * rate_per_period * factor / (factor - 1)


def _annuity_due_value(contribution: float, rate_per_period: float, periods: int) -> float:
    """Future value of ``periods`` contributions made at the start of each period.

        FV = C * (((1 + i)^n - 1) / i) * (1 + i)

    With a zero rate nothing compounds and the value is the plain sum ``C * n``.
    """
    if rate_per_period == 0:
        return contribution * periods
    return contribution * (((1 + rate_per_period) ** periods - 1) / rate_per_period) * (1 + rate_per_period)


def iter_amortization(loan: LoanInput, payment: float) -> Iterator[AmortizationRow]:
    """Yield the amortization schedule one month at a time.

    Each month the interest on the outstanding balance is taken out of the
    fixed ``payment`` first and the remainder repays principal. The reported
    balance is clamped at zero (residue under half a cent counts as zero) and
    is always zero on the last month, however much rounding error the running
    balance has picked up. The running balance itself is not clamped, so the
    cumulative principal still sums to the true amount repaid.
    """
    rate_per_month = loan.annual_rate_percent / 12 / 100
    total_months = loan.tenure_years * 12
    balance = loan.principal
    cumulative_principal = 0.0
    cumulative_interest = 0.0
    for month in range(1, total_months + 1):
        interest = balance * rate_per_month
        principal_paid = payment - interest
        balance -= principal_paid
        cumulative_principal += principal_paid
        cumulative_interest += interest
        if month == total_months or balance < RESIDUAL_TOLERANCE:
            remaining = 0.0
        else:
            remaining = balance
        yield AmortizationRow(
            period_index=month,
            principal_component=principal_paid,
            interest_component=interest,
            periodic_payment=payment,
            remaining_balance=remaining,
            cumulative_principal=cumulative_principal,
            cumulative_interest=cumulative_interest,
        )


def compute_loan(loan: LoanInput) -> Tuple[LoanResult, List[AmortizationRow]]:
    """Compute the EMI summary and the full amortization schedule.

    Interest always compounds monthly: the periodic rate is the annual rate
    divided by 12 and the schedule has ``tenure_years * 12`` rows.

    Returns
    -------
    result: LoanResult
        EMI, total payment, total interest, processing fee and total cost.
    schedule: List[AmortizationRow]
        One row per month.
    """
    rate_per_month = loan.annual_rate_percent / 12 / 100
    total_months = loan.tenure_years * 12

    emi = _calculate_annuity_payment(loan.principal, rate_per_month, total_months)
    total_payment = emi * total_months
    total_interest = total_payment - loan.principal
    processing_fee = loan.principal * loan.processing_fee_percent / 100

    result = LoanResult(
        periodic_payment=emi,
        total_payment=total_payment,
        total_interest=total_interest,
        processing_fee_amount=processing_fee,
        total_cost=total_payment + processing_fee,
        periodic_rate=rate_per_month,
        total_periods=total_months,
    )
    schedule = list(iter_amortization(loan, emi))
    logger.debug(
        "Computed %s loan: principal=%.2f months=%d emi=%.2f",
        loan.loan_type.value,
        loan.principal,
        total_months,
        emi,
    )
    return result, schedule


def iter_growth(investment: InvestmentInput) -> Iterator[GrowthRow]:
    """Yield the growth ledger one contribution period at a time.

    The value at period ``p`` is recomputed from the closed-form annuity-due
    formula with ``p`` periods instead of being carried forward, so every row
    matches the aggregate figure for a plan of that length exactly. Inflation
    is deflated with a fractional-year exponent ``p / periods_per_year``.
    """
    periods_per_year = investment.frequency.periods_per_year
    rate_per_period = investment.annual_return_rate_percent / 100 / periods_per_year
    inflation = investment.annual_inflation_rate_percent / 100
    contribution = investment.periodic_contribution

    cumulative_invested = 0.0
    for period in range(1, investment.tenure_years * periods_per_year + 1):
        cumulative_invested += contribution
        value = _annuity_due_value(contribution, rate_per_period, period)
        real_value = value / (1 + inflation) ** (period / periods_per_year)
        yield GrowthRow(
            period_index=period,
            year_index=-(-period // periods_per_year),
            cumulative_invested=cumulative_invested,
            maturity_value_at_period=value,
            inflation_adjusted_value_at_period=real_value,
            gains=value - cumulative_invested,
            real_gains=real_value - cumulative_invested,
        )


def compute_growth(investment: InvestmentInput) -> Tuple[InvestmentResult, List[GrowthRow]]:
    """Project the maturity value of a periodic investment.

    Contributions are treated as an annuity-due (invested at the start of each
    period). The aggregate real value deflates the maturity value by whole
    years of inflation, ``(1 + inflation)^years``, while the ledger rows use a
    fractional-year exponent; both conventions are kept as they are.
    """
    periods_per_year = investment.frequency.periods_per_year
    total_periods = investment.tenure_years * periods_per_year
    rate_per_period = investment.annual_return_rate_percent / 100 / periods_per_year
    inflation = investment.annual_inflation_rate_percent / 100

    future_value = _annuity_due_value(investment.periodic_contribution, rate_per_period, total_periods)
    total_invested = investment.periodic_contribution * total_periods
    real_value = future_value / (1 + inflation) ** investment.tenure_years

    result = InvestmentResult(
        total_invested=total_invested,
        maturity_value=future_value,
        real_value=real_value,
        total_gains=future_value - total_invested,
        real_gains=real_value - total_invested,
        effective_rate_percent=(future_value / total_invested - 1) * 100,
        periodic_contribution=investment.periodic_contribution,
        total_periods=total_periods,
    )
    breakdown = list(iter_growth(investment))
    logger.debug(
        "Computed %s investment: contribution=%.2f periods=%d maturity=%.2f",
        investment.frequency.value,
        investment.periodic_contribution,
        total_periods,
        future_value,
    )
    return result, breakdown


def calculate_loan(
    loan_amount: RawValue,
    interest_rate: RawValue,
    tenure_years: RawValue,
    processing_fee_percent: RawValue = "0",
    loan_type: Union[LoanType, str, None] = LoanType.HOME,
) -> Tuple[LoanInput, LoanResult, List[AmortizationRow]]:
    """Validate raw loan form values and compute the loan.

    Raises :class:`~fincalc.exceptions.ValidationError` before any arithmetic
    is done when an input is rejected.
    """
    loan = validate_loan_input(loan_amount, interest_rate, tenure_years, processing_fee_percent, loan_type)
    result, schedule = compute_loan(loan)
    return loan, result, schedule


def calculate_growth(
    amount: RawValue,
    years: RawValue,
    return_rate: RawValue,
    inflation_rate: RawValue,
    frequency: Union[Frequency, str, None] = Frequency.MONTHLY,
) -> Tuple[InvestmentInput, InvestmentResult, List[GrowthRow]]:
    """Validate raw investment form values and compute the growth projection."""
    investment = validate_investment_input(amount, years, return_rate, inflation_rate, frequency)
    result, breakdown = compute_growth(investment)
    return investment, result, breakdown
