"""Derived figures and chart series built from computed results.

Nothing here changes a result; these helpers only summarise an already
computed result and ledger for display (summary cards, charts, reports).
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .data_models import AmortizationRow, GrowthRow, InvestmentResult, LoanResult

# EMI should stay at or below ~30 % of monthly income.
INCOME_MULTIPLIER = 3.33
BALANCE_CHART_MAX_ROWS = 120
BALANCE_CHART_TARGET_POINTS = 50


def interest_to_principal_percent(result: LoanResult, principal: float) -> float:
    return result.total_interest / principal * 100


def monthly_commitment_percent(result: LoanResult, principal: float) -> float:
    """EMI as a percentage of the amount borrowed."""
    return result.periodic_payment / principal * 100


def recommended_monthly_income(result: LoanResult) -> float:
    return result.periodic_payment * INCOME_MULTIPLIER


def break_even_month(schedule: Sequence[AmortizationRow]) -> Optional[int]:
    """Return the first month in which cumulative principal exceeds cumulative interest.

    ``None`` means interest dominates for the whole tenure.
    """
    for row in schedule:
        if row.cumulative_principal > row.cumulative_interest:
            return row.period_index
    return None


def total_return_percent(result: InvestmentResult) -> float:
    return (result.maturity_value / result.total_invested - 1) * 100


def real_return_percent(result: InvestmentResult) -> float:
    return (result.real_value / result.total_invested - 1) * 100


def yearly_snapshot(breakdown: Sequence[GrowthRow]) -> List[GrowthRow]:
    """Keep the last row of each year, in year order."""
    by_year: Dict[int, GrowthRow] = {}
    for row in breakdown:
        by_year[row.year_index] = row
    return [by_year[year] for year in sorted(by_year)]


def loan_breakdown(result: LoanResult, principal: float) -> List[Dict[str, object]]:
    """Split the total cost of a loan into principal, interest and fee slices."""
    return [
        {"name": "Principal Amount", "value": principal},
        {"name": "Total Interest", "value": result.total_interest},
        {"name": "Processing Fee", "value": result.processing_fee_amount},
    ]


def balance_chart_points(schedule: Sequence[AmortizationRow]) -> List[Dict[str, int]]:
    """Sample the schedule for the balance chart.

    Only the first ten years are plotted and roughly fifty points are kept,
    with the sampling step derived from the full schedule length.
    """
    step = max(1, len(schedule) // BALANCE_CHART_TARGET_POINTS)
    points = []
    for index, row in enumerate(schedule[:BALANCE_CHART_MAX_ROWS]):
        if index % step:
            continue
        points.append(
            {
                "month": row.period_index,
                "outstanding_balance": round(row.remaining_balance),
                "principal_paid": round(row.cumulative_principal),
                "interest_paid": round(row.cumulative_interest),
            }
        )
    return points


def growth_chart_points(breakdown: Sequence[GrowthRow], by_year: bool = True) -> List[Dict[str, object]]:
    """Chart series of invested vs. nominal vs. real value, per year or per period."""
    rows = yearly_snapshot(breakdown) if by_year else list(breakdown)
    points = []
    for row in rows:
        key = row.year_index if by_year else row.period_index
        points.append(
            {
                "period": key,
                "label": f"Year {key}" if by_year else f"Period {key}",
                "total_invested": round(row.cumulative_invested),
                "maturity_value": round(row.maturity_value_at_period),
                "real_value": round(row.inflation_adjusted_value_at_period),
            }
        )
    return points
