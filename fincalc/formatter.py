"""Output helpers for the financial calculators.

This module renders computed results as text: terminal tables for the CLI, the
plain-text report offered as a download, and the short share text. All
functions operate on already computed results; they never recompute anything.
The ``show_real`` flag only decides whether inflation-adjusted columns are
rendered.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from .data_models import (
    AmortizationRow,
    GrowthRow,
    InvestmentInput,
    InvestmentResult,
    LOAN_CATEGORIES,
    LoanInput,
    LoanResult,
)
from .insights import (
    break_even_month,
    interest_to_principal_percent,
    monthly_commitment_percent,
    real_return_percent,
    recommended_monthly_income,
    total_return_percent,
)
from .utils import format_amount, format_currency, format_lakhs, format_percent

RULE = "=" * 39
REPORT_LOAN_ROWS = 12
REPORT_GROWTH_ROWS = 20
BRAND = "FinanceCalc Pro"


def _section(title: str) -> list[str]:
    return ["", RULE, title, RULE]


def _number(value: float) -> str:
    # Trim "12.0" to "12" the way form values are typed.
    return f"{value:g}" if float(value).is_integer() else f"{value}"


def print_loan_summary(loan: LoanInput, result: LoanResult) -> None:
    """Print the EMI summary cards in a human-readable format."""
    category = LOAN_CATEGORIES[loan.loan_type]
    print(f"{category.name} summary")
    print("-" * 72)
    print(f"Monthly EMI        : {format_currency(result.periodic_payment)}")
    print(f"Principal          : {format_currency(loan.principal)}")
    print(f"Total interest     : {format_currency(result.total_interest)}")
    print(f"Total payment      : {format_currency(result.total_payment)}")
    print(f"Processing fee     : {format_currency(result.processing_fee_amount)}")
    print(f"Total cost         : {format_currency(result.total_cost)}")
    print(f"Payments           : {result.total_periods}")
    print(f"Interest/principal : {format_percent(interest_to_principal_percent(result, loan.principal))}")
    print("-" * 72)


def print_amortization(schedule: Sequence[AmortizationRow]) -> None:
    """Print the amortization schedule as a tab separated table."""
    headers = ["Month", "Principal", "Interest", "EMI", "Balance", "CumPrincipal", "CumInterest"]
    print("\t".join(headers))
    for row in schedule:
        print(
            "\t".join(
                [
                    str(row.period_index),
                    f"{row.principal_component:.2f}",
                    f"{row.interest_component:.2f}",
                    f"{row.periodic_payment:.2f}",
                    f"{row.remaining_balance:.2f}",
                    f"{row.cumulative_principal:.2f}",
                    f"{row.cumulative_interest:.2f}",
                ]
            )
        )


def print_growth_summary(investment: InvestmentInput, result: InvestmentResult, show_real: bool = True) -> None:
    """Print the SIP summary cards; real figures only when ``show_real`` is set."""
    print(f"{investment.frequency.label} investment summary")
    print("-" * 72)
    print(f"Total invested     : {format_currency(result.total_invested)}")
    print(f"Maturity value     : {format_currency(result.maturity_value)}")
    print(f"Total gains        : {format_currency(result.total_gains)}")
    if show_real:
        print(f"Real value         : {format_currency(result.real_value)}")
        print(f"Real gains         : {format_currency(result.real_gains)}")
    print(f"Effective return   : {format_percent(result.effective_rate_percent)}")
    print(f"Periods            : {result.total_periods}")
    print("-" * 72)


def print_growth_breakdown(breakdown: Sequence[GrowthRow], show_real: bool = True) -> None:
    headers = ["Period", "Year", "Invested", "Value"]
    if show_real:
        headers.append("RealValue")
    headers.append("Gains")
    print("\t".join(headers))
    for row in breakdown:
        cells = [
            str(row.period_index),
            str(row.year_index),
            f"{row.cumulative_invested:.2f}",
            f"{row.maturity_value_at_period:.2f}",
        ]
        if show_real:
            cells.append(f"{row.inflation_adjusted_value_at_period:.2f}")
        cells.append(f"{row.gains:.2f}")
        print("\t".join(cells))


def render_loan_report(
    loan: LoanInput,
    result: LoanResult,
    schedule: Sequence[AmortizationRow],
    generated_at: Optional[datetime] = None,
) -> str:
    """Return the downloadable plain-text EMI report."""
    generated_at = generated_at or datetime.now()
    category = LOAN_CATEGORIES[loan.loan_type]
    interest_share = interest_to_principal_percent(result, loan.principal)
    break_even = break_even_month(schedule)

    lines = ["LOAN EMI ANALYSIS REPORT", f"Generated on: {generated_at:%Y-%m-%d %H:%M:%S}"]
    lines += _section("LOAN DETAILS")
    lines += [
        f"Loan Type: {category.name}",
        f"Loan Amount: {format_currency(loan.principal)}",
        f"Interest Rate: {_number(loan.annual_rate_percent)}% per annum",
        f"Loan Tenure: {loan.tenure_years} years ({result.total_periods} months)",
        f"Processing Fee: {_number(loan.processing_fee_percent)}%",
    ]
    lines += _section("EMI CALCULATION SUMMARY")
    lines += [
        f"Monthly EMI: {format_currency(result.periodic_payment)}",
        f"Total Payment: {format_currency(result.total_payment)}",
        f"Total Interest: {format_currency(result.total_interest)}",
        f"Processing Fee: {format_currency(result.processing_fee_amount)}",
        f"Total Cost of Loan: {format_currency(result.total_cost)}",
        "",
        f"Interest as % of Principal: {format_percent(interest_share)}",
    ]
    lines += _section(f"AMORTIZATION SCHEDULE (First {REPORT_LOAN_ROWS} Months)")
    lines.append("Month | Principal | Interest | EMI | Balance")
    for row in schedule[:REPORT_LOAN_ROWS]:
        lines.append(
            f"{row.period_index:<5} | {format_amount(row.principal_component):<9} | "
            f"{format_amount(row.interest_component):<8} | {format_amount(row.periodic_payment):<7} | "
            f"{format_amount(row.remaining_balance)}"
        )
    lines += _section("KEY INSIGHTS")
    lines += [
        f"* Your {category.name.lower()} EMI of {format_currency(result.periodic_payment)} "
        f"for {loan.tenure_years} years",
        f"* Total interest: {format_lakhs(result.total_interest)} ({format_percent(interest_share)} of principal)",
        f"* Monthly commitment: {format_percent(monthly_commitment_percent(result, loan.principal), 2)} "
        "of loan amount",
        f"* Break-even point: {f'Month {break_even}' if break_even else 'not reached'}",
    ]
    lines += _section("AFFORDABILITY GUIDELINES")
    lines += [
        f"Recommended monthly income: {format_currency(recommended_monthly_income(result))} "
        "(EMI should be <=30% of income)",
        "Debt-to-income ratio: Keep total EMIs under 40% of monthly income",
    ]
    lines += _section("DISCLAIMER")
    lines += [
        "This calculation is for estimation purposes only. Actual loan terms",
        "may vary based on bank policies, credit score, and other factors.",
        "Please consult with financial institutions for accurate quotes.",
        "",
        f"Generated by {BRAND}",
    ]
    return "\n".join(lines)


def render_growth_report(
    investment: InvestmentInput,
    result: InvestmentResult,
    breakdown: Sequence[GrowthRow],
    generated_at: Optional[datetime] = None,
) -> str:
    """Return the downloadable plain-text SIP report."""
    generated_at = generated_at or datetime.now()
    label = investment.frequency.label

    lines = ["SIP INVESTMENT ANALYSIS REPORT", f"Generated on: {generated_at:%Y-%m-%d %H:%M:%S}"]
    lines += _section("INVESTMENT DETAILS")
    lines += [
        f"Investment Amount: {format_currency(investment.periodic_contribution)} ({label})",
        f"Investment Period: {investment.tenure_years} years",
        f"Expected Annual Return: {_number(investment.annual_return_rate_percent)}%",
        f"Inflation Rate: {_number(investment.annual_inflation_rate_percent)}%",
        f"Investment Frequency: {label}",
        f"Total Periods: {result.total_periods}",
    ]
    lines += _section("INVESTMENT SUMMARY")
    lines += [
        f"Total Amount Invested: {format_currency(result.total_invested)}",
        f"Maturity Value: {format_currency(result.maturity_value)}",
        f"Inflation-Adjusted Value: {format_currency(result.real_value)}",
        f"Total Gains: {format_currency(result.total_gains)}",
        f"Real Gains: {format_currency(result.real_gains)}",
        f"Effective Return Rate: {format_percent(result.effective_rate_percent, 2)}",
    ]
    lines += _section("PERIOD-WISE BREAKDOWN")
    lines.append("Period | Year | Invested | Maturity | Real Value | Gains")
    for row in breakdown[:REPORT_GROWTH_ROWS]:
        lines.append(
            f"{row.period_index:<6} | {row.year_index:<4} | {format_amount(row.cumulative_invested):<8} | "
            f"{format_amount(row.maturity_value_at_period):<8} | "
            f"{format_amount(row.inflation_adjusted_value_at_period):<10} | {format_amount(row.gains)}"
        )
    if len(breakdown) > REPORT_GROWTH_ROWS:
        lines.append(f"... (showing first {REPORT_GROWTH_ROWS} periods)")
    lines += _section("KEY INSIGHTS")
    lines += [
        f"* Your {label.lower()} investment of {format_currency(investment.periodic_contribution)} "
        f"for {investment.tenure_years} years",
        f"* Grows to {format_lakhs(result.maturity_value)} "
        f"({format_lakhs(result.real_value)} in today's value)",
        f"* Total return: {format_percent(total_return_percent(result))}",
        f"* Real return after inflation: {format_percent(real_return_percent(result))}",
    ]
    lines += _section("DISCLAIMER")
    lines += [
        "This calculation is based on assumed returns and may not reflect",
        "actual market performance. Past performance does not guarantee",
        "future results. Please consult a financial advisor for investment decisions.",
        "",
        f"Generated by {BRAND}",
    ]
    return "\n".join(lines)


def loan_report_filename(loan: LoanInput, on: Optional[datetime] = None) -> str:
    """File name for a downloaded EMI report, e.g. ``Home_Loan_EMI_Report_2024-05-01.txt``."""
    on = on or datetime.now()
    name = LOAN_CATEGORIES[loan.loan_type].name.replace(" ", "_").replace("/", "_")
    return f"{name}_EMI_Report_{on:%Y-%m-%d}.txt"


def growth_report_filename(on: Optional[datetime] = None) -> str:
    on = on or datetime.now()
    return f"SIP_Analysis_Report_{on:%Y-%m-%d}.txt"


def render_loan_share_text(loan: LoanInput, result: LoanResult) -> str:
    """Short summary meant for the clipboard or a share sheet."""
    category = LOAN_CATEGORIES[loan.loan_type]
    interest_share = interest_to_principal_percent(result, loan.principal)
    return "\n".join(
        [
            f"{category.name} EMI Analysis",
            "",
            "Loan Details:",
            f"* Amount: {format_lakhs(loan.principal)}",
            f"* Rate: {_number(loan.annual_rate_percent)}% for {loan.tenure_years} years",
            "",
            "Results:",
            f"* Monthly EMI: {format_currency(result.periodic_payment)}",
            f"* Total Interest: {format_lakhs(result.total_interest)}",
            f"* Total Cost: {format_lakhs(result.total_cost)}",
            "",
            f"Interest is {format_percent(interest_share)} of your loan amount!",
            "",
            f"Calculate your EMI at {BRAND}",
        ]
    )


def render_growth_share_text(investment: InvestmentInput, result: InvestmentResult) -> str:
    label = investment.frequency.label.lower()
    return "\n".join(
        [
            "SIP Investment Analysis",
            "",
            f"Investment: {format_currency(investment.periodic_contribution)} {label} "
            f"for {investment.tenure_years} years",
            f"Expected Return: {_number(investment.annual_return_rate_percent)}% annually",
            "",
            "Results:",
            f"* Total Invested: {format_lakhs(result.total_invested)}",
            f"* Maturity Value: {format_lakhs(result.maturity_value)}",
            f"* Real Value: {format_lakhs(result.real_value)}",
            f"* Total Gains: {format_lakhs(result.total_gains)}",
            "",
            f"Your {label} investment grows to {format_percent(total_return_percent(result))} returns!",
            "",
            f"Calculate your SIP returns at {BRAND}",
        ]
    )
