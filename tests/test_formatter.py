"""Unit tests for reports, share text and terminal tables"""

from datetime import datetime

from fincalc.data_models import LoanInput, LoanType
from fincalc.engine import compute_growth, compute_loan
from fincalc.formatter import (
    growth_report_filename,
    loan_report_filename,
    print_amortization,
    print_growth_breakdown,
    print_growth_summary,
    print_loan_summary,
    render_growth_report,
    render_growth_share_text,
    render_loan_report,
    render_loan_share_text,
)
from fincalc.utils import format_currency, format_lakhs, parse_number, parse_whole_number

GENERATED_AT = datetime(2024, 5, 1, 10, 0, 0)


def test_loan_report_sections(default_loan):
    result, schedule = compute_loan(default_loan)
    report = render_loan_report(default_loan, result, schedule, generated_at=GENERATED_AT)

    assert report.startswith("LOAN EMI ANALYSIS REPORT\nGenerated on: 2024-05-01 10:00:00")
    assert "Loan Type: Home Loan" in report
    assert "Interest Rate: 12% per annum" in report
    assert "Loan Tenure: 10 years (120 months)" in report
    assert "Processing Fee: 1%" in report
    assert "Monthly EMI: NPR 14,347.09" in report
    assert "Processing Fee: NPR 10,000.00" in report
    assert "Interest as % of Principal: 72.2%" in report
    assert "Break-even point: Month " in report
    assert "DISCLAIMER" in report


def test_loan_report_lists_first_twelve_months(default_loan):
    result, schedule = compute_loan(default_loan)
    report = render_loan_report(default_loan, result, schedule, generated_at=GENERATED_AT)

    assert "1     | 4,347.09" in report
    assert "12    | " in report
    assert "13    | " not in report


def test_growth_report_sections(default_investment):
    result, breakdown = compute_growth(default_investment)
    report = render_growth_report(default_investment, result, breakdown, generated_at=GENERATED_AT)

    assert report.startswith("SIP INVESTMENT ANALYSIS REPORT")
    assert "Investment Amount: NPR 5,000.00 (Monthly)" in report
    assert "Total Periods: 120" in report
    assert "Total Amount Invested: NPR 600,000.00" in report
    assert "Effective Return Rate: 93.62%" in report
    assert "20     | 2    | " in report
    assert "21     | " not in report
    assert "... (showing first 20 periods)" in report


def test_report_filenames(default_loan):
    assert loan_report_filename(default_loan, GENERATED_AT) == "Home_Loan_EMI_Report_2024-05-01.txt"
    auto = LoanInput(500_000, 11.5, 5, 1, LoanType.AUTO)
    assert loan_report_filename(auto, GENERATED_AT) == "Auto_Vehicle_Loan_EMI_Report_2024-05-01.txt"
    assert growth_report_filename(GENERATED_AT) == "SIP_Analysis_Report_2024-05-01.txt"


def test_loan_share_text(default_loan):
    result, _ = compute_loan(default_loan)
    text = render_loan_share_text(default_loan, result)

    assert text.startswith("Home Loan EMI Analysis")
    assert "* Amount: NPR 10.0L" in text
    assert "* Rate: 12% for 10 years" in text
    assert "* Monthly EMI: NPR 14,347.09" in text
    assert "* Total Interest: NPR 7.2L" in text


def test_growth_share_text(default_investment):
    result, _ = compute_growth(default_investment)
    text = render_growth_share_text(default_investment, result)

    assert "Investment: NPR 5,000.00 monthly for 10 years" in text
    assert "* Total Invested: NPR 6.0L" in text
    assert "* Maturity Value: NPR 11.6L" in text


def test_print_loan_tables(default_loan, capsys):
    result, schedule = compute_loan(default_loan)
    print_loan_summary(default_loan, result)
    print_amortization(schedule[:2])
    out = capsys.readouterr().out

    assert "Home Loan summary" in out
    assert "Monthly EMI        : NPR 14,347.09" in out
    assert out.count("\n1\t") == 1


def test_real_columns_follow_display_toggle(default_investment, capsys):
    result, breakdown = compute_growth(default_investment)

    print_growth_summary(default_investment, result, show_real=False)
    print_growth_breakdown(breakdown[:3], show_real=False)
    hidden = capsys.readouterr().out
    assert "Real value" not in hidden
    assert "RealValue" not in hidden

    print_growth_summary(default_investment, result, show_real=True)
    print_growth_breakdown(breakdown[:3], show_real=True)
    shown = capsys.readouterr().out
    assert "Real value" in shown
    assert "RealValue" in shown


def test_number_helpers():
    assert parse_number(" 12.5% ") == 12.5
    assert parse_number("5k") == 5000
    assert parse_number("1e3") == 1000
    assert parse_number("twelve") is None
    assert parse_whole_number("7") == 7
    assert parse_whole_number("7.2") is None
    assert format_currency(1234567.891) == "NPR 1,234,567.89"
    assert format_lakhs(722051) == "NPR 7.2L"
