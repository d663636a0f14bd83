"""Tests for the command-line interface"""

import csv
import json
import logging
from pathlib import Path

import pytest
from pythonjsonlogger.json import JsonFormatter

from fincalc.main import LOG_HANDLER_NAME, cli, setup_logging


def test_loan_types_lists_every_category(runner):
    result = runner.invoke(cli, ["loan-types"])

    assert result.exit_code == 0
    for name in ["home", "personal", "auto", "education", "business"]:
        assert name in result.output
    assert "5-30" in result.output


def test_emi_prints_summary_and_schedule(runner):
    result = runner.invoke(cli, ["emi", "-a", "10l", "-r", "12", "-t", "10"])

    assert result.exit_code == 0, result.output
    assert "Monthly EMI        : NPR 14,347.09" in result.output
    assert "Month\tPrincipal" in result.output
    assert "\n120\t" in result.output


def test_emi_without_schedule(runner):
    result = runner.invoke(cli, ["emi", "-a", "1000000", "-r", "12", "-t", "10", "--no-schedule"])

    assert result.exit_code == 0
    assert "Month\tPrincipal" not in result.output


def test_emi_defaults_follow_loan_type(runner):
    # Personal loans allow at most 7 years, so the 10 year default is clamped.
    result = runner.invoke(cli, ["emi", "--type", "personal", "--no-schedule"])

    assert result.exit_code == 0, result.output
    assert "Personal Loan summary" in result.output
    assert "Payments           : 84" in result.output


def test_emi_rejects_invalid_input(runner):
    result = runner.invoke(cli, ["emi", "-r", "60", "-t", "10", "--type", "personal"])

    assert result.exit_code == 2
    assert "interest_rate: Interest rate must be between 0% and 50%" in result.output
    assert "tenure_years: Tenure must be between 1 and 7 years for Personal Loan" in result.output


def test_emi_share_text(runner):
    result = runner.invoke(cli, ["emi", "-r", "12", "-t", "10", "--share"])

    assert result.exit_code == 0
    assert result.output.startswith("Home Loan EMI Analysis")


def test_emi_exports_json(runner):
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["emi", "-r", "12", "-t", "10", "--output", "loan.json"])
        assert result.exit_code == 0, result.output
        data = json.loads(Path("loan.json").read_text(encoding="utf-8"))

    assert data["summary"]["periodic_payment"] == pytest.approx(14347.09, abs=0.01)
    assert data["summary"]["loan"]["loan_type"] == "home"
    assert len(data["schedule"]) == 120
    assert data["schedule"][-1]["remaining_balance"] == 0


def test_emi_exports_csv(runner):
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["emi", "-r", "12", "-t", "10", "--output", "loan.csv"])
        assert result.exit_code == 0, result.output
        with open("loan.csv", newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

    assert len(rows) == 120
    assert rows[0]["period_index"] == "1"
    assert float(rows[0]["interest_component"]) == pytest.approx(10_000)


def test_emi_rejects_unknown_export_format(runner):
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["emi", "-r", "12", "-t", "10", "--output", "loan.xlsx"])

    assert result.exit_code == 2
    assert "use .json or .csv" in result.output


def test_emi_writes_report(runner):
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["emi", "-r", "12", "-t", "10", "--report", "report.txt"])
        assert result.exit_code == 0
        report = Path("report.txt").read_text(encoding="utf-8")

    assert report.startswith("LOAN EMI ANALYSIS REPORT")
    assert "Report written to report.txt" in result.output


def test_sip_defaults(runner):
    result = runner.invoke(cli, ["sip"])

    assert result.exit_code == 0, result.output
    assert "Monthly investment summary" in result.output
    assert "Total invested     : NPR 600,000.00" in result.output
    assert "Real value" in result.output
    # One breakdown row per year by default
    assert "\n10\t10\t" not in result.output
    assert "\n120\t10\t" in result.output


def test_sip_nominal_hides_real_figures(runner):
    result = runner.invoke(cli, ["sip", "--nominal"])

    assert result.exit_code == 0
    assert "Real value" not in result.output
    assert "RealValue" not in result.output


def test_sip_by_period(runner):
    result = runner.invoke(cli, ["sip", "--frequency", "quarterly", "-y", "2", "--by-period"])

    assert result.exit_code == 0
    assert "\n1\t1\t" in result.output
    assert "\n8\t2\t" in result.output


def test_sip_rejects_invalid_input(runner):
    result = runner.invoke(cli, ["sip", "-y", "41", "-r", "0"])

    assert result.exit_code == 2
    assert "years: Investment period must be between 1 and 40 years" in result.output
    assert "return_rate" in result.output


def test_sip_exports_json_and_report(runner):
    with runner.isolated_filesystem():
        result = runner.invoke(cli, ["sip", "--output", "sip.json", "--report", "sip.txt"])
        assert result.exit_code == 0, result.output
        data = json.loads(Path("sip.json").read_text(encoding="utf-8"))
        report = Path("sip.txt").read_text(encoding="utf-8")

    assert data["summary"]["total_invested"] == 600_000
    assert data["summary"]["investment"]["frequency"] == "monthly"
    assert len(data["schedule"]) == 120
    assert report.startswith("SIP INVESTMENT ANALYSIS REPORT")


def test_log_level_from_environment(runner):
    result = runner.invoke(cli, ["--log-json", "loan-types"], env={"FINCALC_LOG_LEVEL": "debug"})
    assert result.exit_code == 0


def test_setup_logging_json_formatter():
    setup_logging("info", json_format=True)
    handlers = [h for h in logging.getLogger().handlers if h.get_name() == LOG_HANDLER_NAME]

    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JsonFormatter)
    assert logging.getLogger().level == logging.INFO
