"""Pytest fixtures for testing"""

import logging

import pytest
from click.testing import CliRunner

from fincalc.data_models import Frequency, InvestmentInput, LoanInput, LoanType
from fincalc.main import LOG_HANDLER_NAME
from fincalc_web.app import app


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; undo that after every test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in [h for h in root.handlers if h.get_name() == LOG_HANDLER_NAME]:
        root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def default_loan() -> LoanInput:
    """1,000,000 at 12 % over 10 years with a 1 % fee"""
    return LoanInput(
        principal=1_000_000,
        annual_rate_percent=12,
        tenure_years=10,
        processing_fee_percent=1,
        loan_type=LoanType.HOME,
    )


@pytest.fixture
def default_investment() -> InvestmentInput:
    """5,000 a month for 10 years at 12 % with 6 % inflation"""
    return InvestmentInput(
        periodic_contribution=5000,
        tenure_years=10,
        annual_return_rate_percent=12,
        annual_inflation_rate_percent=6,
        frequency=Frequency.MONTHLY,
    )


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def client():
    """Flask test client"""
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
