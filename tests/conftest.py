"""
Pytest fixtures for the beancount kernel test suite.

Provides:
- Structured logging configured for the whole session
- ``captured_logs`` for asserting on emitted log lines
- Shared document-model fixtures (builders live in tests/builders.py)
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from beancount_kernel.domain import Account, AccountType, Amount, Date, Posting, Transaction
from beancount_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from tests.builders import account, units


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture beancount_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            render(sink, ledger)
            logs = captured_logs()
            assert any(r["message"] == "ledger_render_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("beancount_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Document-model fixtures
# =============================================================================


@pytest.fixture
def cash_account() -> Account:
    return Account.of(AccountType.ASSETS, "Cash")


@pytest.fixture
def mogador_transaction() -> Transaction:
    """The two-posting restaurant transaction used across render tests."""
    return Transaction(
        date=Date("2014-05-05"),
        payee="Cafe Mogador",
        narration="Lamb tagine with wine",
        postings=(
            Posting(
                account=account("Liabilities:CreditCard:CapitalOne"),
                units=units("-37.45", "USD"),
            ),
            Posting(account=account("Expenses:Restaurant")),
        ),
    )


@pytest.fixture
def usd_100() -> Amount:
    return Amount(Decimal("100.00"), "USD")
