"""
Pytest fixtures for the commodity kernel test suite.

Provides:
- Structured logging configured for every test session
- Log capture as parsed JSON dicts
- The reference and base-rate exchange tables used across suites
"""

import json
import logging
from datetime import UTC, date, datetime
from decimal import Decimal
from io import StringIO

import pytest

from commodity_kernel.domain.clock import DeterministicClock
from commodity_kernel.domain.exchange_rate import ExchangeRate
from commodity_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


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
    Capture commodity_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            rates.convert(commodity, "NZD")
            logs = captured_logs()
            assert any(r["message"] == "exchange_rate_convert" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("commodity_kernel")
    previous_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Exchange rate fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(datetime(2020, 2, 7, 9, 30, 0, tzinfo=UTC))


@pytest.fixture
def reference_rates() -> ExchangeRate:
    """Reference rates with no base type."""
    return ExchangeRate(
        date=date(2020, 2, 7),
        base=None,
        rates={"AUD": Decimal("1.6417"), "NZD": Decimal("1.7094")},
    )


@pytest.fixture
def usd_base_rates() -> ExchangeRate:
    """Rates from one US dollar."""
    return ExchangeRate(
        date=date(2020, 2, 7),
        base="USD",
        rates={"NOK": Decimal("9.2691220713"), "GEL": Decimal("3.08")},
    )
