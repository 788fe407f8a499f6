"""Shared test fixtures for UPI fraud detector tests."""

import os

# Tests exercise the local path unless they configure an endpoint themselves
os.environ["SCORING_ENDPOINT"] = ""

import pytest  # noqa: E402
from structlog.testing import capture_logs  # noqa: E402

from upi_fraud.domains.fraud.config import FraudConfig  # noqa: E402
from upi_fraud.domains.fraud.models import TransactionRequest  # noqa: E402


@pytest.fixture(autouse=True)
def captured_logs():
    """Keep structlog output out of stdout and expose it to tests."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def fraud_config() -> FraudConfig:
    return FraudConfig()


def make_request(**kwargs) -> TransactionRequest:
    defaults = {
        "amount": 1500.0,
        "timestamp": "2026-01-15T12:00:00",
        "payer_id": "u_12345",
        "payee_id": "m_67890",
        "device_id": "dev-abc123",
        "txn_count_last_hour": 1,
    }
    defaults.update(kwargs)
    return TransactionRequest(**defaults)


@pytest.fixture
def sample_wire_request() -> dict:
    return {
        "amount": 13000,
        "timestamp": "2026-01-15T02:00:00",
        "payer_id": "u_12345",
        "payee_id": "m_67890",
        "device_id": "dev-abc123",
        "geo_lat": 17.6868,
        "geo_lon": 83.2185,
        "txnCountLastHour": 6,
        "avgTicketLast7d": 850,
    }
