"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest

from ioc_console.auth.credentials import build_demo_identity
from ioc_console.auth.session import SessionProvider
from ioc_console.auth.token_store import MemoryTokenStore
from ioc_console.models.ioc import IoC
from ioc_console.repository.memory import InMemoryIoCRepository

TEST_SECRET = "test-secret-key"


def _make_payload(**overrides) -> dict:
    """A valid create payload (wire names) with optional overrides."""
    payload = {
        "type": "ip",
        "value": "10.0.0.5",
        "description": "test",
        "source": "unit-test",
        "reporter": "tester",
        "reporterEmail": "t@example.com",
    }
    payload.update(overrides)
    return payload


def _make_ioc(
    ioc_id="1",
    ioc_type="ip",
    value="10.0.0.1",
    severity="high",
    status="pending",
    reporter="alice",
    date_reported=None,
    **extra,
) -> IoC:
    """Build a stored IoC record directly, bypassing the repository."""
    fields = {
        "description": f"indicator {ioc_id}",
        "source": "unit-test",
        "reporter_email": "alice@example.com",
        "tags": ["malware"],
        "tlp": "green",
        "confidence": 50,
    }
    fields.update(extra)
    return IoC(
        id=ioc_id,
        ioc_type=ioc_type,
        value=value,
        severity=severity,
        status=status,
        reporter=reporter,
        date_reported=date_reported or datetime(2024, 7, 1, 12, 0, tzinfo=timezone.utc),
        **fields,
    )


@pytest.fixture
def make_payload():
    """Factory for valid create payloads."""
    return _make_payload


@pytest.fixture
def make_ioc():
    """Factory for stored IoC records."""
    return _make_ioc


@pytest.fixture
def repository():
    """Empty repository without simulated latency."""
    return InMemoryIoCRepository()


@pytest.fixture(scope="session")
def identity():
    """Demo verifier and directory with cheap bcrypt rounds."""
    return build_demo_identity(rounds=4)


@pytest.fixture
def token_store():
    return MemoryTokenStore()


@pytest.fixture
def session_provider(identity, token_store):
    verifier, directory = identity
    return SessionProvider(verifier, directory, token_store, secret_key=TEST_SECRET)

