"""
Pytest configuration and fixtures.
"""
import os

import pytest

from visit_store.models.visit import VisitInput


@pytest.fixture(scope="session", autouse=True)
def aws_credentials():
    """Mock AWS credentials for testing."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def mock_env(monkeypatch):
    """Set up environment variables for tests."""
    monkeypatch.setenv('VISITS_TABLE_NAME', 'Visits-test')
    monkeypatch.setenv('VISITS_LIMIT', '100')
    monkeypatch.setenv('VISITS_BACKEND', 'memory')
    monkeypatch.setenv('AWS_REGION', 'us-east-1')
    monkeypatch.setenv('LOG_LEVEL', 'INFO')


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


class SequentialIds:
    """Deterministic identifier source."""

    def __init__(self, prefix: str = 'visit'):
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f'{self.prefix}-{self.count}'


@pytest.fixture
def clock():
    """Fake clock starting at a fixed time."""
    return FakeClock()


@pytest.fixture
def ids():
    """Sequential visit ids."""
    return SequentialIds()


@pytest.fixture
def playback_order_visit():
    """Visit to the playback-order component page."""
    return VisitInput(
        entity_ref='component:default/playback-order',
        pathname='/catalog/default/component/playback-order',
        name='Playback Order'
    )
