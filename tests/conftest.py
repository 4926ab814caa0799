import pytest
from fastapi.testclient import TestClient

from notify_relay.core.config import Settings
from notify_relay.main import create_app
from notify_relay.services.dispatcher import DispatchResult
from notify_relay.services.store import RelayStore

ACTION_TTL = 30 * 60
SESSION_RETENTION = 24 * 60 * 60


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingDispatcher:
    def __init__(self, result: DispatchResult = DispatchResult.ok):
        self.result = result
        self.sent: list[tuple[str, str]] = []

    def send(self, terminal_handle: str, text: str) -> DispatchResult:
        self.sent.append((terminal_handle, text))
        return self.result


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return RelayStore(
        action_ttl_seconds=ACTION_TTL,
        session_retention_seconds=SESSION_RETENTION,
        decision_ttl_seconds=ACTION_TTL,
        clock=clock,
    )


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def settings():
    return Settings(push_topic="", remote_url="https://relay.example.net")


@pytest.fixture
def app(settings, store, dispatcher):
    return create_app(settings, store=store, dispatcher=dispatcher, run_sweeper=False)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def desktop_banners(monkeypatch):
    shown: list[tuple[str, str]] = []

    def record(title, message):
        shown.append((title, message))
        return True

    monkeypatch.setattr("notify_relay.hooks.cli.notify_desktop", record)
    return shown
