"""Shared fixtures for the AskLaw tests."""

from __future__ import annotations

import threading

import pytest

from app import create_app
from qa_config import Settings
from qa_store import QuestionStore


class EventRecorder:
    """Broadcaster listener that keeps every (event, payload) pair it sees."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []
        self._lock = threading.Lock()

    def __call__(self, event: str, payload: object) -> None:
        with self._lock:
            self.events.append((event, payload))


@pytest.fixture
def settings() -> Settings:
    return Settings(loglevel="WARNING")


@pytest.fixture
def store() -> QuestionStore:
    return QuestionStore()


@pytest.fixture
def recorder(store: QuestionStore) -> EventRecorder:
    """Records everything the store publishes."""
    return store.broadcaster.add_listener(EventRecorder())


@pytest.fixture
def app(settings: Settings, store: QuestionStore):
    flask_app = create_app(settings, store)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socketio(app):
    return app.extensions["socketio"]


def drain(recorder: EventRecorder) -> list[tuple[str, object]]:
    """Pop every recorded (event, payload) pair."""
    with recorder._lock:
        events, recorder.events = recorder.events, []
    return events


def received(sio_client) -> list[tuple[str, object]]:
    """(event, payload) pairs a Socket.IO test client got since the last call."""
    return [(pkt["name"], pkt["args"][0]) for pkt in sio_client.get_received()]
