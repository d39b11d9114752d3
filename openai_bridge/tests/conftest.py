"""Pytest configuration for the bridge test suite.

Provides fixtures for capturing structured log events, building fake remotes
on top of ``httpx.MockTransport``, and a finalizer that closes the shared HTTP
client pool between tests.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Iterator, List

import httpx
import pytest

from openai_bridge.base.http import close_all_clients
from openai_bridge.base.logging import BASE_LOGGER_NAME, LOG_LEVEL_ENV, get_logger


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[dict] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            payload = {"msg": record.getMessage()}
        payload.setdefault("level", record.levelname)
        self.events.append(payload)


@pytest.fixture()
def log_events(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[dict]]:
    """Collect every structured event emitted through the ``bridge`` logger."""
    previous_level = get_logger(BASE_LOGGER_NAME).level
    # get_logger re-applies the env level on every call; pin it to DEBUG.
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    base = get_logger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    base.setLevel(logging.DEBUG)
    base.addHandler(handler)
    try:
        yield handler.events
    finally:
        base.removeHandler(handler)
        base.setLevel(previous_level)


@pytest.fixture()
def mock_http() -> Iterator[Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]]:
    """Return a factory building ``httpx.Client`` instances over a handler."""
    clients: List[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture(autouse=True)
def close_pooled_clients() -> Iterator[None]:
    """Close pooled clients after each test so no connection leaks across tests."""
    yield
    close_all_clients()
