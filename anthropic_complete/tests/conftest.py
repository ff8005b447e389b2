"""Shared fixtures for the completion client test suite.

- Isolates every test from ``ANTHROPIC_*`` variables in the developer's shell.
- Provides a :class:`ScriptedTransport`, a fixed :class:`ClientConfig` and a
  client wired to both.
- ``log_events`` attaches a collecting handler to the shared logger (it does
  not propagate to the root logger, so ``caplog`` cannot see its records).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List, Optional

import pytest

from anthropic_complete import ClientConfig, CompletionClient
from anthropic_complete.base.logging import BASE_LOGGER_NAME, get_logger
from anthropic_complete.mock import ScriptedTransport

_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_BASE_URL",
    "ANTHROPIC_MODEL",
    "ANTHROPIC_TIMEOUT_SECONDS",
    "ANTHROPIC_COMPLETE_CONFIG_FILE",
    "ANTHROPIC_COMPLETE_LOG_LEVEL",
)

TEST_KEY = "sk-test-key"
TEST_BASE_URL = "https://api.test"


@pytest.fixture(scope="session", autouse=True)
def init_logging() -> None:
    """Create the console handler once, bound to the session-wide stderr.

    A handler first created inside a ``capsys`` test would keep writing to
    that test's (later closed) capture stream.
    """
    get_logger(BASE_LOGGER_NAME)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(api_key=TEST_KEY, base_url=TEST_BASE_URL)


@pytest.fixture()
def transport() -> Iterator[ScriptedTransport]:
    t = ScriptedTransport()
    yield t
    t.close()


@pytest.fixture()
def client(transport: ScriptedTransport, config: ClientConfig) -> CompletionClient:
    return CompletionClient(transport, config)


class _CollectingHandler(logging.Handler):
    """Keeps every record emitted on the shared logger."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self, name: Optional[str] = None) -> List[Dict[str, Any]]:
        """Decoded event payloads (``_level`` added), optionally filtered by event name."""
        out = []
        for r in self.records:
            payload = json.loads(r.getMessage())
            payload["_level"] = r.levelno
            if name is None or payload.get("event") == name:
                out.append(payload)
        return out

    def names(self) -> List[str]:
        return [e["event"] for e in self.events()]


@pytest.fixture()
def log_events() -> Iterator[_CollectingHandler]:
    logger = get_logger(BASE_LOGGER_NAME)
    handler = _CollectingHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(previous)

