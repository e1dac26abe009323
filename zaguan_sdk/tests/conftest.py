"""Pytest configuration for the SDK test suite.

Isolates every test from the developer's environment (``ZAGUAN_*`` variables,
``.env`` files, config files) and provides a deterministic clock and a log
record capture bound to the ``zaguan`` logger.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from zaguan_sdk.base.http import close_all_clients
from zaguan_sdk.base.logging import LOG_LEVEL_ENV, get_logger
from zaguan_sdk.config import reset_config_cache
from zaguan_sdk.config.env import CONFIG_FILE_ENV, ENV_MAP

from .helpers import FakeClock


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Clear config env vars and point the .env loader at an empty location."""
    for name in ENV_MAP.values():
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture(scope="session", autouse=True)
def close_clients_after_session() -> Iterator[None]:
    yield
    close_all_clients()


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def log_capture(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[logging.LogRecord]]:
    """Collect records emitted under the ``zaguan`` logger at DEBUG and above.

    The level is pinned through ``ZAGUAN_LOG_LEVEL`` so loggers created later
    in the test (e.g. by a new client) keep it.
    """
    logger = logging.getLogger("zaguan")
    previous = logger.level
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    get_logger()
    records: List[logging.LogRecord] = []
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = lambda record: records.append(record)  # type: ignore[method-assign]
    logger.addHandler(handler)
    try:
        yield records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)
