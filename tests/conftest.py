"""Shared fixtures for research-sources tests."""
from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
import structlog

from research_sources.cache import MatchCache
from research_sources.logging import configure_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    """Rebind logging to the real stderr after tests that reconfigure it
    (e.g. CLI commands invoked under CliRunner's temporary streams), and drop
    loggers that module-level proxies cached while bound to such a stream."""
    yield
    configure_logging()
    for name, module in list(sys.modules.items()):
        if not name.startswith("research_sources"):
            continue
        for value in list(vars(module).values()):
            if isinstance(value, structlog._config.BoundLoggerLazyProxy):
                value.__dict__.pop("bind", None)


@pytest.fixture
def match_cache(tmp_path: Path):
    cache = MatchCache(tmp_path / "cache.sqlite")
    yield cache
    cache.close()


class RecordingTransport:
    """httpx MockTransport wrapper that remembers every request."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def json_transport():
    """Build a recording transport that answers with a fixed JSON body."""

    def _make(body: object, status_code: int = 200) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status_code, json=body))

    return _make
