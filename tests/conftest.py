from __future__ import annotations

import os
from collections.abc import AsyncIterator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from webhook_relay.config import get_settings
from webhook_relay.main import app
from webhook_relay.relay.forwarder import set_http_client

_RELAY_ENV = {"RELAY_ROUTES_JSON", "RELAY_ROUTES", "RELAY_TARGETS", "TARGET_TIMEOUT_MS", "PORT"}


class RecordingUpstream:
    """MockTransport handler that remembers every outbound request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.error: Callable[[httpx.Request], Exception] | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        return httpx.Response(self.status_code, json={"received": True})

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no outbound request was made"
        return self.requests[-1]


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in list(os.environ):
        if name in _RELAY_ENV or name.startswith("RELAY_TARGET_"):
            monkeypatch.delenv(name)
    # Keep a developer's .env out of the settings.
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()

    yield

    set_http_client(None)
    get_settings.cache_clear()


@pytest.fixture
def relay_env(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    def _set(**env: str) -> None:
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        get_settings.cache_clear()

    return _set


@pytest.fixture
def upstream() -> RecordingUpstream:
    recorder = RecordingUpstream()
    set_http_client(httpx.AsyncClient(transport=httpx.MockTransport(recorder)))
    return recorder


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
