"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
from typing import Callable

import httpx
import pytest

from adapters.tinyurl import TinyUrlShortener
from core.config import AppSettings

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep SHORTURL_* variables and stray .env files out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("SHORTURL_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_shortener(settings, requests_seen):
    """Build a `TinyUrlShortener` whose network is `handler`."""

    def _make(handler: Handler, app_settings: AppSettings | None = None) -> TinyUrlShortener:
        def recording(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        return TinyUrlShortener(
            app_settings or settings,
            transport=httpx.MockTransport(recording),
        )

    return _make


@pytest.fixture
def tinyurl_service():
    """Handler emulating TinyURL: creates aliases and redirects them back."""

    by_long: dict[str, str] = {}
    by_short: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api-create.php":
            long_url = request.url.params["url"]
            if long_url not in by_long:
                short = f"https://tinyurl.com/abc{len(by_long) + 123}"
                by_long[long_url] = short
                by_short[short] = long_url
            return httpx.Response(200, text=by_long[long_url])
        target = by_short.get(str(request.url))
        if target is not None:
            return httpx.Response(301, headers={"Location": target})
        return httpx.Response(200)

    return handler
