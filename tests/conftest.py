"""Pytest configuration and fixtures.

Nothing here touches the network: ``FakeSession`` stands in for
``requests.Session`` and serves canned HTML keyed by URL.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable
from unittest.mock import MagicMock

import pytest
from loguru import logger

from pkggodev import Client, ClientConfig

BASE_URL = "https://pkg.go.dev"
FIXED_NOW = datetime(2024, 3, 15, 12, 0, 0)


class FakeSession:
    """Minimal ``requests.Session`` double.

    ``pages`` maps a URL to ``(status_code, html)``; ``fallback`` answers
    any URL not in ``pages``. Unknown URLs get a 404.
    """

    def __init__(
        self,
        pages: dict[str, tuple[int, str]] | None = None,
        fallback: Callable[[str], tuple[int, str]] | None = None,
    ) -> None:
        self.pages = dict(pages or {})
        self.fallback = fallback
        self.calls: list[str] = []
        self.headers_seen: list[dict[str, str]] = []

    def add(self, url: str, html: str, status: int = 200) -> None:
        self.pages[url] = (status, html)

    def get(self, url, timeout=None, headers=None):
        self.calls.append(url)
        self.headers_seen.append(dict(headers or {}))
        if url in self.pages:
            status, html = self.pages[url]
        elif self.fallback is not None:
            status, html = self.fallback(url)
        else:
            status, html = 404, "<html><body>not found</body></html>"

        resp = MagicMock()
        resp.status_code = status
        resp.url = url
        resp.headers = {"Content-Type": "text/html; charset=utf-8"}
        resp.content = html.encode("utf-8")
        return resp


@pytest.fixture(autouse=True)
def _reset_logger():
    """Drop sinks added by the CLI so they do not outlive captured streams."""
    yield
    logger.remove()


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def client(fake_session):
    config = ClientConfig(
        base_url=BASE_URL,
        session=fake_session,
        user_agent="pkggodev-tests",
        clock=lambda: FIXED_NOW,
    )
    return Client(config)
