"""Tests for src/pkggodev/http_client.py, urls.py and user_agents.py."""

import random
from unittest.mock import MagicMock

import pytest
import requests

from conftest import FakeSession
from pkggodev import Client
from pkggodev.config import ClientConfig
from pkggodev.errors import FetchError, NotFoundError
from pkggodev.http_client import HttpClient
from pkggodev.urls import absolute_url, normalize_url, package_url, search_url
from pkggodev.user_agents import CHROME_USER_AGENTS, pick_user_agent

URL = "https://pkg.go.dev/github.com/a/b"


class TestHttpClient:
    def test_ok(self):
        session = FakeSession({URL: (200, "<p>hi</p>")})
        result = HttpClient(session, user_agent="ua").get(URL)
        assert result.url == URL
        assert result.status_code == 200
        assert result.text == "<p>hi</p>"
        assert session.headers_seen == [{"User-Agent": "ua"}]

    def test_extra_headers_are_merged(self):
        session = FakeSession({URL: (200, "")})
        HttpClient(session, user_agent="ua").get(URL, headers={"Accept": "text/html"})
        assert session.headers_seen[0] == {"User-Agent": "ua", "Accept": "text/html"}

    def test_default_user_agent_is_chrome(self):
        assert HttpClient(FakeSession()).user_agent in CHROME_USER_AGENTS

    def test_404_is_not_found(self):
        with pytest.raises(NotFoundError) as exc_info:
            HttpClient(FakeSession()).get(URL)
        assert exc_info.value.url == URL

    def test_error_status(self):
        session = FakeSession({URL: (500, "oops")})
        with pytest.raises(FetchError) as exc_info:
            HttpClient(session).get(URL)
        assert exc_info.value.status_code == 500
        assert URL in str(exc_info.value)

    def test_transport_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(FetchError, match="refused") as exc_info:
            HttpClient(session).get(URL)
        assert exc_info.value.status_code is None

    def test_timeout_is_passed(self):
        session = MagicMock()
        session.get.return_value.status_code = 200
        session.get.return_value.headers = {}
        session.get.return_value.content = b""
        HttpClient(session, timeout_s=7).get(URL)
        assert session.get.call_args.kwargs["timeout"] == 7

    def test_get_soup(self):
        session = FakeSession({URL: (200, "<h1 class='t'>x</h1>")})
        soup = HttpClient(session).get_soup(URL)
        assert soup.select_one(".t").get_text() == "x"


class TestUrls:
    def test_normalize_url(self):
        raw = "HTTPS://PKG.go.dev/Path#frag"
        assert normalize_url(raw) == "https://pkg.go.dev/Path"

    def test_package_url(self):
        assert package_url("https://pkg.go.dev", "github.com/a/b") == URL

    def test_package_url_with_tab(self):
        assert (
            package_url("https://pkg.go.dev", "github.com/a/b", tab="versions")
            == URL + "?tab=versions"
        )

    def test_package_url_keeps_version_suffix(self):
        assert package_url("https://x", "golang.org/x/net@v0.1.0") == (
            "https://x/golang.org/x/net@v0.1.0"
        )

    def test_search_url(self):
        assert search_url("https://pkg.go.dev", "a&b c", 3) == (
            "https://pkg.go.dev/search?q=a%26b+c&page=3"
        )

    @pytest.mark.parametrize(
        "src, expected",
        [
            ("https://cdn.example.com/a.png", "https://cdn.example.com/a.png"),
            ("/static/a.png", "https://pkg.go.dev/static/a.png"),
            ("img/a.png", "https://pkg.go.dev/img/a.png"),
        ],
    )
    def test_absolute_url(self, src, expected):
        assert absolute_url("https://pkg.go.dev", src) == expected


class TestConfig:
    def test_trailing_slash_stripped(self):
        assert ClientConfig(base_url="https://pkg.go.dev/").base_url == (
            "https://pkg.go.dev"
        )

    def test_defaults(self):
        config = ClientConfig()
        assert config.base_url == "https://pkg.go.dev"
        assert config.timeout_s == 45
        assert isinstance(config.session, requests.Session)

    def test_client_create(self):
        session = FakeSession(
            {"https://mirror.example.com/a/b?tab=importedby": (200, "")}
        )
        client = Client.create(
            base_url="https://mirror.example.com/",
            session=session,
            timeout_s=5,
            user_agent="ua",
        )
        assert client.base_url == "https://mirror.example.com"
        assert client.config.timeout_s == 5
        assert client.imported_by("a/b").imported_by == ()
        assert session.headers_seen == [{"User-Agent": "ua"}]

    def test_client_create_defaults(self):
        client = Client.create()
        assert client.base_url == "https://pkg.go.dev"
        assert isinstance(client.config.session, requests.Session)


class TestUserAgents:
    def test_pick_is_from_pool(self):
        assert pick_user_agent(random.Random(1)) in CHROME_USER_AGENTS

    def test_all_are_chrome(self):
        assert all("Chrome/" in ua for ua in CHROME_USER_AGENTS)
