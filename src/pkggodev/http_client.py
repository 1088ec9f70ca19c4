from __future__ import annotations

from dataclasses import dataclass

import requests
from bs4 import BeautifulSoup
from loguru import logger
from requests import exceptions as req_exc

from .errors import FetchError, NotFoundError
from .urls import normalize_url
from .user_agents import pick_user_agent


@dataclass(frozen=True)
class FetchResult:
    url: str
    status_code: int
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class HttpClient:
    """Single-attempt page fetcher.

    A 404 becomes ``NotFoundError``; any other error status or transport
    failure becomes ``FetchError`` carrying the requested URL.
    """

    def __init__(
        self,
        session: requests.Session,
        *,
        timeout_s: int = 45,
        user_agent: str | None = None,
    ) -> None:
        self._session = session
        self._timeout_s = timeout_s
        self._user_agent = user_agent or pick_user_agent()

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def get(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> FetchResult:
        normalized = normalize_url(url)
        req_headers = {"User-Agent": self._user_agent}
        if headers:
            req_headers.update(headers)

        logger.debug(f"GET {normalized}")
        try:
            resp = self._session.get(
                normalized, timeout=self._timeout_s, headers=req_headers
            )
        except req_exc.RequestException as e:
            raise FetchError(normalized, e) from e

        status = int(resp.status_code)
        if status == 404:
            raise NotFoundError(normalized)
        if status >= 400:
            raise FetchError(
                normalized,
                f"unexpected status {status}",
                status_code=status,
            )

        return FetchResult(
            url=normalized,
            status_code=status,
            body=resp.content,
        )

    def get_soup(self, url: str) -> BeautifulSoup:
        return BeautifulSoup(self.get(url).text, "html.parser")
