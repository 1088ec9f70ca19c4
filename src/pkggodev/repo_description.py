"""Short repository descriptions, read from the hosting provider's page.

Best effort only: an unknown host or any failure yields ``""``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from bs4 import BeautifulSoup
from loguru import logger

from .errors import DescriptionError, PkgGoDevError
from .http_client import HttpClient
from .models import GitHost, Package
from .urls import identify_git_host, normalize_repo_url

MAX_DESCRIPTION_CHARS = 500
TRUNCATION_MARKER = "..."


def _first_text(
    soup: BeautifulSoup,
    selector: str,
    accept: Callable[[str], bool] = bool,
) -> str:
    for node in soup.select(selector):
        text = node.get_text().strip()
        if accept(text):
            return text
    return ""


def github_description(soup: BeautifulSoup) -> str:
    # The about paragraph; the homepage link sits in a sibling f4 element.
    return _first_text(
        soup,
        "p[class*='f4']",
        lambda text: bool(text) and "http" not in text,
    )


def gitlab_description(soup: BeautifulSoup) -> str:
    return _first_text(soup, ".home-panel-description-markdown p")


def codeberg_description(soup: BeautifulSoup) -> str:
    return _first_text(soup, ".repo-description .description")


def sourcehut_description(soup: BeautifulSoup) -> str:
    # No description field; the first plausibly sized README paragraph.
    return _first_text(soup, ".blob-content p", lambda text: 10 < len(text) < 200)


_EXTRACTORS: dict[GitHost, Callable[[BeautifulSoup], str]] = {
    GitHost.GITHUB: github_description,
    GitHost.GITLAB: gitlab_description,
    GitHost.CODEBERG: codeberg_description,
    GitHost.SOURCEHUT: sourcehut_description,
}


def truncate_description(text: str) -> str:
    text = text.strip()
    if len(text) > MAX_DESCRIPTION_CHARS:
        return text[:MAX_DESCRIPTION_CHARS] + TRUNCATION_MARKER
    return text


class DescriptionResolver:
    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def describe(self, repo_url: str) -> str:
        if not repo_url:
            return ""

        url = normalize_repo_url(repo_url)
        host = identify_git_host(url)
        extractor = _EXTRACTORS.get(host)
        if extractor is None:
            logger.debug(f"no description rule for {url} ({host.value})")
            return ""

        try:
            soup = self._http.get_soup(url)
        except PkgGoDevError as e:
            logger.debug(f"description lookup failed for {url}: {e}")
            return ""
        return truncate_description(extractor(soup))

    def sprinkle(self, package: Package) -> Package:
        """Return ``package`` with its synopsis replaced by the repo description."""
        if not package.repository:
            raise DescriptionError("no repository URL available")

        description = self.describe(package.repository)
        if not description:
            raise DescriptionError("could not fetch description from repository")
        return replace(package, synopsis=description)
