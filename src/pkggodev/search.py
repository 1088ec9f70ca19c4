"""Search result pages (``/search?q=...&page=N``).

``parse_search_page`` turns one page into results plus a continuation
decision; ``SearchPaginator`` drives the page loop.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from bs4 import BeautifulSoup, Tag
from loguru import logger

from .dates import normalize_date
from .errors import ErrorList, NormalizationError, PkgGoDevError
from .models import SearchResult, SearchResults

# Hard ceiling on fetched pages, whatever the continuation signals say.
MAX_SEARCH_PAGES = 10

_SUMMARY_RE = re.compile(
    r"(\d[\d,]*)\s*[-–—]\s*(\d[\d,]*)\s+of\s+(\d[\d,]*)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ResultRange:
    first: int
    last: int
    total: int


@dataclass(frozen=True)
class SearchPage:
    results: list[SearchResult]
    has_more: bool


def _to_int(text: str) -> int:
    return int(text.replace(",", ""))


def parse_result_range(text: str) -> ResultRange | None:
    match = _SUMMARY_RE.search(text)
    if match is None:
        return None
    return ResultRange(
        first=_to_int(match.group(1)),
        last=_to_int(match.group(2)),
        total=_to_int(match.group(3)),
    )


def _text(node: Tag | None) -> str:
    return node.get_text().strip() if node is not None else ""


def _snippet_version(info: Tag) -> str:
    spans = [
        " ".join(child.get_text().split())
        for child in info.find_all("span", recursive=False)
    ]
    for text in spans:
        if " published on " in text:
            return text.split(" published on ", 1)[0].strip()
    return "".join(spans).split(" published on ", 1)[0].strip()


def _imported_by_count(info: Tag) -> int:
    text = _text(info.select_one("a[href*='tab=importedby'] strong"))
    try:
        return _to_int(text)
    except ValueError:
        return 0


def _snippet_license(info: Tag) -> str:
    license_ = _text(info.select_one("[data-test-id=snippet-license] a"))
    if not license_:
        license_ = _text(info.select_one("[data-test-id=snippet-license]"))
    return license_


def parse_snippet(
    snippet: Tag,
    *,
    now: datetime,
    errors: ErrorList,
) -> SearchResult:
    package = _text(snippet.select_one(".SearchSnippet-headerContainer a"))
    synopsis = _text(snippet.select_one(".SearchSnippet-synopsis"))

    info = snippet.select_one(".SearchSnippet-infoLabel")
    if info is None:
        return SearchResult(package=package, synopsis=synopsis)

    published_raw = _text(
        info.select_one("[data-test-id=snippet-published] strong")
    )
    try:
        published = normalize_date(published_raw, now=now)
    except NormalizationError as e:
        errors.append(e)
        published = published_raw

    return SearchResult(
        package=package,
        version=_snippet_version(info),
        published=published,
        imported_by=_imported_by_count(info),
        license=_snippet_license(info),
        synopsis=synopsis,
    )


def parse_search_page(
    soup: BeautifulSoup,
    *,
    collected: int,
    limit: int,
    now: datetime,
    errors: ErrorList,
) -> SearchPage:
    """Extract results from one page and decide whether to fetch the next.

    ``collected`` is how many results earlier pages already produced; no
    more than ``limit - collected`` results are taken from this page.
    """

    snippets: list[Tag] = []
    for container in soup.select(".SearchResults"):
        snippets.extend(container.select(".SearchSnippet"))

    results: list[SearchResult] = []
    for snippet in snippets:
        if collected + len(results) >= limit:
            break
        results.append(parse_snippet(snippet, now=now, errors=errors))

    summary = soup.select_one(".SearchResults-summary")
    result_range = parse_result_range(summary.get_text(" ")) if summary else None
    if result_range is not None:
        has_more = (
            result_range.last < limit and result_range.last < result_range.total
        )
    else:
        has_more = bool(snippets)

    if collected + len(results) >= limit:
        has_more = False
    return SearchPage(results=results, has_more=has_more)


class SearchPaginator:
    def __init__(
        self,
        fetch_page: Callable[[int], BeautifulSoup],
        *,
        now: datetime,
        max_pages: int = MAX_SEARCH_PAGES,
    ) -> None:
        self._fetch_page = fetch_page
        self._now = now
        self._max_pages = max_pages

    def collect(self, limit: int) -> SearchResults:
        """Fetch pages until ``limit`` results, no more pages, or the ceiling.

        Raises ``ErrorList`` if any page or result failed; partial results
        are only reachable through ``ErrorList.partial``.
        """

        errors = ErrorList()
        results: list[SearchResult] = []
        page = 1

        while len(results) < limit and page <= self._max_pages:
            try:
                soup = self._fetch_page(page)
            except PkgGoDevError as e:
                errors.append(e)
                break

            parsed = parse_search_page(
                soup,
                collected=len(results),
                limit=limit,
                now=self._now,
                errors=errors,
            )
            results.extend(parsed.results)
            logger.debug(
                f"search page {page}: {len(parsed.results)} results "
                f"(total {len(results)}/{limit}, more={parsed.has_more})"
            )
            if not parsed.has_more:
                break
            page += 1

        collected = SearchResults(results=tuple(results))
        errors.raise_if_any(partial=collected)
        return collected
