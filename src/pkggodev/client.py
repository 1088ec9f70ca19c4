from __future__ import annotations

import requests
from bs4 import BeautifulSoup

from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S, ClientConfig
from .errors import ErrorList, PkgGoDevError
from .http_client import HttpClient
from .imported_by import extract_imported_by
from .models import ImportedBy, Imports, License, Package, SearchResults, Versions
from .package_page import extract_package
from .repo_description import DescriptionResolver
from .search import SearchPaginator
from .urls import package_url, search_url
from .versions import extract_versions


class Client:
    """Read-only pkg.go.dev client.

    Every call fetches its own pages and keeps its state local, so one
    client can serve concurrent callers. Failures are raised as ``ErrorList``;
    check ``ErrorList.not_found`` for a missing package.
    """

    def __init__(self, config: ClientConfig | None = None) -> None:
        self.config = config or ClientConfig()
        self._http = HttpClient(
            self.config.session,
            timeout_s=self.config.timeout_s,
            user_agent=self.config.user_agent,
        )
        self._descriptions = DescriptionResolver(self._http)

    @classmethod
    def create(
        cls,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
        timeout_s: int = DEFAULT_TIMEOUT_S,
        user_agent: str | None = None,
    ) -> Client:
        return cls(
            ClientConfig(
                base_url=base_url,
                session=session or requests.Session(),
                timeout_s=timeout_s,
                user_agent=user_agent,
            )
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _fetch(self, url: str) -> BeautifulSoup:
        try:
            return self._http.get_soup(url)
        except PkgGoDevError as e:
            raise ErrorList([e]) from e

    def describe_package(self, package: str) -> Package:
        soup = self._fetch(package_url(self.base_url, package))
        errors = ErrorList()
        result = extract_package(
            soup,
            package=package,
            base_url=self.base_url,
            now=self.config.clock(),
            errors=errors,
        )
        errors.raise_if_any(partial=result)
        return result

    def versions(self, package: str) -> Versions:
        soup = self._fetch(package_url(self.base_url, package, tab="versions"))
        errors = ErrorList()
        found = extract_versions(soup, now=self.config.clock(), errors=errors)
        result = Versions(package=package, versions=tuple(found))
        errors.raise_if_any(partial=result)
        return result

    def search(self, query: str, limit: int) -> SearchResults:
        paginator = SearchPaginator(
            lambda page: self._http.get_soup(search_url(self.base_url, query, page)),
            now=self.config.clock(),
        )
        return paginator.collect(limit)

    def imported_by(self, package: str) -> ImportedBy:
        soup = self._fetch(package_url(self.base_url, package, tab="importedby"))
        return extract_imported_by(soup, package=package)

    def imports(self, package: str) -> Imports | None:
        # Declared for interface stability; not scraped yet.
        return None

    def licenses(self, package: str) -> list[License] | None:
        return None

    def describe_repository(self, repo_url: str) -> str:
        return self._descriptions.describe(repo_url)

    def sprinkle(self, package: Package) -> Package:
        return self._descriptions.sprinkle(package)
