from __future__ import annotations

from bs4 import BeautifulSoup

from .models import ImportedBy


def extract_imported_by(soup: BeautifulSoup, *, package: str) -> ImportedBy:
    # Order and duplicates are kept as the page lists them.
    names = [node.get_text().strip() for node in soup.select(".u-breakWord")]
    return ImportedBy(package=package, imported_by=tuple(names))
