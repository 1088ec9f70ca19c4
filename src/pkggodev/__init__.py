"""pkggodev core library.

A read-only client for pkg.go.dev: package metadata, version history,
search results and reverse imports, extracted from the rendered HTML pages
since the site has no API.
"""

from __future__ import annotations

from .client import Client
from .config import ClientConfig
from .dates import normalize_date
from .errors import (
    DescriptionError,
    ErrorList,
    FetchError,
    NormalizationError,
    NotFoundError,
    PkgGoDevError,
    UnknownUnitError,
    UnparseableDateError,
)
from .models import (
    GitHost,
    Image,
    ImportedBy,
    Imports,
    License,
    Package,
    SearchResult,
    SearchResults,
    Version,
    Versions,
)

__all__ = [
    "__version__",
    "Client",
    "ClientConfig",
    "DescriptionError",
    "ErrorList",
    "FetchError",
    "GitHost",
    "Image",
    "ImportedBy",
    "Imports",
    "License",
    "NormalizationError",
    "NotFoundError",
    "Package",
    "PkgGoDevError",
    "SearchResult",
    "SearchResults",
    "UnknownUnitError",
    "UnparseableDateError",
    "Version",
    "Versions",
    "normalize_date",
]

__version__ = "0.1.0"
