from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class GitHost(str, Enum):
    UNKNOWN = "unknown"
    GITHUB = "github"
    GITLAB = "gitlab"
    CODEBERG = "codeberg"
    SOURCEHUT = "sourcehut"


@dataclass(frozen=True)
class Image:
    alt: str
    url: str


@dataclass(frozen=True)
class Package:
    package: str
    is_module: bool = False
    is_package: bool = False
    is_command: bool = False
    version: str = ""
    published: str = ""  # YYYY-MM-DD
    license: str = ""
    # Positional: the order of the UnitMeta checklist on the page.
    has_valid_go_mod_file: bool = False
    has_redistributable_license: bool = False
    has_tagged_version: bool = False
    has_stable_version: bool = False
    repository: str = ""
    synopsis: str = ""
    images: tuple[Image, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Version:
    major_version: str = ""
    full_version: str = ""
    date: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Versions:
    package: str
    versions: tuple[Version, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "package": self.package,
            "versions": [v.to_dict() for v in self.versions],
        }


@dataclass(frozen=True)
class SearchResult:
    package: str = ""
    version: str = ""
    published: str = ""
    imported_by: int = 0
    license: str = ""
    synopsis: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SearchResults:
    results: tuple[SearchResult, ...] = ()

    def __len__(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict[str, Any]:
        return {"results": [r.to_dict() for r in self.results]}


@dataclass(frozen=True)
class ImportedBy:
    package: str
    imported_by: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"package": self.package, "imported_by": list(self.imported_by)}


@dataclass(frozen=True)
class Imports:
    package: str
    imports: tuple[str, ...] = ()
    # (module, packages imported from it) pairs, in page order.
    module_imports: tuple[tuple[str, tuple[str, ...]], ...] = ()
    standard_library_imports: tuple[str, ...] = ()


@dataclass(frozen=True)
class License:
    name: str
    source: str
    full_text: str
