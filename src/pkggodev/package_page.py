"""Field extraction for the main package page (``/{package}``).

Each rule reads one field from one anchor. A missing anchor leaves the
field at its zero value; only the published date and the module/package
classification can record errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from bs4 import BeautifulSoup, Tag

from .dates import normalize_date
from .errors import ErrorList, NormalizationError, PageShapeError
from .models import Image, Package
from .urls import absolute_url

# Index into the UnitMeta checklist -> Package field.
BADGE_FIELDS: tuple[str, ...] = (
    "has_valid_go_mod_file",
    "has_redistributable_license",
    "has_tagged_version",
    "has_stable_version",
)


def first_child_text(node: Tag) -> str:
    child = node.find(True, recursive=False)
    if child is None:
        return ""
    return child.get_text()


@dataclass
class _PackageDraft:
    package: str
    is_module: bool = False
    is_package: bool = False
    is_command: bool = False
    version: str = ""
    published: str = ""
    license: str = ""
    badges: list[bool] = field(default_factory=lambda: [False] * len(BADGE_FIELDS))
    repository: str = ""
    synopsis: str = ""
    images: list[Image] = field(default_factory=list)

    def freeze(self) -> Package:
        badges = dict(zip(BADGE_FIELDS, self.badges))
        return Package(
            package=self.package,
            is_module=self.is_module,
            is_package=self.is_package,
            is_command=self.is_command,
            version=self.version,
            published=self.published,
            license=self.license,
            repository=self.repository,
            synopsis=self.synopsis,
            images=tuple(self.images),
            **badges,
        )


def _read_version(soup: BeautifulSoup, draft: _PackageDraft) -> None:
    for node in soup.select("[data-test-id=UnitHeader-version]"):
        text = first_child_text(node).strip()
        if text.startswith("Version: "):
            text = text[len("Version: ") :]
        draft.version = text.strip()


def _read_license(soup: BeautifulSoup, draft: _PackageDraft) -> None:
    for node in soup.select("[data-test-id=UnitHeader-licenses]"):
        draft.license = first_child_text(node).strip()


def _read_badges(soup: BeautifulSoup, draft: _PackageDraft) -> None:
    for meta in soup.select(".UnitMeta"):
        for i, item in enumerate(meta.find_all("li")):
            if i >= len(BADGE_FIELDS):
                break
            draft.badges[i] = item.select_one("img[alt=checked]") is not None


def _read_repository(soup: BeautifulSoup, draft: _PackageDraft) -> None:
    for node in soup.select(".UnitMeta-repo"):
        draft.repository = first_child_text(node).strip()


def _read_published(
    soup: BeautifulSoup,
    draft: _PackageDraft,
    *,
    now: datetime,
    errors: ErrorList,
) -> None:
    for node in soup.select("[data-test-id=UnitHeader-commitTime]"):
        text = node.get_text().strip()
        if text.startswith("Published: "):
            text = text[len("Published: ") :]
        try:
            draft.published = normalize_date(text, now=now)
        except NormalizationError as e:
            errors.append(e)


def _read_kind(
    soup: BeautifulSoup,
    draft: _PackageDraft,
    *,
    errors: ErrorList,
) -> None:
    for heading in soup.select(".UnitHeader-titleHeading"):
        label_node = heading.find_next_sibling()
        while True:
            label = label_node.get_text().strip() if label_node is not None else ""
            if label == "command":
                draft.is_command = True
            elif label == "package":
                draft.is_package = True
            elif label == "module":
                draft.is_module = True
            else:
                if not draft.is_package and not draft.is_module:
                    errors.append(
                        PageShapeError(
                            f"IsPackage=false after parsing page for "
                            f"'{draft.package}', this probably indicates a "
                            "parsing bug"
                        )
                    )
                break
            label_node = label_node.find_next_sibling()


def _read_images(
    soup: BeautifulSoup,
    draft: _PackageDraft,
    *,
    base_url: str,
) -> None:
    for img in soup.select(".UnitReadme-content img"):
        alt = str(img.get("alt") or "")
        src = str(img.get("src") or "")
        draft.images.append(Image(alt=alt, url=absolute_url(base_url, src)))


def extract_package(
    soup: BeautifulSoup,
    *,
    package: str,
    base_url: str,
    now: datetime,
    errors: ErrorList,
) -> Package:
    draft = _PackageDraft(package=package)
    _read_version(soup, draft)
    _read_license(soup, draft)
    _read_badges(soup, draft)
    _read_repository(soup, draft)
    _read_published(soup, draft, now=now, errors=errors)
    _read_kind(soup, draft, errors=errors)
    _read_images(soup, draft, base_url=base_url)
    return draft.freeze()
