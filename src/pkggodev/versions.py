"""Version history from the ``?tab=versions`` page.

The versions list is flat: a major-version label, a tag, and a commit time
(or a details block) are sibling nodes, and a record is only complete once
its date node has been seen. ``accumulate_versions`` walks those siblings
and emits a ``Version`` at each date node.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable

from bs4 import BeautifulSoup, Tag
from loguru import logger

from .dates import normalize_date
from .errors import ErrorList, NormalizationError, PageShapeError
from .models import Version


class MarkerRole(str, Enum):
    MAJOR_VERSION_LABEL = "Version-major"
    VERSION_TAG = "Version-tag"
    COMMIT_TIME_LABEL = "Version-commitTime"
    DETAIL_BLOCK = "Version-details"


def marker_roles(node: Tag) -> frozenset[MarkerRole]:
    classes = set(node.get("class") or [])
    return frozenset(role for role in MarkerRole if role.value in classes)


@dataclass
class _VersionDraft:
    major_version: str = ""
    full_version: str = ""

    def complete(self, date: str, out: list[Version], errors: ErrorList) -> None:
        if not self.full_version:
            errors.append(
                PageShapeError(
                    f"version dated {date} has no version tag, skipping"
                )
            )
            return
        out.append(
            Version(
                major_version=self.major_version,
                full_version=self.full_version,
                date=date,
            )
        )


def _detail_summary_text(node: Tag) -> str:
    summary = node.select_one(".Version-summary")
    if summary is None:
        return ""
    for span in summary.find_all("span"):
        span.decompose()
    return summary.get_text().strip()


def accumulate_versions(
    nodes: Iterable[Tag],
    *,
    now: datetime,
    errors: ErrorList,
) -> list[Version]:
    """Group one list of sibling nodes into ``Version`` records.

    A record left pending when the nodes run out is dropped. A dated record
    without a version tag is not emitted; it is recorded in ``errors``.
    """

    out: list[Version] = []
    draft = _VersionDraft()
    current_major = ""

    for node in nodes:
        roles = marker_roles(node)

        if MarkerRole.MAJOR_VERSION_LABEL in roles:
            label = node.get_text().strip()
            if label:
                current_major = label
            draft.major_version = current_major

        if MarkerRole.VERSION_TAG in roles:
            link = node.select_one(".js-versionLink")
            draft.full_version = link.get_text().strip() if link is not None else ""

        if MarkerRole.COMMIT_TIME_LABEL in roles:
            try:
                date = normalize_date(node.get_text(), now=now)
            except NormalizationError as e:
                errors.append(e)
                continue
            draft.complete(date, out, errors)
            draft = _VersionDraft()

        if MarkerRole.DETAIL_BLOCK in roles:
            try:
                date = normalize_date(_detail_summary_text(node), now=now)
            except NormalizationError as e:
                logger.warning(f"error in version details: {e}")
                continue
            draft.complete(date, out, errors)
            draft = _VersionDraft()

    return out


def extract_versions(
    soup: BeautifulSoup,
    *,
    now: datetime,
    errors: ErrorList,
) -> list[Version]:
    versions: list[Version] = []
    for version_list in soup.select(".Versions-list"):
        children = version_list.find_all(True, recursive=False)
        versions.extend(accumulate_versions(children, now=now, errors=errors))
    return versions
