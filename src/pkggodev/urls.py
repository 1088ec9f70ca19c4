from __future__ import annotations

import re
from urllib.parse import ParseResult, quote, quote_plus, urlparse, urlunparse

from .models import GitHost

_SSH_REPO_RE = re.compile(r"^git@([^:]+):(.+?)(?:\.git)?$")

_HOST_MARKERS: tuple[tuple[str, GitHost], ...] = (
    ("github.com", GitHost.GITHUB),
    ("gitlab.com", GitHost.GITLAB),
    ("codeberg.org", GitHost.CODEBERG),
    ("git.sr.ht", GitHost.SOURCEHUT),
)


def normalize_url(raw_url: str) -> str:
    """Normalize a URL before fetching.

    - Lowercases scheme + hostname.
    - Strips fragments.
    """

    parsed: ParseResult = urlparse(raw_url)
    parsed = parsed._replace(
        scheme=(parsed.scheme or "").lower(),
        netloc=(parsed.netloc or "").lower(),
        fragment="",
    )
    return urlunparse(parsed)


def package_url(base_url: str, package: str, *, tab: str | None = None) -> str:
    url = f"{base_url}/{quote(package.strip('/'), safe='/@.~-_')}"
    if tab:
        url += f"?tab={tab}"
    return url


def search_url(base_url: str, query: str, page: int) -> str:
    return f"{base_url}/search?q={quote_plus(query)}&page={page}"


def absolute_url(base_url: str, src: str) -> str:
    """Rewrite a page-relative asset URL against the site base URL."""
    if src.startswith("http"):
        return src
    if src.startswith("/"):
        return base_url + src
    return base_url + "/" + src


def normalize_repo_url(repo_url: str) -> str:
    """Turn SSH-style and ``.git`` repository URLs into a browsable URL.

    ``git@github.com:user/repo.git`` -> ``https://github.com/user/repo``
    ``gitlab.com/user/repo.git`` -> ``https://gitlab.com/user/repo``
    """

    repo_url = repo_url.strip()
    if repo_url.startswith("git@"):
        match = _SSH_REPO_RE.match(repo_url)
        if match:
            return f"https://{match.group(1)}/{match.group(2)}"

    if repo_url.endswith(".git"):
        repo_url = repo_url[: -len(".git")]

    if "://" in repo_url:
        return repo_url
    return "https://" + repo_url


def identify_git_host(repo_url: str) -> GitHost:
    try:
        host = (urlparse(repo_url).hostname or "").lower()
    except ValueError:
        return GitHost.UNKNOWN
    for marker, kind in _HOST_MARKERS:
        if marker in host:
            return kind
    return GitHost.UNKNOWN
