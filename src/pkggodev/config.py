from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

import requests

DEFAULT_BASE_URL = "https://pkg.go.dev"
DEFAULT_TIMEOUT_S = 45


@dataclass(frozen=True)
class ClientConfig:
    """Settings applied once when a ``Client`` is built.

    ``session`` is the HTTP transport; it is only read from and may be shared
    by several clients. ``clock`` supplies "now" for relative dates.
    """

    base_url: str = DEFAULT_BASE_URL
    session: requests.Session = field(default_factory=requests.Session)
    timeout_s: int = DEFAULT_TIMEOUT_S
    user_agent: str | None = None
    clock: Callable[[], datetime] = datetime.now

    def __post_init__(self) -> None:
        # Frozen: normalize through object.__setattr__.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
