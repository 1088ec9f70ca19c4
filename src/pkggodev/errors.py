from __future__ import annotations

from typing import Any


class PkgGoDevError(Exception):
    """Base class for every error raised by pkggodev."""


class NotFoundError(PkgGoDevError):
    def __init__(self, url: str) -> None:
        super().__init__(f"not found on pkg.go.dev: {url}")
        self.url = url


class FetchError(PkgGoDevError):
    def __init__(
        self,
        url: str,
        cause: object,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(f"making request to {url}: {cause}")
        self.url = url
        self.status_code = status_code


class NormalizationError(PkgGoDevError, ValueError):
    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"parsing date '{text}': {reason}")
        self.text = text


class UnknownUnitError(NormalizationError):
    def __init__(self, text: str, unit: str) -> None:
        super().__init__(text, f"unknown unit '{unit}'")
        self.unit = unit


class UnparseableDateError(NormalizationError):
    pass


class PageShapeError(PkgGoDevError):
    """The page did not have the structure the extractor expects."""


class DescriptionError(PkgGoDevError):
    pass


class ErrorList(PkgGoDevError):
    """Independent failures gathered while handling one request.

    Field-level problems do not stop sibling extractions, so a single call can
    produce several of these. ``partial`` holds whatever record had been
    assembled when the list was raised.
    """

    def __init__(
        self,
        errors: list[Exception] | None = None,
        *,
        partial: Any = None,
    ) -> None:
        self.errors: list[Exception] = list(errors or [])
        self.partial = partial
        super().__init__(self._message())

    def _message(self) -> str:
        return "errors: [" + "; ".join(str(e) for e in self.errors) + "]"

    def __str__(self) -> str:
        return self._message()

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __iter__(self):
        return iter(self.errors)

    def append(self, err: Exception) -> None:
        self.errors.append(err)

    @property
    def not_found(self) -> bool:
        return any(isinstance(e, NotFoundError) for e in self.errors)

    def raise_if_any(self, *, partial: Any = None) -> None:
        if not self.errors:
            return
        self.partial = partial
        raise self
