from __future__ import annotations

import re
from datetime import datetime, timedelta

from .errors import UnknownUnitError, UnparseableDateError

CANONICAL_DATE_FORMAT = "%Y-%m-%d"

# pkg.go.dev renders "Jan 2, 2006"; the full-month and canonical layouts keep
# already-normalized values stable.
_ABSOLUTE_FORMATS = ("%b %d, %Y", "%B %d, %Y", CANONICAL_DATE_FORMAT)

_RELATIVE_RE = re.compile(r"^(\S+)\s+(\S+)\s+ago$")
_UNIT_DAYS = {"day": 1, "week": 7}


def _subtract(now: datetime, quantity: int, unit: str, text: str) -> datetime:
    if unit == "hour":
        delta = {"hours": quantity}
    elif unit in _UNIT_DAYS:
        delta = {"days": _UNIT_DAYS[unit] * quantity}
    else:
        raise UnknownUnitError(text, unit)

    try:
        return now - timedelta(**delta)
    except OverflowError:
        raise UnparseableDateError(text, "date out of range") from None


def _parse_relative(text: str, now: datetime) -> datetime:
    match = _RELATIVE_RE.match(text)
    if match is None:
        raise UnparseableDateError(text, "expected '<N> <unit>(s) ago'")

    quantity_str, unit = match.group(1), match.group(2)
    try:
        quantity = int(quantity_str)
    except ValueError:
        raise UnparseableDateError(
            text, f"invalid quantity '{quantity_str}'"
        ) from None

    if unit.endswith("s"):
        unit = unit[:-1]
    return _subtract(now, quantity, unit, text)


def _parse_absolute(text: str) -> datetime:
    for fmt in _ABSOLUTE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise UnparseableDateError(text, "not a recognized date layout")


def normalize_date(text: str, *, now: datetime | None = None) -> str:
    """Convert a pkg.go.dev date phrase into ``YYYY-MM-DD``.

    Accepts ``today``, ``<N> hour(s)|day(s)|week(s) ago`` and absolute dates
    such as ``Jan 2, 2006``. Raises ``UnknownUnitError`` for any other
    relative unit and ``UnparseableDateError`` for anything else.
    """

    text = text.strip()
    if now is None:
        now = datetime.now()

    if text == "today":
        moment = now
    elif "ago" in text:
        moment = _parse_relative(text, now)
    else:
        moment = _parse_absolute(text)
    return moment.strftime(CANONICAL_DATE_FORMAT)
