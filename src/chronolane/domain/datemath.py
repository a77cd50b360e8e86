"""Month-granular calendar arithmetic.

Pure functions over naive ``datetime`` values. Every date entering the
layout engine is normalized to a ``datetime`` at ingestion (see
:func:`to_datetime`), so the helpers here never see ``date`` objects.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime


def to_datetime(value: str | date | datetime) -> datetime:
    """Normalize an ISO-8601 string, ``date`` or ``datetime`` to a naive ``datetime``.

    Timezone-aware values are reduced to their wall-clock time. Raises
    ``ValueError`` for unparseable strings.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).replace(tzinfo=None)


def start_of_month(d: datetime) -> datetime:
    return datetime(d.year, d.month, 1)


def start_of_year(d: datetime) -> datetime:
    return datetime(d.year, 1, 1)


def end_of_year(d: datetime) -> datetime:
    """Last representable instant of December 31 of *d*'s year."""
    return datetime(d.year, 12, 31, 23, 59, 59, 999999)


def add_months(d: datetime, n: int) -> datetime:
    """Shift *d* by *n* months (negative allowed), rolling the year as needed.

    The day of month is clamped to the target month's length, so
    ``Jan 31 + 1`` is the last day of February.
    """
    index = d.year * 12 + (d.month - 1) + n
    year, month0 = divmod(index, 12)
    month = month0 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return d.replace(year=year, month=month, day=day)


def months_between(a: datetime, b: datetime) -> int:
    """Whole months from *a* to *b*, ignoring day of month. May be negative.

    Examples:
        >>> months_between(datetime(2016, 1, 1), datetime(2020, 5, 1))
        52
        >>> months_between(datetime(2020, 5, 31), datetime(2020, 4, 1))
        -1
    """
    return (b.year - a.year) * 12 + (b.month - a.month)


def month_fraction(d: datetime) -> float:
    """Position of *d* inside its month as a ratio in ``[0, 1)``.

    The denominator is the real month length (28-31 days), so the same
    day of month sits at a different fraction in February than in July.
    """
    first = start_of_month(d)
    following = add_months(first, 1)
    return (d - first) / (following - first)
