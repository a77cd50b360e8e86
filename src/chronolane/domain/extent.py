"""Display domain resolution.

The domain is the calendar range the chart shows: the items' earliest
start and latest end, widened to whole years, then padded by
``pad_months`` on both sides. It is derived on every layout pass and
never stored.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from chronolane.domain.datemath import add_months, end_of_year, start_of_year
from chronolane.domain.errors import EmptyDatasetError
from chronolane.domain.items import TimelineItem

DomainObserver = Callable[[str, dict[str, Any]], None]


class DateDomain(BaseModel):
    """Resolved ``[min, max)`` display range."""

    model_config = {"frozen": True}

    min: datetime
    max: datetime

    def contains(self, item: TimelineItem) -> bool:
        return self.min <= item.start and self.max >= item.last


def resolve_domain(
    items: Iterable[TimelineItem],
    pad_months: int = 0,
    *,
    observer: DomainObserver | None = None,
) -> DateDomain:
    """Derive the padded, year-aligned domain covering every item.

    Args:
        items: All items across all lanes.
        pad_months: Months added before the first year and after the last.
        observer: Optional callback receiving ``("domain.resolved", bounds)``.

    Raises:
        EmptyDatasetError: If *items* is empty.
    """
    dates: list[datetime] = []
    for item in items:
        dates.append(item.start)
        dates.append(item.last)
    if not dates:
        raise EmptyDatasetError()

    raw_min = min(dates)
    raw_max = max(dates)
    domain = DateDomain(
        min=add_months(start_of_year(raw_min), -pad_months),
        max=add_months(end_of_year(raw_max), pad_months),
    )
    if observer is not None:
        observer(
            "domain.resolved",
            {
                "raw_min": raw_min.isoformat(),
                "raw_max": raw_max.isoformat(),
                "min": domain.min.isoformat(),
                "max": domain.max.isoformat(),
                "pad_months": pad_months,
                "dates": len(dates),
            },
        )
    return domain
