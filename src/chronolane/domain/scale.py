"""TimeScale — date to horizontal offset.

A stateless value object built from a :class:`DateDomain` and a
pixels-per-month constant. Whole months map to exact multiples of
``pixels_per_month`` from the domain's month-aligned origin; positions
inside a month are interpolated linearly over the month's real length.

INVARIANT: ``project`` is monotonically non-decreasing in its argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel

from chronolane.domain.datemath import month_fraction, months_between, start_of_month
from chronolane.domain.extent import DateDomain


class YearTick(BaseModel):
    """Year boundary gridline position."""

    model_config = {"frozen": True}

    year: int
    x: float


@dataclass(frozen=True)
class TimeScale:
    domain: DateDomain
    pixels_per_month: float

    def __post_init__(self) -> None:
        if self.pixels_per_month <= 0:
            msg = f"pixels_per_month must be positive, got {self.pixels_per_month}"
            raise ValueError(msg)

    @property
    def origin(self) -> datetime:
        return start_of_month(self.domain.min)

    @property
    def total_months(self) -> int:
        """Months spanned by the domain, counting both end months (at least 1)."""
        return max(1, months_between(self.origin, start_of_month(self.domain.max)) + 1)

    @property
    def span(self) -> float:
        return self.total_months * self.pixels_per_month

    def project(self, d: datetime) -> float:
        """Horizontal offset of *d* from the domain origin."""
        whole = months_between(self.origin, start_of_month(d))
        return (whole + month_fraction(d)) * self.pixels_per_month

    def year_ticks(self) -> list[YearTick]:
        """One tick per calendar year from ``domain.min.year`` to ``domain.max.year``.

        The first tick sits left of the origin (negative ``x``) when the
        domain is padded into the previous year.
        """
        return [
            YearTick(year=year, x=self.project(datetime(year, 1, 1)))
            for year in range(self.domain.min.year, self.domain.max.year + 1)
        ]
