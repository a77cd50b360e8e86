"""Timeline items and lanes.

Both models are frozen after construction. Dates are normalized to naive
``datetime`` values by field validators, so a ``TimelineItem`` built from
ISO strings compares equal to one built from ``date`` objects.

INVARIANT: ``item.end``, when present, is never earlier than ``item.start``.
INVARIANT: every item's rail is below its lane's rail count.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from datetime import date, datetime
from typing import Literal, Self

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from chronolane.domain.datemath import to_datetime
from chronolane.domain.errors import InvalidDateInput, InvertedInterval

MAX_RAILS = 2


def generate_item_id(lane: str, title: str, start: datetime) -> str:
    """Stable id for items that arrive without one: ``itm_`` + 8 hex chars."""
    key = f"{lane}\x1f{title.strip().lower()}\x1f{start.isoformat()}"
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:8]
    return f"itm_{digest}"


def parse_item_date(field: str, value: str | date | datetime) -> datetime:
    """Normalize a date field, raising :class:`InvalidDateInput` on failure."""
    try:
        return to_datetime(value)
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidDateInput(field, value) from exc


class TimelineItem(BaseModel):
    """A dated interval (``end`` present) or point event (``end`` absent)."""

    model_config = {"frozen": True}

    id: str
    title: str
    start: datetime
    end: datetime | None = None
    lane: str
    rail: int = Field(default=0, ge=0, lt=MAX_RAILS)
    color: str | None = None
    invert: bool = False

    @field_validator("start", "end", mode="before")
    @classmethod
    def _normalize_date(cls, value: object, info: ValidationInfo) -> datetime | None:
        if value is None:
            return None
        return parse_item_date(info.field_name or "date", value)  # type: ignore[arg-type]

    @model_validator(mode="after")
    def _check_interval(self) -> Self:
        if self.end is not None and self.end < self.start:
            msg = f"{self.title!r}: end {self.end.date()} precedes start {self.start.date()}"
            raise InvertedInterval(msg)
        return self

    @property
    def is_point(self) -> bool:
        return self.end is None

    @property
    def last(self) -> datetime:
        """End of the item, or its start for point events."""
        return self.end if self.end is not None else self.start


class Lane(BaseModel):
    """A named horizontal track. Lane order determines vertical stacking."""

    model_config = {"frozen": True}

    name: str
    items: tuple[TimelineItem, ...] = ()
    rails: Literal[1, 2] = 1
    color: str | None = None

    @model_validator(mode="after")
    def _check_rails(self) -> Self:
        for item in self.items:
            if item.rail >= self.rails:
                msg = (
                    f"Item {item.id!r} uses rail {item.rail} "
                    f"but lane {self.name!r} has {self.rails} rail(s)"
                )
                raise ValueError(msg)
        return self

    @classmethod
    def from_items(
        cls,
        name: str,
        items: Iterable[TimelineItem],
        *,
        rails: int | None = None,
        color: str | None = None,
    ) -> Lane:
        """Build a lane, deriving the rail count from item rails when not given."""
        collected = tuple(items)
        if rails is None:
            rails = max((item.rail for item in collected), default=0) + 1
        return cls(name=name, items=collected, rails=rails, color=color)  # type: ignore[arg-type]


def all_items(lanes: Iterable[Lane]) -> list[TimelineItem]:
    """Flatten lanes into one item list, preserving lane then item order."""
    return [item for lane in lanes for item in lane.items]
