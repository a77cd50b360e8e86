"""Vertical placement of lanes and rails.

Lanes stack top to bottom in input order below the year ruler. A lane
has one or two rails; rail 0 is centered in the first row, rail 1 sits
``rail_offset`` below the first row.

Rail assignment is a property of the item. The engine does not detect
collisions: two items sharing a lane and rail that overlap in time keep
their literal coordinates. :func:`pack_rails` is an opt-in greedy pass
for datasets that want automatic assignment.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel

from chronolane.domain.items import MAX_RAILS, Lane, TimelineItem
from chronolane.domain.params import ScaleConfig


class LaneGeometry(BaseModel):
    """Resolved vertical band of one lane."""

    model_config = {"frozen": True}

    name: str
    top: float
    height: float
    rails: int

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class LaneLayoutEngine:
    row_height: float
    rail_offset: float
    lane_gap: float = 0.0
    origin: float = 0.0

    @classmethod
    def from_config(cls, config: ScaleConfig) -> LaneLayoutEngine:
        return cls(
            row_height=config.row_height,
            rail_offset=config.rail_offset,
            lane_gap=config.lane_gap,
            origin=config.ruler_height,
        )

    def lane_height(self, rails: int) -> float:
        if rails <= 1:
            return self.row_height
        return self.row_height + 2 * self.rail_offset

    def stack(self, lanes: Sequence[Lane]) -> list[LaneGeometry]:
        """Top offset and height of each lane, cumulative in input order."""
        out: list[LaneGeometry] = []
        top = self.origin
        for lane in lanes:
            height = self.lane_height(lane.rails)
            out.append(LaneGeometry(name=lane.name, top=top, height=height, rails=lane.rails))
            top += height + self.lane_gap
        return out

    def item_center(self, lane: LaneGeometry, rail: int) -> float:
        """Vertical center of an item on *rail* within *lane*."""
        if rail == 0:
            return lane.top + self.row_height / 2
        return lane.top + self.row_height + self.rail_offset

    def total_height(self, lanes: Sequence[Lane]) -> float:
        """Ruler plus lane heights plus the gaps between lanes."""
        heights = [self.lane_height(lane.rails) for lane in lanes]
        gaps = self.lane_gap * max(0, len(heights) - 1)
        return self.origin + sum(heights) + gaps


def pack_rails(
    items: Sequence[TimelineItem],
    max_rails: int = MAX_RAILS,
) -> tuple[list[TimelineItem], list[str]]:
    """Greedy interval coloring: lowest rail whose last item ended before this one starts.

    Items are visited by start date (ties keep input order). When every
    rail is busy the item goes to the rail that frees up first and a
    warning is recorded. Returns the items in their original order with
    rails rewritten, plus the warnings.
    """
    order = sorted(range(len(items)), key=lambda i: items[i].start)
    rail_ends: list[datetime] = []
    assigned: dict[int, int] = {}
    warnings: list[str] = []

    for index in order:
        item = items[index]
        rail = next((r for r, end in enumerate(rail_ends) if end < item.start), None)
        if rail is None and len(rail_ends) < max_rails:
            rail = len(rail_ends)
            rail_ends.append(item.last)
        elif rail is None:
            rail = min(range(len(rail_ends)), key=lambda r: rail_ends[r])
            warnings.append(
                f"Item {item.id!r} ({item.title}) overlaps on every rail of lane "
                f"{item.lane!r}; placed on rail {rail}"
            )
            rail_ends[rail] = max(rail_ends[rail], item.last)
        else:
            rail_ends[rail] = item.last
        assigned[index] = rail

    packed = [
        item if item.rail == assigned[i] else item.model_copy(update={"rail": assigned[i]})
        for i, item in enumerate(items)
    ]
    return packed, warnings
