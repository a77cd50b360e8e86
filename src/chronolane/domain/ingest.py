"""Dataset ingestion — raw mappings to validated lanes.

Validation failures are local: a bad record is dropped (or clamped) with
a warning so one entry never corrupts the whole chart. Only a dataset
whose top-level shape is unusable raises :class:`InvalidDataset`.

Raw shape::

    lanes:                       # optional; order = stacking order
      - name: Work
        rails: 2                 # optional, 1 or 2
        color: "#2563eb"         # optional default fill
      - School                   # bare names are accepted; rails derived
    items:
      - id: c                    # optional
        title: Identio
        start: 2020-05-01
        end: 2022-08-30          # optional; absent => point event
        lane: Work
        rail: 1                  # optional, default 0
        color: "#0ea5e9"         # optional
        invert: false            # optional
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from chronolane.domain.errors import InvalidDataset, InvalidDateInput
from chronolane.domain.items import (
    MAX_RAILS,
    Lane,
    TimelineItem,
    all_items,
    generate_item_id,
    parse_item_date,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaneSpec:
    name: str
    rails: int | None = None
    color: str | None = None


@dataclass(frozen=True)
class Dataset:
    """Validated lanes plus the warnings produced while building them."""

    lanes: tuple[Lane, ...] = ()
    warnings: tuple[str, ...] = ()
    skipped: int = 0

    @property
    def items(self) -> list[TimelineItem]:
        return all_items(self.lanes)


@dataclass
class _Collector:
    warnings: list[str] = field(default_factory=list)
    skipped: int = 0

    def warn(self, message: str) -> None:
        logger.debug(message)
        self.warnings.append(message)

    def skip(self, message: str) -> None:
        self.skipped += 1
        self.warn(message)


def _describe(index: int, entry: Mapping[str, Any]) -> str:
    title = entry.get("title")
    return f"item #{index}" + (f" ({title})" if title else "")


def _parse_lane_specs(raw: Any, out: _Collector) -> list[LaneSpec]:
    if raw is None:
        return []
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        raise InvalidDataset("'lanes' must be a list of lane names or lane tables")

    specs: list[LaneSpec] = []
    seen: set[str] = set()
    for entry in raw:
        if isinstance(entry, str):
            spec = LaneSpec(name=entry)
        elif isinstance(entry, Mapping) and isinstance(entry.get("name"), str):
            name = entry["name"]
            rails = entry.get("rails")
            if rails is not None and (
                isinstance(rails, bool)
                or not isinstance(rails, int)
                or rails not in range(1, MAX_RAILS + 1)
            ):
                out.warn(f"Lane {name!r}: rails must be 1 or 2, got {rails!r}; deriving")
                rails = None
            color = entry.get("color")
            if color is not None and not isinstance(color, str):
                out.warn(f"Lane {name!r}: color must be a string, got {color!r}; ignored")
                color = None
            spec = LaneSpec(name=name, rails=rails, color=color)
        else:
            raise InvalidDataset(f"Invalid lane entry: {entry!r}")
        if spec.name in seen:
            out.warn(f"Duplicate lane {spec.name!r} ignored")
            continue
        seen.add(spec.name)
        specs.append(spec)
    return specs


def _build_item(
    index: int,
    entry: Mapping[str, Any],
    spec: LaneSpec,
    seen_ids: set[str],
    out: _Collector,
) -> TimelineItem | None:
    label = _describe(index, entry)
    try:
        if entry.get("start") in (None, ""):
            raise InvalidDateInput("start", entry.get("start"))
        start = parse_item_date("start", entry["start"])
        raw_end = entry.get("end")
        end = None if raw_end in (None, "") else parse_item_date("end", raw_end)
    except InvalidDateInput as exc:
        out.skip(f"Skipped {label}: {exc}")
        return None

    if end is not None and end < start:
        out.warn(f"{label}: end {end.date()} precedes start {start.date()}; clamped to start")
        end = start

    title = str(entry.get("title") or "")
    item_id = entry.get("id") or generate_item_id(spec.name, title, start)
    item_id = str(item_id)
    if item_id in seen_ids:
        n = 2
        while f"{item_id}-{n}" in seen_ids:
            n += 1
        out.warn(f"{label}: duplicate id {item_id!r} renamed to '{item_id}-{n}'")
        item_id = f"{item_id}-{n}"

    try:
        item = TimelineItem(
            id=item_id,
            title=title,
            start=start,
            end=end,
            lane=spec.name,
            rail=entry.get("rail") or 0,
            color=entry.get("color"),
            invert=entry.get("invert") or False,
        )
    except ValidationError as exc:
        reasons = "; ".join(err["msg"] for err in exc.errors())
        out.skip(f"Skipped {label}: {reasons}")
        return None
    if spec.rails is not None and item.rail >= spec.rails:
        out.warn(f"{label}: rail {item.rail} exceeds lane {spec.name!r} rails; moved to rail 0")
        item = item.model_copy(update={"rail": 0})
    seen_ids.add(item_id)
    return item


def ingest(raw: Mapping[str, Any]) -> Dataset:
    """Validate a raw dataset mapping into ordered lanes.

    When ``lanes`` is declared, items in other lanes are dropped; otherwise
    lanes are created in order of first appearance.

    Raises:
        InvalidDataset: If ``items`` or ``lanes`` is not a list.
    """
    out = _Collector()
    specs = _parse_lane_specs(raw.get("lanes"), out)
    declared = bool(specs)
    by_name: dict[str, LaneSpec] = {spec.name: spec for spec in specs}

    raw_items = raw.get("items", [])
    if not isinstance(raw_items, Sequence) or isinstance(raw_items, str):
        raise InvalidDataset("'items' must be a list")

    grouped: dict[str, list[TimelineItem]] = {spec.name: [] for spec in specs}
    seen_ids: set[str] = set()
    for index, entry in enumerate(raw_items):
        if not isinstance(entry, Mapping):
            out.skip(f"Skipped item #{index}: not a table")
            continue
        lane_name = entry.get("lane")
        if not isinstance(lane_name, str) or not lane_name:
            out.skip(f"Skipped {_describe(index, entry)}: missing lane")
            continue
        spec = by_name.get(lane_name)
        if spec is None:
            if declared:
                out.skip(f"Skipped {_describe(index, entry)}: unknown lane {lane_name!r}")
                continue
            spec = by_name[lane_name] = LaneSpec(name=lane_name)
            grouped[lane_name] = []
        item = _build_item(index, entry, spec, seen_ids, out)
        if item is not None:
            grouped[lane_name].append(item)

    lanes = tuple(
        Lane.from_items(name, items, rails=by_name[name].rails, color=by_name[name].color)
        for name, items in grouped.items()
    )
    return Dataset(lanes=lanes, warnings=tuple(out.warnings), skipped=out.skipped)
