"""LayoutModel builder — flat drawable primitives with absolute coordinates.

Combines domain resolution, the time scale and lane stacking into one
immutable :class:`LayoutModel`. A rendering surface turns each primitive
into a drawing call; nothing here emits markup or styling.

Primitive order is fixed: gridline + year label per tick, one label per
lane, then per lane and per item (input order) the item's bar or point
followed by its label. Rebuilding from unchanged input yields an
identical model.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from chronolane.domain.extent import DateDomain, DomainObserver, resolve_domain
from chronolane.domain.items import Lane, TimelineItem, all_items
from chronolane.domain.lanes import LaneGeometry, LaneLayoutEngine, pack_rails
from chronolane.domain.params import PaletteConfig, ScaleConfig
from chronolane.domain.scale import TimeScale, YearTick

# Year labels sit this far right of their gridline and above the ruler's bottom edge.
_YEAR_LABEL_DX = 4.0
_YEAR_LABEL_RISE = 10.0


class Bar(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["bar"] = "bar"
    item_id: str
    lane: str
    x: float
    y: float
    width: float
    height: float
    fill: str


class Point(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["point"] = "point"
    item_id: str
    lane: str
    cx: float
    cy: float
    r: float
    fill: str


class Label(BaseModel):
    """Text anchored at its left edge, vertically centered on ``y``."""

    model_config = {"frozen": True}

    kind: Literal["label"] = "label"
    role: Literal["item", "lane", "year"]
    text: str
    x: float
    y: float
    color: str
    item_id: str | None = None


class Gridline(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["gridline"] = "gridline"
    year: int
    x: float
    y1: float
    y2: float


Primitive = Annotated[Bar | Point | Label | Gridline, Field(discriminator="kind")]


class LayoutModel(BaseModel):
    """Rendering-ready output of one layout pass."""

    model_config = {"frozen": True}

    width: float
    height: float
    domain: DateDomain
    total_months: int
    ticks: tuple[YearTick, ...] = ()
    lanes: tuple[LaneGeometry, ...] = ()
    primitives: tuple[Primitive, ...] = ()
    warnings: tuple[str, ...] = ()

    def bars(self) -> list[Bar]:
        return [p for p in self.primitives if isinstance(p, Bar)]

    def points(self) -> list[Point]:
        return [p for p in self.primitives if isinstance(p, Point)]

    def gridlines(self) -> list[Gridline]:
        return [p for p in self.primitives if isinstance(p, Gridline)]

    def labels(self, role: str | None = None) -> list[Label]:
        return [
            p for p in self.primitives if isinstance(p, Label) and (role is None or p.role == role)
        ]

    def for_item(self, item_id: str) -> list[Bar | Point | Label]:
        """Every primitive drawn for *item_id*."""
        return [
            p
            for p in self.primitives
            if isinstance(p, (Bar, Point, Label)) and p.item_id == item_id
        ]


def label_color(item: TimelineItem, palette: PaletteConfig) -> str:
    """Dark text for ``invert`` items (light fills), light text otherwise."""
    return palette.dark_label if item.invert else palette.light_label


def _auto_pack(lanes: Sequence[Lane]) -> tuple[list[Lane], list[str]]:
    packed_lanes: list[Lane] = []
    warnings: list[str] = []
    for lane in lanes:
        packed, lane_warnings = pack_rails(lane.items)
        warnings.extend(lane_warnings)
        rails = max([lane.rails, *(item.rail + 1 for item in packed)])
        packed_lanes.append(Lane.from_items(lane.name, packed, rails=rails, color=lane.color))
    return packed_lanes, warnings


def _item_primitives(
    item: TimelineItem,
    *,
    lane: Lane,
    center: float,
    scale: TimeScale,
    config: ScaleConfig,
    palette: PaletteConfig,
) -> list[Bar | Point | Label]:
    x_start = scale.project(item.start)
    fill = item.color or lane.color or palette.default_fill
    shape: Bar | Point
    if item.end is None:
        shape = Point(
            item_id=item.id,
            lane=lane.name,
            cx=x_start,
            cy=center,
            r=config.point_radius,
            fill=fill,
        )
    else:
        x_end = scale.project(item.end)
        shape = Bar(
            item_id=item.id,
            lane=lane.name,
            x=x_start,
            y=center - config.bar_height / 2,
            width=max(config.min_width, x_end - x_start),
            height=config.bar_height,
            fill=fill,
        )
    label = Label(
        role="item",
        text=item.title,
        x=x_start + config.label_inset,
        y=center,
        color=label_color(item, palette),
        item_id=item.id,
    )
    return [shape, label]


def build_layout(
    lanes: Sequence[Lane],
    config: ScaleConfig | None = None,
    palette: PaletteConfig | None = None,
    *,
    warnings: Iterable[str] = (),
    observer: DomainObserver | None = None,
) -> LayoutModel:
    """Compute the full layout for *lanes*.

    Args:
        lanes: Ordered lanes; order is vertical stacking order.
        config: Geometry constants (defaults to ``ScaleConfig()``).
        palette: Label and fallback fill colors.
        warnings: Ingestion warnings carried into the model.
        observer: Passed through to :func:`resolve_domain`.

    Raises:
        EmptyDatasetError: If no lane holds any item.
    """
    config = config or ScaleConfig()
    palette = palette or PaletteConfig()
    collected = list(warnings)

    if config.auto_rails:
        lanes, pack_warnings = _auto_pack(lanes)
        collected.extend(pack_warnings)

    domain = resolve_domain(all_items(lanes), config.pad_months, observer=observer)
    scale = TimeScale(domain, config.pixels_per_month)
    engine = LaneLayoutEngine.from_config(config)

    geometry = engine.stack(lanes)
    height = engine.total_height(lanes)
    width = max(config.min_canvas_width, scale.span)
    ticks = scale.year_ticks()

    primitives: list[Bar | Point | Label | Gridline] = []
    for tick in ticks:
        primitives.append(Gridline(year=tick.year, x=tick.x, y1=0.0, y2=height))
        primitives.append(
            Label(
                role="year",
                text=str(tick.year),
                x=tick.x + _YEAR_LABEL_DX,
                y=config.ruler_height - _YEAR_LABEL_RISE,
                color=palette.year_label,
            )
        )
    for geo in geometry:
        primitives.append(
            Label(
                role="lane",
                text=geo.name,
                x=config.label_inset,
                y=geo.top + config.row_height / 2,
                color=palette.lane_label,
            )
        )
    for lane, geo in zip(lanes, geometry, strict=True):
        for item in lane.items:
            primitives.extend(
                _item_primitives(
                    item,
                    lane=lane,
                    center=engine.item_center(geo, item.rail),
                    scale=scale,
                    config=config,
                    palette=palette,
                )
            )

    return LayoutModel(
        width=width,
        height=height,
        domain=domain,
        total_months=scale.total_months,
        ticks=tuple(ticks),
        lanes=tuple(geometry),
        primitives=tuple(primitives),
        warnings=tuple(collected),
    )
