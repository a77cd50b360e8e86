"""LayoutService — dataset to layout model, domain and validation reports.

Bridges infrastructure (dataset files) and the pure domain engine.
Domain exceptions are converted to ``ServiceError`` codes here:

- ``DATASET_NOT_FOUND``: the dataset path does not exist.
- ``INVALID_DATASET``: unparseable file or unusable top-level shape.
- ``EMPTY_DATASET``: no valid items remain to derive a domain from.
- ``OUTPUT_WRITE_FAILED``: the layout file could not be written.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from chronolane.domain.errors import EmptyDatasetError, InvalidDataset
from chronolane.domain.extent import resolve_domain
from chronolane.domain.ingest import Dataset, ingest
from chronolane.domain.layout import Bar, LayoutModel, Point, build_layout
from chronolane.domain.scale import TimeScale
from chronolane.infrastructure.dataset import read_dataset, write_layout
from chronolane.services.base import BaseService
from chronolane.services.result import ServiceResult
from chronolane.services.telemetry import trace_span, traced

DatasetSource = Path | Mapping[str, Any]


class _LoadFailed(Exception):
    def __init__(self, code: str, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail = detail


def _item_rows(layout: LayoutModel) -> list[dict[str, Any]]:
    """One summary row per bar or point, in drawing order."""
    titles = {label.item_id: label.text for label in layout.labels("item")}
    rows: list[dict[str, Any]] = []
    for shape in layout.primitives:
        if isinstance(shape, Bar):
            x, width, y = shape.x, shape.width, shape.y + shape.height / 2
        elif isinstance(shape, Point):
            x, width, y = shape.cx, 0.0, shape.cy
        else:
            continue
        rows.append(
            {
                "id": shape.item_id,
                "title": titles.get(shape.item_id, ""),
                "lane": shape.lane,
                "kind": shape.kind,
                "x": round(x, 2),
                "width": round(width, 2),
                "y": round(y, 2),
            }
        )
    return rows


class LayoutService(BaseService):
    """Layout operations over a dataset file or an in-memory mapping."""

    def _load(self, source: DatasetSource) -> Dataset:
        with trace_span("load_dataset") as span:
            if isinstance(source, Path):
                if not source.is_file():
                    raise _LoadFailed(
                        "DATASET_NOT_FOUND",
                        f"Dataset not found: {source}",
                        path=str(source),
                    )
                try:
                    raw = read_dataset(source)
                except InvalidDataset as exc:
                    raise _LoadFailed(exc.code, str(exc), path=str(source)) from exc
            else:
                raw = dict(source)
            try:
                dataset = ingest(raw)
            except InvalidDataset as exc:
                raise _LoadFailed(exc.code, str(exc)) from exc
            if span:
                span.annotate("lanes", len(dataset.lanes))
                span.annotate("items", len(dataset.items))
                span.annotate("skipped", dataset.skipped)
        return dataset

    @traced
    def build(self, source: DatasetSource, *, output: Path | None = None) -> ServiceResult:
        """Build the full layout model, optionally writing it to *output* as JSON."""
        op = "build_layout"
        try:
            dataset = self._load(source)
        except _LoadFailed as exc:
            return ServiceResult.failure(op, exc.code, exc.message, **exc.detail)

        try:
            with trace_span("build_layout"):
                layout = build_layout(
                    dataset.lanes,
                    self._config.scale,
                    self._config.palette,
                    warnings=dataset.warnings,
                    observer=self._observe,
                )
        except EmptyDatasetError as exc:
            return ServiceResult.failure(
                op, exc.code, str(exc), warnings=list(dataset.warnings), skipped=dataset.skipped
            )

        data: dict[str, Any] = {
            "width": layout.width,
            "height": layout.height,
            "total_months": layout.total_months,
            "domain": layout.domain.model_dump(mode="json"),
            "lanes": [lane.model_dump() for lane in layout.lanes],
            "items": _item_rows(layout),
            "primitive_count": len(layout.primitives),
        }
        if output is not None:
            try:
                with trace_span("write_layout"):
                    data["output"] = str(write_layout(output, layout))
            except OSError as exc:
                return ServiceResult.failure(
                    op,
                    "OUTPUT_WRITE_FAILED",
                    f"Cannot write layout to {output}: {exc.strerror or exc}",
                    path=str(output),
                    warnings=list(layout.warnings),
                )
        else:
            data["layout"] = layout.model_dump(mode="json")
        return ServiceResult(ok=True, op=op, data=data, warnings=list(layout.warnings))

    @traced
    def domain(self, source: DatasetSource) -> ServiceResult:
        """Resolve the display domain and its year ticks."""
        op = "resolve_domain"
        try:
            dataset = self._load(source)
        except _LoadFailed as exc:
            return ServiceResult.failure(op, exc.code, exc.message, **exc.detail)

        scale_cfg = self._config.scale
        try:
            domain = resolve_domain(dataset.items, scale_cfg.pad_months, observer=self._observe)
        except EmptyDatasetError as exc:
            return ServiceResult.failure(
                op, exc.code, str(exc), warnings=list(dataset.warnings), skipped=dataset.skipped
            )
        scale = TimeScale(domain, scale_cfg.pixels_per_month)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "min": domain.min.isoformat(),
                "max": domain.max.isoformat(),
                "pad_months": scale_cfg.pad_months,
                "pixels_per_month": scale_cfg.pixels_per_month,
                "total_months": scale.total_months,
                "span": scale.span,
                "ticks": [tick.model_dump() for tick in scale.year_ticks()],
            },
            warnings=list(dataset.warnings),
        )

    @traced
    def check(self, source: DatasetSource) -> ServiceResult:
        """Ingest the dataset and report what validation dropped or clamped."""
        op = "check_dataset"
        try:
            dataset = self._load(source)
        except _LoadFailed as exc:
            return ServiceResult.failure(op, exc.code, exc.message, **exc.detail)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "lanes": [
                    {"name": lane.name, "rails": lane.rails, "items": len(lane.items)}
                    for lane in dataset.lanes
                ],
                "items": len(dataset.items),
                "skipped": dataset.skipped,
                "issues": list(dataset.warnings),
            },
        )
