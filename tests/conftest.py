"""Shared pytest fixtures and test helpers for chronolane tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from chronolane.domain.items import Lane, TimelineItem
from chronolane.services.telemetry import disable_telemetry

WORK_ITEMS: list[dict[str, Any]] = [
    {"id": "a", "title": "ViLLE Team", "start": "2016-02-01", "end": "2016-05-30", "lane": "Work"},
    {"id": "b", "title": "Vincit", "start": "2018-04-01", "end": "2019-08-30", "lane": "Work"},
    {"id": "c", "title": "Identio", "start": "2020-05-01", "end": "2022-08-30", "lane": "Work"},
    {"id": "d", "title": "Arado", "start": "2022-09-01", "end": "2025-04-30", "lane": "Work"},
    {
        "id": "d",
        "title": "Purtsi Consulting",
        "start": "2025-05-01",
        "end": "2025-11-30",
        "lane": "Work",
    },
]


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep host config, logging handlers and telemetry state out of every test."""
    import os

    for key in list(os.environ):
        if key.startswith("CHRONOLANE_"):
            monkeypatch.delenv(key)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    pkg_level = logging.getLogger("chronolane").level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("chronolane").setLevel(pkg_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def sample_raw() -> dict[str, Any]:
    """Three lanes: Work (one rail), School (two rails), Volunteering (a point event)."""
    return {
        "lanes": [{"name": "Work"}, {"name": "School", "rails": 2}, "Volunteering"],
        "items": [
            *WORK_ITEMS,
            {
                "id": "uni",
                "title": "University",
                "start": "2014-09-01",
                "end": "2019-06-15",
                "lane": "School",
            },
            {
                "id": "thesis",
                "title": "Thesis",
                "start": "2018-09-01",
                "end": "2019-05-31",
                "lane": "School",
                "rail": 1,
            },
            {"id": "hack", "title": "Hackathon", "start": "2021-03-12", "lane": "Volunteering"},
        ],
    }


@pytest.fixture
def work_raw() -> dict[str, Any]:
    """The Work lane on its own (2016-02-01 through 2025-11-30)."""
    return {"items": [dict(item) for item in WORK_ITEMS]}


@pytest.fixture
def sample_file(tmp_path: Path, sample_raw: dict[str, Any]) -> Path:
    """The sample dataset written as JSON."""
    path = tmp_path / "timeline.json"
    path.write_text(json.dumps(sample_raw), encoding="utf-8")
    return path


@pytest.fixture
def _in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to tmp_path so no chronolane.toml above the repo is discovered."""
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_item(
    item_id: str,
    start: str,
    end: str | None = None,
    *,
    lane: str = "Work",
    rail: int = 0,
    **kwargs: Any,
) -> TimelineItem:
    """Build a TimelineItem with the title defaulting to its id."""
    return TimelineItem(
        id=item_id,
        title=kwargs.pop("title", item_id),
        start=start,
        end=end,
        lane=lane,
        rail=rail,
        **kwargs,
    )


def make_lane(name: str, *items: TimelineItem, rails: int | None = None) -> Lane:
    return Lane.from_items(name, items, rails=rails)


@pytest.fixture
def sample_lanes() -> list[Lane]:
    """Small in-memory lanes: two Work bars, one School bar, one Volunteering point."""
    return [
        make_lane(
            "Work",
            make_item("a", "2016-02-01", "2016-05-30"),
            make_item("b", "2018-04-01", "2019-08-30"),
        ),
        make_lane("School", make_item("uni", "2014-09-01", "2019-06-15", lane="School")),
        make_lane("Volunteering", make_item("p", "2017-03-12", lane="Volunteering")),
    ]
