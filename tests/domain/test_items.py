"""Tests for TimelineItem and Lane models."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from chronolane.domain.errors import InvalidDateInput, InvertedInterval, LayoutError
from chronolane.domain.items import (
    Lane,
    TimelineItem,
    all_items,
    generate_item_id,
    parse_item_date,
)
from tests.conftest import make_item


class TestTimelineItem:
    def test_dates_normalized_from_strings(self) -> None:
        item = make_item("a", "2016-02-01", "2016-05-30")
        assert item.start == datetime(2016, 2, 1)
        assert item.end == datetime(2016, 5, 30)

    def test_string_and_date_inputs_compare_equal(self) -> None:
        a = make_item("a", "2016-02-01", "2016-05-30")
        b = TimelineItem(
            id="a", title="a", start=date(2016, 2, 1), end=date(2016, 5, 30), lane="Work"
        )
        assert a == b

    def test_point_event(self) -> None:
        item = make_item("p", "2021-03-12")
        assert item.is_point
        assert item.last == item.start

    def test_interval_last_is_end(self) -> None:
        item = make_item("a", "2016-02-01", "2016-05-30")
        assert not item.is_point
        assert item.last == datetime(2016, 5, 30)

    def test_zero_length_interval_allowed(self) -> None:
        item = make_item("z", "2020-01-01", "2020-01-01")
        assert item.end == item.start
        assert not item.is_point

    def test_inverted_interval_rejected(self) -> None:
        with pytest.raises(ValidationError, match="precedes start"):
            make_item("x", "2020-05-01", "2020-01-01")

    def test_bad_date_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Invalid start date"):
            make_item("x", "someday")

    def test_rail_must_be_zero_or_one(self) -> None:
        with pytest.raises(ValidationError):
            make_item("x", "2020-01-01", rail=2)
        with pytest.raises(ValidationError):
            make_item("x", "2020-01-01", rail=-1)

    def test_frozen(self) -> None:
        item = make_item("a", "2020-01-01")
        with pytest.raises(ValidationError):
            item.title = "changed"  # type: ignore[misc]


class TestLane:
    def test_rails_derived_from_items(self) -> None:
        lane = Lane.from_items(
            "School",
            [
                make_item("u", "2014-09-01", lane="School"),
                make_item("t", "2018-09-01", lane="School", rail=1),
            ],
        )
        assert lane.rails == 2

    def test_single_rail_default(self) -> None:
        lane = Lane.from_items("Work", [make_item("a", "2020-01-01")])
        assert lane.rails == 1

    def test_empty_lane(self) -> None:
        lane = Lane.from_items("Volunteering", [])
        assert lane.items == ()
        assert lane.rails == 1

    def test_item_rail_beyond_lane_rejected(self) -> None:
        with pytest.raises(ValidationError, match="uses rail 1"):
            Lane(name="Work", items=(make_item("a", "2020-01-01", rail=1),), rails=1)

    def test_rails_limited_to_two(self) -> None:
        with pytest.raises(ValidationError):
            Lane(name="Work", rails=3)  # type: ignore[arg-type]

    def test_all_items_preserves_lane_order(self) -> None:
        work = Lane.from_items("Work", [make_item("a", "2020-01-01"), make_item("b", "2019-01-01")])
        school = Lane.from_items("School", [make_item("c", "2010-01-01", lane="School")])
        assert [i.id for i in all_items([work, school])] == ["a", "b", "c"]


class TestIdsAndDates:
    def test_generated_id_is_stable(self) -> None:
        start = datetime(2020, 5, 1)
        assert generate_item_id("Work", "Identio", start) == generate_item_id(
            "Work", "  identio ", start
        )

    def test_generated_id_format(self) -> None:
        item_id = generate_item_id("Work", "Identio", datetime(2020, 5, 1))
        assert item_id.startswith("itm_")
        assert len(item_id) == 12

    def test_generated_id_depends_on_lane(self) -> None:
        start = datetime(2020, 5, 1)
        assert generate_item_id("Work", "x", start) != generate_item_id("School", "x", start)

    def test_parse_item_date_error_carries_field(self) -> None:
        with pytest.raises(InvalidDateInput) as excinfo:
            parse_item_date("end", "2020-13-45")
        assert excinfo.value.field == "end"
        assert excinfo.value.code == "INVALID_DATE"
        assert isinstance(excinfo.value, LayoutError)

    def test_parse_item_date_rejects_non_strings(self) -> None:
        with pytest.raises(InvalidDateInput):
            parse_item_date("start", 20200501)  # type: ignore[arg-type]

    def test_inverted_interval_is_layout_error(self) -> None:
        assert issubclass(InvertedInterval, LayoutError)
        assert issubclass(LayoutError, ValueError)
