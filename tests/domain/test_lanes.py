"""Tests for lane stacking, rail centers and greedy rail packing."""

from __future__ import annotations

from chronolane.domain.lanes import LaneLayoutEngine, pack_rails
from chronolane.domain.params import ScaleConfig
from tests.conftest import make_item, make_lane


def _engine(**overrides: float) -> LaneLayoutEngine:
    values = {"row_height": 60.0, "rail_offset": 30.0, "lane_gap": 0.0, "origin": 0.0}
    values.update(overrides)
    return LaneLayoutEngine(**values)


class TestLaneHeight:
    def test_single_rail(self) -> None:
        assert _engine().lane_height(1) == 60.0

    def test_two_rails(self) -> None:
        assert _engine().lane_height(2) == 120.0


class TestStack:
    def test_cumulative_tops_in_input_order(self) -> None:
        lanes = [make_lane("Work"), make_lane("School", rails=2), make_lane("Volunteering")]
        geometry = _engine().stack(lanes)
        assert [g.name for g in geometry] == ["Work", "School", "Volunteering"]
        assert [g.top for g in geometry] == [0.0, 60.0, 180.0]
        assert [g.height for g in geometry] == [60.0, 120.0, 60.0]

    def test_lanes_never_overlap(self) -> None:
        lanes = [make_lane("A", rails=2), make_lane("B"), make_lane("C", rails=2)]
        geometry = _engine(lane_gap=8.0, origin=40.0).stack(lanes)
        for upper, lower in zip(geometry, geometry[1:], strict=False):
            assert upper.bottom <= lower.top

    def test_origin_and_gap(self) -> None:
        lanes = [make_lane("Work"), make_lane("School")]
        geometry = _engine(lane_gap=10.0, origin=40.0).stack(lanes)
        assert [g.top for g in geometry] == [40.0, 110.0]

    def test_total_height_without_gap(self) -> None:
        lanes = [make_lane("Work"), make_lane("School", rails=2), make_lane("Volunteering")]
        assert _engine().total_height(lanes) == 240.0

    def test_total_height_with_ruler_and_gaps(self) -> None:
        lanes = [make_lane("Work"), make_lane("School", rails=2)]
        assert _engine(lane_gap=10.0, origin=40.0).total_height(lanes) == 40 + 60 + 120 + 10

    def test_empty(self) -> None:
        assert _engine(origin=40.0).stack([]) == []
        assert _engine(origin=40.0).total_height([]) == 40.0


class TestItemCenter:
    def test_rail_zero_centered_in_first_row(self) -> None:
        engine = _engine()
        geo = engine.stack([make_lane("Work")])[0]
        assert engine.item_center(geo, 0) == 30.0

    def test_rail_one_below_first_row(self) -> None:
        engine = _engine()
        geo = engine.stack([make_lane("Work"), make_lane("School", rails=2)])[1]
        assert engine.item_center(geo, 0) == 90.0
        assert engine.item_center(geo, 1) == 150.0

    def test_rail_centers_stay_inside_lane(self) -> None:
        engine = _engine(lane_gap=12.0, origin=40.0)
        for geo in engine.stack([make_lane("A", rails=2), make_lane("B", rails=2)]):
            for rail in range(geo.rails):
                assert geo.top < engine.item_center(geo, rail) < geo.bottom


class TestFromConfig:
    def test_uses_ruler_as_origin(self) -> None:
        engine = LaneLayoutEngine.from_config(ScaleConfig(ruler_height=50, lane_gap=4))
        assert engine.origin == 50
        assert engine.lane_gap == 4
        assert engine.row_height == ScaleConfig().row_height


class TestPackRails:
    def test_disjoint_items_share_rail_zero(self) -> None:
        items = [
            make_item("a", "2016-02-01", "2016-05-30"),
            make_item("b", "2018-04-01", "2019-08-30"),
        ]
        packed, warnings = pack_rails(items)
        assert [i.rail for i in packed] == [0, 0]
        assert warnings == []

    def test_overlap_moves_to_second_rail(self) -> None:
        items = [
            make_item("uni", "2014-09-01", "2019-06-15"),
            make_item("thesis", "2018-09-01", "2019-05-31"),
        ]
        packed, warnings = pack_rails(items)
        assert [i.rail for i in packed] == [0, 1]
        assert warnings == []

    def test_touching_items_are_not_free(self) -> None:
        items = [
            make_item("a", "2020-01-01", "2020-06-01"),
            make_item("b", "2020-06-01", "2020-12-01"),
        ]
        packed, _ = pack_rails(items)
        assert [i.rail for i in packed] == [0, 1]

    def test_overflow_warns_and_reuses_earliest_rail(self) -> None:
        items = [
            make_item("a", "2020-01-01", "2020-12-31"),
            make_item("b", "2020-02-01", "2020-04-30"),
            make_item("c", "2020-03-01", "2020-05-31"),
        ]
        packed, warnings = pack_rails(items)
        assert [i.rail for i in packed] == [0, 1, 1]
        assert len(warnings) == 1
        assert "'c'" in warnings[0]

    def test_preserves_input_order(self) -> None:
        items = [
            make_item("late", "2022-01-01", "2022-06-01"),
            make_item("early", "2020-01-01", "2022-03-01"),
        ]
        packed, _ = pack_rails(items)
        assert [i.id for i in packed] == ["late", "early"]
        assert [i.rail for i in packed] == [1, 0]

    def test_points_pack_like_zero_length_intervals(self) -> None:
        items = [make_item("p1", "2020-01-01"), make_item("p2", "2020-01-02")]
        packed, _ = pack_rails(items)
        assert [i.rail for i in packed] == [0, 0]

    def test_unchanged_items_are_reused(self) -> None:
        item = make_item("a", "2020-01-01", "2020-02-01")
        packed, _ = pack_rails([item])
        assert packed[0] is item
