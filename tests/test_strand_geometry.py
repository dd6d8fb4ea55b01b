"""Tests for active strand resolution of full-width and cut-width products."""

import pytest

from precast_camber.core.strand_geometry import (
    casting_width, grade_problems, is_cut_width, pattern_full_width, resolve
)
from precast_camber.models import OffcutSide, StrandCoordinate, StrandPattern
from precast_camber.utils.tables import ConfigurationError
from tests.conftest import full_width_pattern


def mixed_pattern():
    """Two 1/2" strands low, two 3/8" strands higher; grades split per size."""
    return StrandPattern(
        pattern_id="300-75",
        counts_by_size={"1/2": 2, "3/8": 2},
        grade_counts={"1/2": {"270": 1, "250": 1}},
        coordinates=(
            StrandCoordinate(size="1/2", order=2, x=10.0, y=2.0),
            StrandCoordinate(size="1/2", order=1, x=2.0, y=2.0),
            StrandCoordinate(size="3/8", order=1, x=6.0, y=4.0),
            StrandCoordinate(size="3/8", order=2, x=14.0, y=4.0),
        ),
    )


class TestCutWidthDetection:

    def test_narrower_than_tolerance_is_not_cut(self):
        assert not is_cut_width(48.0, 47.995, 0.01)

    def test_narrower_beyond_tolerance_is_cut(self):
        assert is_cut_width(48.0, 30.0, 0.01)

    def test_wider_product_is_not_cut(self):
        assert not is_cut_width(44.0, 48.0, 0.01)

    def test_missing_values(self):
        assert not is_cut_width(None, 30.0, 0.01)
        assert not is_cut_width(48.0, None, 0.01)

    def test_full_width_of_pattern(self):
        assert pattern_full_width(full_width_pattern()) == pytest.approx(44.0)
        assert pattern_full_width(StrandPattern(pattern_id="1-75")) is None


class TestFullWidth:

    def test_all_strands_active_without_width(self, library):
        active = resolve(full_width_pattern(), library)
        assert active.count == 6
        assert not active.is_cut
        assert active.full_width == pytest.approx(44.0)

    def test_product_equal_to_full_width(self, library):
        active = resolve(full_width_pattern(), library, product_width=44.0)
        assert active.count == 6
        assert not active.is_cut

    def test_l1_at_full_width_keeps_everything(self, library):
        active = resolve(full_width_pattern(), library, 44.0, OffcutSide.L1)
        assert active.count == 6

    def test_side_ignored_when_not_cut(self, library):
        active = resolve(full_width_pattern(), library, 48.0, OffcutSide.L2)
        assert active.count == 6

    def test_centroid_and_area(self, library):
        active = resolve(full_width_pattern(y=1.75), library)
        assert active.area_weighted_centroid_y == pytest.approx(1.75)
        assert active.total_area == pytest.approx(6 * 0.153)


class TestCutWidth:

    def test_left_removed(self, library):
        # full width 44, keep x >= 44 - 20 = 24: strands at 28, 36, 44
        active = resolve(full_width_pattern(), library, 20.0, OffcutSide.L1)
        assert active.is_cut
        assert [s.x for s in active.strands] == [28.0, 36.0, 44.0]

    def test_right_removed(self, library):
        # keep x <= 20: strands at 4, 12, 20 (20 is on the saw line)
        active = resolve(full_width_pattern(), library, 20.0, OffcutSide.L2)
        assert [s.x for s in active.strands] == [4.0, 12.0, 20.0]

    def test_boundary_inclusive_left(self, library):
        # 44 - 24 = 20: the strand at x = 20 stays
        active = resolve(full_width_pattern(), library, 24.0, OffcutSide.L1)
        assert 20.0 in [s.x for s in active.strands]

    def test_side_accepts_string(self, library):
        active = resolve(full_width_pattern(), library, 20.0, "L2")
        assert active.count == 3

    def test_cut_without_side_keeps_all(self, library):
        active = resolve(full_width_pattern(), library, 20.0, None)
        assert active.is_cut
        assert active.count == 6

    def test_no_strands_remaining(self, library):
        active = resolve(full_width_pattern(), library, 2.0, OffcutSide.L2)
        assert active.is_empty
        assert active.area_weighted_centroid_y is None
        assert active.total_area == 0.0
        assert "right" in active.reason

    def test_centroid_uses_active_strands_only(self, library):
        # left removed, full width 14, keep x >= 14 - 5 = 9: 1/2" at x=10 and 3/8" at x=14
        active = resolve(mixed_pattern(), library, 5.0, OffcutSide.L1)
        assert active.count == 2
        a_half, a_38 = 0.144, 0.080
        expected = (a_half * 2.0 + a_38 * 4.0) / (a_half + a_38)
        assert active.area_weighted_centroid_y == pytest.approx(expected)

    def test_cut_against_given_casting_width(self, library):
        top = StrandPattern(
            pattern_id="T-70",
            counts_by_size={"1/2": 2},
            coordinates=(
                StrandCoordinate(size="1/2", order=1, x=10.0, y=7.0),
                StrandCoordinate(size="1/2", order=2, x=34.0, y=7.0),
            ),
        )
        # own width 34 would keep both; the 44 in casting keeps x >= 14
        active = resolve(top, library, 30.0, OffcutSide.L1, full_width=44.0)
        assert active.is_cut
        assert active.full_width == pytest.approx(44.0)
        assert [s.x for s in active.strands] == [34.0]


class TestCastingWidth:

    def test_bottom_pattern_sets_width(self):
        top = StrandPattern(
            pattern_id="T-70",
            counts_by_size={"3/8": 1},
            coordinates=(StrandCoordinate(size="3/8", x=50.0, y=7.0),),
        )
        assert casting_width(full_width_pattern(), top) == pytest.approx(44.0)
        assert casting_width(None, top) == pytest.approx(50.0)

    def test_no_coordinates(self):
        bare = StrandPattern(pattern_id="1-75")
        assert casting_width(None, None) is None
        assert casting_width(bare) is None


class TestGradeAssignment:

    def test_grades_follow_order_sequence(self, library):
        active = resolve(mixed_pattern(), library)
        half = sorted((s for s in active.strands if s.size.value == "1/2"), key=lambda s: s.order)
        assert [s.grade.grade for s in half] == ["270", "250"]
        assert [s.x for s in half] == [2.0, 10.0]

    def test_size_without_grades_uses_first_library_grade(self, library):
        active = resolve(mixed_pattern(), library)
        small = [s for s in active.strands if s.size.value == "3/8"]
        assert {s.grade.grade for s in small} == {"250"}

    def test_unknown_grade_reported(self, library):
        pattern = StrandPattern(
            pattern_id="9-75",
            counts_by_size={"0.6": 1},
            grade_counts={"0.6": {"300": 1}},
            coordinates=(StrandCoordinate(size="0.6", x=4.0, y=2.0),),
        )
        problems = grade_problems(pattern, library)
        assert len(problems) == 1
        assert "300" in problems[0]
        with pytest.raises(ConfigurationError):
            resolve(pattern, library)

    def test_known_grades_have_no_problems(self, library):
        assert grade_problems(mixed_pattern(), library) == []

    def test_pattern_without_coordinates(self, library):
        pattern = StrandPattern(pattern_id="5-75", counts_by_size={"1/2": 4})
        active = resolve(pattern, library)
        assert active.is_empty
        assert "no strand coordinates" in active.reason
