"""Tests for strand pattern and strand library models."""

import pytest
from pydantic import ValidationError

from precast_camber.models import (
    StrandCoordinate, StrandPattern, StrandPosition, StrandSize, pulling_force_from_label
)
from tests.conftest import full_width_pattern


class TestPullingForceLabel:

    def test_percent_from_label(self):
        assert pulling_force_from_label("101-75") == pytest.approx(75.0)

    def test_decimal_percent(self):
        assert pulling_force_from_label("HC8-72.5") == pytest.approx(72.5)

    def test_label_without_suffix(self):
        assert pulling_force_from_label("101") is None
        assert pulling_force_from_label("") is None

    def test_pattern_takes_percent_from_label(self):
        assert full_width_pattern("204-70").pulling_force_percent == pytest.approx(70.0)

    def test_explicit_percent_wins(self):
        pattern = StrandPattern(pattern_id="101-75", pulling_force_percent=68.0)
        assert pattern.pulling_force_percent == pytest.approx(68.0)

    def test_missing_percent_rejected(self):
        with pytest.raises(ValidationError):
            StrandPattern(pattern_id="A1")

    @pytest.mark.parametrize("percent", [0.0, -5.0, 100.5])
    def test_percent_out_of_range(self, percent):
        with pytest.raises(ValidationError):
            StrandPattern(pattern_id="A1", pulling_force_percent=percent)


class TestPatternInvariants:

    def test_coordinate_count_must_match(self):
        with pytest.raises(ValidationError):
            StrandPattern(
                pattern_id="101-75",
                counts_by_size={"1/2": 3},
                coordinates=(StrandCoordinate(size="1/2", x=2.0, y=2.0),),
            )

    def test_grade_counts_must_sum_to_size_count(self):
        with pytest.raises(ValidationError):
            StrandPattern(
                pattern_id="101-75",
                counts_by_size={"1/2": 4},
                grade_counts={"1/2": {"270": 3}},
            )

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            StrandPattern(pattern_id="101-75", counts_by_size={"1/2": -1})

    def test_unknown_size_rejected(self):
        with pytest.raises(ValidationError):
            StrandPattern(pattern_id="101-75", counts_by_size={"7/16": 2})

    def test_counts_without_coordinates_allowed(self):
        pattern = StrandPattern(pattern_id="101-75", counts_by_size={"1/2": 4})
        assert pattern.strand_count == 4
        assert pattern.full_width is None

    def test_full_width_is_max_x(self):
        assert full_width_pattern().full_width == pytest.approx(44.0)

    def test_pattern_is_immutable(self):
        pattern = full_width_pattern()
        with pytest.raises(ValidationError):
            pattern.pattern_id = "other"

    def test_size_diameters(self):
        assert StrandSize.SIZE_3_8.diameter == pytest.approx(0.375)
        assert StrandSize.SIZE_0_6.diameter == pytest.approx(0.6)


class TestFromPayload:

    PAYLOAD = {
        "id": "abc",
        "patternId": "101-75",
        "position": "Bottom",
        "strand_1_2": 2,
        "strand_3_8": 1,
        "strandGradeCounts": {"1/2": {"270": 2, "250": 0}},
        "strandCoordinates": [
            {"size": "1/2", "x": 4, "y": 1.75, "order": 1},
            {"size": "1/2", "x": 12, "y": 1.75, "order": 2},
            {"size": "3/8", "x": 8, "y": 1.5},
        ],
    }

    def test_counts_and_coordinates(self):
        pattern = StrandPattern.from_payload(self.PAYLOAD)
        assert pattern.pattern_id == "101-75"
        assert pattern.position == StrandPosition.BOTTOM
        assert pattern.counts_by_size[StrandSize.SIZE_1_2] == 2
        assert pattern.counts_by_size[StrandSize.SIZE_3_8] == 1
        assert len(pattern.coordinates) == 3

    def test_zero_grade_counts_dropped(self):
        pattern = StrandPattern.from_payload(self.PAYLOAD)
        assert pattern.grade_counts == {StrandSize.SIZE_1_2: {"270": 2}}

    def test_missing_order_defaults_to_index(self):
        pattern = StrandPattern.from_payload(self.PAYLOAD)
        assert pattern.coordinates[2].order == 2

    def test_percent_from_label(self):
        assert StrandPattern.from_payload(self.PAYLOAD).pulling_force_percent == 75.0

    def test_bad_coordinates_dropped_and_counts_from_grades(self):
        payload = {
            "patternId": "7-80",
            "strandGradeCounts": {"1/2": {"270": 1}, "0.6": {"270": 1}},
            "strandCoordinates": [
                {"size": "1/2", "x": 4, "y": 2},
                {"size": "7/16", "x": 8, "y": 2},
                {"size": "1/2", "x": "abc", "y": 2},
                {"size": "0.6", "x": 10, "y": 2.5},
            ],
        }
        pattern = StrandPattern.from_payload(payload)
        assert pattern.counts_by_size == {
            StrandSize.SIZE_3_8: 0, StrandSize.SIZE_1_2: 1, StrandSize.SIZE_0_6: 1
        }
        assert len(pattern.coordinates) == 2

    def test_coordinates_alone_do_not_set_counts(self):
        payload = {
            "patternId": "7-80",
            "strandCoordinates": [{"size": "1/2", "x": 4, "y": 2}],
        }
        with pytest.raises(ValidationError, match="0 declared"):
            StrandPattern.from_payload(payload)

    def test_non_integer_order_falls_back_to_index(self):
        payload = {
            "patternId": "101-75",
            "strand_1_2": 3,
            "strandCoordinates": [
                {"size": "1/2", "x": 4, "y": 2, "order": True},
                {"size": "1/2", "x": 8, "y": 2, "order": 1.5},
                {"size": "1/2", "x": 12, "y": 2, "order": 7.0},
            ],
        }
        pattern = StrandPattern.from_payload(payload)
        assert [c.order for c in pattern.coordinates] == [0, 1, 7]


class TestStrandLibrary:

    def test_lookup(self, library):
        grade = library.lookup("1/2", "270")
        assert grade.area == pytest.approx(0.153)
        assert grade.breaking_strength == pytest.approx(41.3)

    def test_lookup_accepts_numeric_grade(self, library):
        assert library.lookup(StrandSize.SIZE_1_2, 270) is library.lookup("1/2", "270")

    def test_lookup_missing(self, library):
        assert library.lookup("0.6", "250") is None

    def test_first_grade_follows_library_order(self, library):
        assert library.first_grade("1/2").grade == "250"
        assert library.first_grade("0.6").grade == "270"

    def test_grades_for(self, library):
        assert [g.grade for g in library.grades_for("3/8")] == ["250", "270"]
