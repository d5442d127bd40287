from __future__ import annotations

import pytest

from shadecore.exceptions import InvalidCornerCountError, InvalidMeasurementError
from shadecore.geometry.topology import (
    Segment,
    canonical_key,
    check_corner_count,
    covered_triangles,
    diagonal_keys,
    edge_keys,
    fan_triangles,
    measured_length,
    missing_keys,
    required_keys,
)


@pytest.mark.parametrize(
    ("corners", "diagonals", "triangles"),
    [(3, 0, 1), (4, 2, 2), (5, 5, 3), (6, 9, 4)],
)
def test_resolver_coverage(corners, diagonals, triangles):
    assert len(diagonal_keys(corners)) == diagonals
    assert len(fan_triangles(corners)) == triangles


def test_diagonal_key_tables():
    assert diagonal_keys(3) == ()
    assert diagonal_keys(4) == ("AC", "BD")
    assert diagonal_keys(5) == ("AC", "AD", "CE", "BD", "BE")
    assert diagonal_keys(6) == ("AC", "AD", "AE", "BD", "BE", "BF", "CE", "CF", "DF")


def test_edge_keys_wrap_around():
    assert edge_keys(3) == ("AB", "BC", "CA")
    assert edge_keys(4) == ("AB", "BC", "CD", "DA")
    assert required_keys(4) == ("AB", "BC", "CD", "DA", "AC", "BD")


def test_fan_triangles_start_at_a():
    assert [tri.label for tri in fan_triangles(6)] == ["ABC", "ACD", "ADE", "AEF"]


def test_covered_triangles_include_closing_diagonals():
    assert [tri.label for tri in covered_triangles(3)] == ["ABC"]
    assert [tri.label for tri in covered_triangles(4)] == ["ABC", "ACD", "ABD", "BCD"]


def test_triangle_sides_use_convention_labels():
    (triangle,) = fan_triangles(3)
    assert [side.label for side in triangle.sides] == ["AB", "BC", "CA"]


@pytest.mark.parametrize("corners", [0, 2, 7])
def test_unsupported_corner_counts(corners):
    with pytest.raises(InvalidCornerCountError):
        check_corner_count(corners)
    with pytest.raises(InvalidCornerCountError):
        diagonal_keys(corners)


def test_segment_from_label():
    segment = Segment.from_label("ac")
    assert segment == Segment(0, 2)
    assert segment.label == "AC"
    assert segment.reversed().label == "CA"
    assert Segment(3, 0).is_edge(4)
    assert not Segment(0, 2).is_edge(4)


@pytest.mark.parametrize("label", ["AA", "A", "ABC", "AZ", ""])
def test_segment_rejects_bad_labels(label):
    with pytest.raises(InvalidMeasurementError):
        Segment.from_label(label)


def test_canonical_key_orientation_depends_on_corner_count():
    assert canonical_key("AC", 3) == "CA"
    assert canonical_key("CA", 4) == "AC"
    assert canonical_key("AD", 4) == "DA"
    assert canonical_key("db", 4) == "BD"


def test_canonical_key_rejects_unmeasured_segments():
    with pytest.raises(InvalidMeasurementError):
        canonical_key("AE", 4)
    with pytest.raises(InvalidMeasurementError):
        canonical_key("CF", 5)


def test_measured_length_accepts_either_order():
    assert measured_length({"CA": 10}, Segment(0, 2)) == 10
    assert measured_length({"AC": 0}, Segment(0, 2)) is None
    assert measured_length({}, Segment(0, 1)) is None


def test_missing_keys(square):
    assert missing_keys(square, 4) == ()
    del square["BD"]
    assert missing_keys(square, 4) == ("BD",)
