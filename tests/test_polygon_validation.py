from __future__ import annotations

from shadecore.geometry.area import calculate_area
from shadecore.validate.polygon_validation import validate_polygon


def test_equilateral_triangle_is_valid(equilateral):
    result = validate_polygon(equilateral, 3)
    assert result.is_valid
    assert result.complete
    assert result.errors == []
    assert result.checked_triangles == ["ABC"]
    assert not result.has_critical_issues()


def test_degenerate_triangle_reports_one_error():
    result = validate_polygon({"AB": 1000, "BC": 1000, "CA": 5000}, 3)
    assert not result.is_valid
    assert len(result.errors) == 1
    message = result.errors[0]
    assert message.startswith("Triangle ABC: CA (5000mm) is longer than AB + BC")
    assert "(1000mm + 1000mm = 2000mm)" in message
    assert result.has_critical_issues()


def test_collinear_corners_are_invalid():
    result = validate_polygon({"AB": 1000, "BC": 1000, "CA": 2000}, 3)
    assert not result.is_valid
    assert "is equal to" in result.errors[0]


def test_incomplete_input_is_deferred():
    result = validate_polygon({"AB": 4000, "BC": 4000}, 4)
    assert result.is_valid
    assert not result.complete
    assert result.errors == []
    assert result.checked_triangles == []


def test_fewer_than_three_corners_is_trivially_valid():
    assert validate_polygon({}, 2).is_valid


def test_square_is_valid(square):
    result = validate_polygon(square, 4)
    assert result.is_valid
    assert result.checked_triangles == ["ABC", "ACD", "ABD", "BCD"]


def test_closing_diagonal_checked_even_when_area_is_computable(square):
    square["BD"] = 9000
    # Fan triangles ABC and ACD are fine, so an area exists
    assert calculate_area(square, 4) > 0

    result = validate_polygon(square, 4)
    assert not result.is_valid
    assert len(result.errors) == 2
    assert result.errors[0].startswith("Triangle ABD: BD (9000mm)")
    assert result.errors[1].startswith("Triangle BCD: BD (9000mm)")


def test_one_error_per_violating_triangle():
    measurements = {"AB": 1000, "BC": 1000, "CD": 4000, "DA": 4000, "AC": 3000, "BD": 4500}
    result = validate_polygon(measurements, 4)
    labels = [error.split(":")[0] for error in result.errors]
    assert labels == ["Triangle ABC"]
