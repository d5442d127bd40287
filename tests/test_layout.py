from __future__ import annotations

import pytest

from shadecore.geometry.layout import check_layout, layout_points, layout_warnings


def _overlapping_hexagon() -> dict[str, float]:
    # Each fan triangle opens 100 degrees at A, so the outline wraps past a full turn
    chord = 4596.3
    measurements = {"AB": 3000, "BC": chord, "CD": chord, "DE": chord, "EF": chord, "FA": 3000}
    measurements.update({"AC": 3000, "AD": 3000, "AE": 3000})
    measurements.update({key: 3000 for key in ("BD", "BE", "BF", "CE", "CF", "DF")})
    return measurements


def test_square_layout(square):
    points = layout_points(square, 4)
    assert points is not None
    assert points[0] == (0.0, 0.0)
    assert points[1] == (4000, 0.0)
    assert points[2][0] == pytest.approx(4000, abs=2)
    assert points[2][1] == pytest.approx(4000, abs=2)
    assert points[3][0] == pytest.approx(0, abs=2)
    assert points[3][1] == pytest.approx(4000, abs=2)


def test_square_layout_is_consistent(square):
    result = check_layout(square, 4)
    assert result is not None
    assert result.is_simple
    assert result.area_m2 == pytest.approx(16.0, abs=1e-2)
    assert [res.key for res in result.residuals] == ["BD"]
    assert result.residuals[0].layout_mm == pytest.approx(5657, abs=2)
    assert result.inconsistent(0.05) == []
    assert layout_warnings(square, 4) == []


def test_incomplete_measurements_have_no_layout(square):
    del square["AC"]
    assert check_layout(square, 4) is None
    assert layout_warnings(square, 4) == []


def test_inconsistent_closing_diagonal(square):
    square["BD"] = 7000
    messages = layout_warnings(square, 4)
    assert len(messages) == 1
    assert messages[0].startswith("Diagonal BD (7000mm) does not agree")


def test_outline_that_wraps_past_a_full_turn():
    result = check_layout(_overlapping_hexagon(), 6)
    assert result is not None
    assert not result.is_simple
    assert any("crosses itself" in msg for msg in layout_warnings(_overlapping_hexagon(), 6))


def test_sail_concave_at_d_unfolds_to_the_matching_side():
    # A(0,0) B(4000,0) C(4000,4000) D(2000,1000): D sits on B's side of AC
    measurements = {"AB": 4000, "BC": 4000, "CD": 3605.6, "DA": 2236.1, "AC": 5656.9, "BD": 2236.1}
    result = check_layout(measurements, 4)
    assert result is not None
    assert result.is_simple
    assert result.points["D"][0] == pytest.approx(2000, abs=2)
    assert result.points["D"][1] == pytest.approx(1000, abs=2)
    assert result.inconsistent(0.05) == []
    assert layout_warnings(measurements, 4) == []
