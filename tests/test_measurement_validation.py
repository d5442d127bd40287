from __future__ import annotations

import pytest

from shadecore.geometry.topology import Segment
from shadecore.geometry.units import Unit
from shadecore.settings import LimitSettings
from shadecore.validate.measurement_validation import (
    check_diagonal_ranges,
    check_heights,
    check_measurements,
    check_perimeter_limit,
    diagonal_range,
    format_diagonal_errors,
    suggest_typo_fix,
)


def test_typical_values_pass(square):
    result = check_measurements(square, Unit.METRIC)
    assert result.is_valid
    assert result.errors == {}
    assert result.typo_suggestions == {}


@pytest.mark.parametrize(
    ("value", "suggestion"),
    [
        (5, 5000),  # metres typed as mm
        (45, 4500),  # dropped two digits
        (500, 5000),  # cm typed as mm
        (150_000, 15_000),  # extra digit
    ],
)
def test_metric_typo_suggestions(value, suggestion):
    result = check_measurements({"AB": value}, Unit.METRIC)
    assert result.typo_suggestions == {"AB": pytest.approx(suggestion)}
    assert "AB" not in result.errors


def test_metric_too_small_without_suggestion():
    result = check_measurements({"AB": 0.5}, Unit.METRIC)
    assert result.errors["AB"] == "Too small (min 1000mm) - Did you enter cm instead of mm?"


def test_metric_too_large_without_suggestion():
    result = check_measurements({"AB": 5_000_000}, Unit.METRIC)
    assert result.errors["AB"] == "Too large (max 99999mm) - Check your measurement"


def test_imperial_feet_typed_as_inches():
    # 20" entered where 20ft was meant
    suggestion = suggest_typo_fix(20 * 25.4, Unit.IMPERIAL, "edge", LimitSettings())
    assert suggestion == pytest.approx(240 * 25.4, rel=1e-4)


def test_imperial_too_small_mentions_feet():
    result = check_measurements({"AB": 0.5 * 25.4}, Unit.IMPERIAL)
    assert result.errors["AB"].startswith("Too small (min 3'3.4\")")
    assert result.errors["AB"].endswith("Did you enter feet instead of inches?")


def test_heights_are_keyed_by_corner_index():
    result = check_heights([0, 500, 2500], Unit.METRIC)
    assert result.typo_suggestions == {"height_1": pytest.approx(5000)}
    assert result.errors == {}


def test_perimeter_limit():
    assert check_perimeter_limit(50.0, Unit.METRIC) is None
    metric = check_perimeter_limit(51.0, Unit.METRIC)
    assert metric == (
        "Shade sail is too large (51.0m perimeter). Maximum allowed is 50m. Please re-check your measurements."
    )
    imperial = check_perimeter_limit(51.0, Unit.IMPERIAL)
    assert "167.3ft perimeter" in imperial
    assert "164ft" in imperial


def test_diagonal_range_uses_both_edge_chains(square):
    bounds = diagonal_range(square, Segment(0, 2), 4)
    assert bounds.minimum == pytest.approx(0.0)
    assert bounds.maximum == pytest.approx(8000.0)


def test_diagonal_range_needs_every_edge(square):
    del square["DA"]
    assert diagonal_range(square, Segment(0, 2), 4) is None


def test_diagonal_too_long(square):
    square["AC"] = 9000
    messages = check_diagonal_ranges(square, 4)
    assert len(messages) == 1
    assert messages[0].startswith("Diagonal AC (9000mm) is too long.")
    assert "cannot exceed 8000mm" in messages[0]


def test_diagonal_too_short():
    measurements = {"AB": 4000, "BC": 1000, "CD": 4000, "DA": 1000, "AC": 2000, "BD": 4100}
    messages = check_diagonal_ranges(measurements, 4)
    assert any(msg.startswith("Diagonal AC (2000mm) is too short.") for msg in messages)


def test_diagonal_within_tolerance_passes(square):
    square["AC"] = 8200
    assert check_diagonal_ranges(square, 4, tolerance=0.05) == []


def test_format_diagonal_errors():
    assert format_diagonal_errors([]) == []
    assert format_diagonal_errors(["Something else"]) == ["Something else"]
    wrapped = format_diagonal_errors(["Diagonal AC (9000mm) is too long."])
    assert wrapped[0].startswith("We noticed")
    assert "• Diagonal AC (9000mm) is too long." in wrapped
    assert wrapped[-1].startswith("Tip:")
