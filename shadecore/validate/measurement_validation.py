"""
Measurement Range Validation

Catches typing mistakes before they reach the geometry checks: values
outside the manufacturable range, values that look like a dropped or extra
digit, feet typed where inches were expected, and diagonals that cannot fit
between their neighbouring edges.

All checks are advisory and return data; nothing here raises for bad input.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

from shadecore.geometry.contract import INCHES_TO_MM, MM_TO_INCHES
from shadecore.geometry.topology import (
    Segment,
    diagonal_segments,
    edge_segments,
    measured_length,
)
from shadecore.geometry.units import Unit, format_length
from shadecore.settings import LimitSettings

Kind = Literal["edge", "height"]

_METERS_TO_FEET = 3.28084


@dataclass
class MeasurementCheckResult:
    """Range errors and suggested corrections (in mm) keyed by measurement key."""

    errors: dict[str, str] = field(default_factory=dict)
    typo_suggestions: dict[str, float] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors and not self.typo_suggestions


@dataclass(frozen=True)
class TypoRule:
    """Multiply ``value`` by ``factor`` when it falls in [lower, upper]."""

    lower: float
    upper: float
    factor: float
    # Target range is the typical range unless widened up to the manufacturing max
    up_to_max: bool = False
    upper_exclusive: bool = False
    lower_exclusive: bool = False

    def matches(self, value: float) -> bool:
        above = value > self.lower if self.lower_exclusive else value >= self.lower
        below = value < self.upper if self.upper_exclusive else value <= self.upper
        return above and below


def _metric_rules(kind: Kind, limits: LimitSettings) -> list[TypoRule]:
    typical_min, typical_max = _typical_range_mm(kind, limits)
    return [
        TypoRule(100000, math.inf, 0.01),
        TypoRule(1, 9, 1000),
        TypoRule(10, 99, 100),
        TypoRule(100, typical_min, 10, upper_exclusive=True),
        TypoRule(max(typical_max, 100000), math.inf, 0.1, up_to_max=True),
        TypoRule(typical_max + 1000, 99999, 0.1, up_to_max=True),
    ]


# Inch breakpoints from the configurator's imperial typo table
_IMPERIAL_BREAKPOINTS: dict[str, dict[str, tuple[float, float]]] = {
    "edge": {"feet": (10, 50), "extra_digit": (1000, math.inf), "medium": (600, 999), "short": (51, 78)},
    "height": {"feet": (10, 30), "extra_digit": (500, math.inf), "medium": (316, 499), "short": (31, 78)},
}


def _imperial_rules(kind: Kind) -> list[TypoRule]:
    points = _IMPERIAL_BREAKPOINTS[kind]
    return [
        TypoRule(10000, math.inf, 0.01),
        TypoRule(1, 9, 12),
        TypoRule(*points["feet"], 12),
        TypoRule(*points["extra_digit"], 0.1, lower_exclusive=True),
        TypoRule(*points["medium"], 0.1),
        TypoRule(*points["short"], 10),
    ]


def _typical_range_mm(kind: Kind, limits: LimitSettings) -> tuple[float, float]:
    if kind == "height":
        return limits.typical_height_min_mm, limits.typical_height_max_mm
    return limits.typical_edge_min_mm, limits.typical_edge_max_mm


def _typical_range_in(kind: Kind, limits: LimitSettings) -> tuple[float, float]:
    if kind == "height":
        return limits.typical_height_min_in, limits.typical_height_max_in
    return limits.typical_edge_min_in, limits.typical_edge_max_in


def suggest_typo_fix(value_mm: float, unit: Unit | str, kind: Kind, limits: LimitSettings) -> float | None:
    """Suggested corrected value in mm, or None when no rule fits."""
    if Unit(unit) is Unit.IMPERIAL:
        value = value_mm * MM_TO_INCHES
        typical_min, typical_max = _typical_range_in(kind, limits)
        ceiling = limits.max_measurement_mm * MM_TO_INCHES
        rules = _imperial_rules(kind)
        scale = INCHES_TO_MM
    else:
        value = value_mm
        typical_min, typical_max = _typical_range_mm(kind, limits)
        ceiling = limits.max_measurement_mm
        rules = _metric_rules(kind, limits)
        scale = 1.0

    for rule in rules:
        if not rule.matches(value):
            continue
        candidate = value * rule.factor
        upper = ceiling if rule.up_to_max else typical_max
        if typical_min <= candidate <= upper:
            return candidate * scale
    return None


def _range_error(value_mm: float, unit: Unit | str, limits: LimitSettings) -> str | None:
    imperial = Unit(unit) is Unit.IMPERIAL
    if value_mm < limits.min_measurement_mm:
        if imperial:
            minimum = format_length(limits.min_measurement_mm, Unit.IMPERIAL)
            return f"Too small (min {minimum}) - Did you enter feet instead of inches?"
        return f"Too small (min {limits.min_measurement_mm:.0f}mm) - Did you enter cm instead of mm?"
    if value_mm > limits.max_measurement_mm:
        if imperial:
            maximum = format_length(limits.max_measurement_mm, Unit.IMPERIAL)
            return f"Too large (max {maximum}) - Check your measurement"
        return f"Too large (max {limits.max_measurement_mm:.0f}mm) - Check your measurement"
    return None


def _check_values(
    values: Mapping[str, float],
    unit: Unit | str,
    kind: Kind,
    limits: LimitSettings,
) -> MeasurementCheckResult:
    result = MeasurementCheckResult()
    for key, value in values.items():
        if not value or value <= 0:
            continue
        suggestion = suggest_typo_fix(value, unit, kind, limits)
        if suggestion is not None:
            result.typo_suggestions[key] = suggestion
            continue
        error = _range_error(value, unit, limits)
        if error:
            result.errors[key] = error
    return result


def check_measurements(
    measurements: Mapping[str, float],
    unit: Unit | str,
    limits: LimitSettings | None = None,
) -> MeasurementCheckResult:
    """Range and typo checks for edge and diagonal lengths (mm)."""
    return _check_values(measurements, unit, "edge", limits or LimitSettings())


def check_heights(
    heights: Sequence[float],
    unit: Unit | str,
    limits: LimitSettings | None = None,
) -> MeasurementCheckResult:
    """Range and typo checks for anchor heights, keyed ``height_<index>``."""
    keyed = {f"height_{index}": height for index, height in enumerate(heights)}
    return _check_values(keyed, unit, "height", limits or LimitSettings())


def check_perimeter_limit(perimeter_m: float, unit: Unit | str, max_perimeter_m: float = 50.0) -> str | None:
    """Message when the sail is larger than can be manufactured."""
    if perimeter_m <= max_perimeter_m:
        return None
    if Unit(unit) is Unit.IMPERIAL:
        perimeter_ft = perimeter_m * _METERS_TO_FEET
        max_ft = max_perimeter_m * _METERS_TO_FEET
        return (
            f"Shade sail is too large ({perimeter_ft:.1f}ft perimeter). Maximum allowed is "
            f"{max_ft:.0f}ft. Please re-check your measurements."
        )
    return (
        f"Shade sail is too large ({perimeter_m:.1f}m perimeter). Maximum allowed is "
        f"{max_perimeter_m:.0f}m. Please re-check your measurements."
    )


@dataclass(frozen=True)
class DiagonalRange:
    minimum: float
    maximum: float


def _chain_bounds(lengths: list[float]) -> tuple[float, float]:
    # An open chain of edges can close to no less than longest - rest
    total = sum(lengths)
    longest = max(lengths)
    return max(0.0, 2 * longest - total), total


def diagonal_range(measurements: Mapping[str, float], diagonal: Segment, corner_count: int) -> DiagonalRange | None:
    """Feasible length range for ``diagonal`` given the two edge chains it splits the outline into."""
    edges = edge_segments(corner_count)
    lengths = [measured_length(measurements, seg) for seg in edges]
    if any(length is None for length in lengths):
        return None

    start, end = sorted((diagonal.a, diagonal.b))
    first_chain = [lengths[i] for i in range(start, end)]
    second_chain = [lengths[i % corner_count] for i in range(end, start + corner_count)]

    first_min, first_max = _chain_bounds(first_chain)
    second_min, second_max = _chain_bounds(second_chain)
    return DiagonalRange(minimum=max(first_min, second_min), maximum=min(first_max, second_max))


def check_diagonal_ranges(
    measurements: Mapping[str, float],
    corner_count: int,
    tolerance: float = 0.05,
) -> list[str]:
    """Advisory messages for diagonals outside their feasible range (with tolerance)."""
    messages: list[str] = []
    for diagonal in diagonal_segments(corner_count):
        value = measured_length(measurements, diagonal)
        if value is None:
            continue
        bounds = diagonal_range(measurements, diagonal, corner_count)
        if bounds is None:
            continue
        if value < bounds.minimum * (1 - tolerance):
            messages.append(
                f"Diagonal {diagonal.label} ({value:.0f}mm) is too short. With your edge measurements, "
                f"it should be at least {bounds.minimum:.0f}mm."
            )
        elif value > bounds.maximum * (1 + tolerance):
            messages.append(
                f"Diagonal {diagonal.label} ({value:.0f}mm) is too long. With your edge measurements, "
                f"it cannot exceed {bounds.maximum:.0f}mm."
            )
    return messages


def format_diagonal_errors(errors: list[str]) -> list[str]:
    """Wrap diagonal messages with an explanation and a closing tip."""
    if not errors:
        return []
    if not any("Diagonal" in err for err in errors):
        return list(errors)
    return [
        "We noticed some of your measurements don't quite add up. This is usually caused by a "
        "simple typo or mix-up when entering numbers. Please review the following:",
        "",
        *(f"• {err}" for err in errors),
        "",
        "Tip: Check that your diagonal measurements are compatible with your edge measurements. "
        "If you're unsure, try re-measuring or double-check for typos.",
    ]


__all__ = [
    "MeasurementCheckResult",
    "TypoRule",
    "DiagonalRange",
    "suggest_typo_fix",
    "check_measurements",
    "check_heights",
    "check_perimeter_limit",
    "diagonal_range",
    "check_diagonal_ranges",
    "format_diagonal_errors",
]
