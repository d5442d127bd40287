"""
Polygon Geometry Validation

Checks that a complete set of edge and diagonal lengths can describe a real
sail. Every triangle whose three sides were measured must satisfy the strict
triangle inequality. Incomplete input is not an error: the check is deferred
until every required key is present.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from loguru import logger

from shadecore.geometry.contract import MIN_CORNERS
from shadecore.geometry.topology import Triangle, covered_triangles, measured_length, missing_keys
from shadecore.geometry.triangulation import triangle_violation


@dataclass(frozen=True)
class PolygonValidationResult:
    """Result of polygon validation."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    checked_triangles: list[str] = field(default_factory=list)
    complete: bool = True

    def has_critical_issues(self) -> bool:
        """Check if there are issues that should block ordering."""
        return len(self.errors) > 0


def describe_violation(triangle: Triangle, lengths: list[float]) -> str | None:
    """Human-readable message for a triangle breaking the inequality, else None."""
    violation = triangle_violation(*lengths)
    if violation is None:
        return None
    labels = [seg.label for seg in triangle.sides]
    longest = labels[violation.longest_index]
    first, second = (label for i, label in enumerate(labels) if i != violation.longest_index)
    relation = "equal to" if violation.longest == violation.others_sum else "longer than"
    return (
        f"Triangle {triangle.label}: {longest} ({violation.longest:.0f}mm) is {relation} "
        f"{first} + {second} ({violation.others[0]:.0f}mm + {violation.others[1]:.0f}mm = "
        f"{violation.others_sum:.0f}mm), so these three measurements cannot form a triangle"
    )


def validate_polygon(measurements: Mapping[str, float], corner_count: int) -> PolygonValidationResult:
    """
    Validate edge and diagonal measurements for geometric feasibility.

    Checks:
    - Corner count below 3: nothing to check, valid
    - Missing edge/diagonal keys: deferred, valid with ``complete=False``
    - Every measured triangle satisfies p + q > r for all three sides

    Args:
        measurements: Lengths in mm keyed by two-letter segment labels
        corner_count: Number of sail corners

    Returns:
        PolygonValidationResult with one error per violating triangle
    """
    if corner_count < MIN_CORNERS:
        return PolygonValidationResult(is_valid=True)

    missing = missing_keys(measurements, corner_count)
    if missing:
        return PolygonValidationResult(is_valid=True, complete=False)

    errors: list[str] = []
    checked: list[str] = []
    for triangle in covered_triangles(corner_count):
        lengths = [measured_length(measurements, seg) or 0.0 for seg in triangle.sides]
        checked.append(triangle.label)
        message = describe_violation(triangle, lengths)
        if message:
            errors.append(message)

    if errors:
        logger.debug(
            "Polygon with {corners} corners failed {count} triangle checks",
            corners=corner_count,
            count=len(errors),
        )
    return PolygonValidationResult(is_valid=not errors, errors=errors, checked_triangles=checked)


__all__ = ["PolygonValidationResult", "describe_violation", "validate_polygon"]
