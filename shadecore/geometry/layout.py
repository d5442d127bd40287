"""
Planar Layout Check

Places the corners in the plane by unfolding the fan triangles around
corner A, then checks the result as a polygon:

- the outline must not cross itself
- every diagonal outside the fan must match the distance between the
  placed corners it joins (within a relative tolerance)

Only runs on shapes whose fan area is computable.
"""

from __future__ import annotations

import itertools
import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from loguru import logger
from shapely.geometry import Polygon

from shadecore.geometry.contract import MM2_PER_M2
from shadecore.geometry.topology import (
    Segment,
    corner_letter,
    diagonal_segments,
    fan_triangles,
    measured_length,
    missing_keys,
)
from shadecore.geometry.triangulation import triangle_violation

Point2D = tuple[float, float]


@dataclass(frozen=True)
class DiagonalResidual:
    key: str
    measured_mm: float
    layout_mm: float

    @property
    def relative_error(self) -> float:
        return abs(self.measured_mm - self.layout_mm) / self.layout_mm if self.layout_mm else math.inf


@dataclass(frozen=True)
class LayoutResult:
    """Corner positions in mm with A at the origin and B on the +x axis."""

    points: dict[str, Point2D]
    is_simple: bool
    area_m2: float
    residuals: list[DiagonalResidual] = field(default_factory=list)

    def inconsistent(self, tolerance: float) -> list[DiagonalResidual]:
        return [res for res in self.residuals if res.relative_error > tolerance]


def _angle_at_apex(adjacent_1: float, adjacent_2: float, opposite: float) -> float:
    cosine = (adjacent_1**2 + adjacent_2**2 - opposite**2) / (2 * adjacent_1 * adjacent_2)
    return math.acos(max(-1.0, min(1.0, cosine)))


def _unfold(first_edge: float, rays: list[float], angles: list[float], turns: tuple[int, ...]) -> list[Point2D]:
    points: list[Point2D] = [(0.0, 0.0), (first_edge, 0.0)]
    heading = 0.0
    for ray, angle, turn in zip(rays, angles, turns):
        heading += turn * angle
        points.append((ray * math.cos(heading), ray * math.sin(heading)))
    return points


def _closing_diagonals(measurements: Mapping[str, float], corner_count: int) -> list[tuple[Segment, float]]:
    """Measured diagonals that are not sides of a fan triangle."""
    fan_sides = {side for triangle in fan_triangles(corner_count) for side in triangle.sides}
    closing = []
    for diagonal in diagonal_segments(corner_count):
        if diagonal in fan_sides or diagonal.reversed() in fan_sides:
            continue
        measured = measured_length(measurements, diagonal)
        if measured is not None:
            closing.append((diagonal, measured))
    return closing


def _residuals(points: list[Point2D], closing: list[tuple[Segment, float]]) -> list[DiagonalResidual]:
    residuals = []
    for diagonal, measured in closing:
        (ax, ay), (bx, by) = points[diagonal.a], points[diagonal.b]
        residuals.append(DiagonalResidual(diagonal.label, measured, math.hypot(bx - ax, by - ay)))
    return residuals


def layout_points(measurements: Mapping[str, float], corner_count: int) -> list[Point2D] | None:
    """Unfold the fan triangles around A; None while the fan is incomplete or impossible.

    Each fan triangle after the first may open to either side of the
    previous one. The unfolding that best matches the measured closing
    diagonals wins; ties go to the convex one.
    """
    if missing_keys(measurements, corner_count):
        return None

    rays: list[float] = []
    angles: list[float] = []
    first_edge = 0.0
    for index, triangle in enumerate(fan_triangles(corner_count)):
        # Sides are (A-Vi, Vi-Vi+1, A-Vi+1)
        near, across, far = (measured_length(measurements, side) for side in triangle.sides)
        if near is None or across is None or far is None or triangle_violation(near, across, far):
            return None
        if index == 0:
            first_edge = near
        rays.append(far)
        angles.append(_angle_at_apex(near, far, across))

    closing = _closing_diagonals(measurements, corner_count)
    best: list[Point2D] | None = None
    best_error = math.inf
    for later_turns in itertools.product((1, -1), repeat=len(angles) - 1):
        points = _unfold(first_edge, rays, angles, (1, *later_turns))
        error = sum(res.relative_error for res in _residuals(points, closing))
        if best is None or error < best_error:
            best, best_error = points, error
    return best


def check_layout(measurements: Mapping[str, float], corner_count: int) -> LayoutResult | None:
    points = layout_points(measurements, corner_count)
    if points is None:
        return None

    outline = Polygon(points)
    is_simple = outline.is_valid
    if not is_simple:
        logger.debug("Layout for {corners} corners crosses itself", corners=corner_count)

    return LayoutResult(
        points={corner_letter(i): point for i, point in enumerate(points)},
        is_simple=is_simple,
        area_m2=outline.area / MM2_PER_M2,
        residuals=_residuals(points, _closing_diagonals(measurements, corner_count)),
    )


def layout_warnings(measurements: Mapping[str, float], corner_count: int, tolerance: float = 0.05) -> list[str]:
    """Advisory messages for a self-crossing outline or diagonals that disagree with the layout."""
    result = check_layout(measurements, corner_count)
    if result is None:
        return []
    messages: list[str] = []
    if not result.is_simple:
        messages.append(
            "These measurements describe an outline that crosses itself. Check that the corners "
            "are lettered in order around the sail."
        )
    for residual in result.inconsistent(tolerance):
        messages.append(
            f"Diagonal {residual.key} ({residual.measured_mm:.0f}mm) does not agree with the other "
            f"measurements, which place those corners {residual.layout_mm:.0f}mm apart."
        )
    return messages


__all__ = [
    "DiagonalResidual",
    "LayoutResult",
    "layout_points",
    "check_layout",
    "layout_warnings",
]
