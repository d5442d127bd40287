"""
Area and Perimeter

The sail is split into the fan triangles from corner A and each triangle is
measured with Heron's formula. No coordinates are reconstructed.
"""

from __future__ import annotations

from collections.abc import Mapping

from loguru import logger

from shadecore.geometry.contract import m, m2
from shadecore.geometry.topology import (
    edge_segments,
    fan_triangles,
    measured_length,
    missing_keys,
)
from shadecore.geometry.triangulation import triangle_area_mm2


def calculate_perimeter_mm(measurements: Mapping[str, float], corner_count: int) -> float:
    """Sum of edge lengths in mm, or 0.0 while any edge is missing."""
    total = 0.0
    for segment in edge_segments(corner_count):
        length = measured_length(measurements, segment)
        if length is None:
            return 0.0
        total += length
    return total


def calculate_perimeter(measurements: Mapping[str, float], corner_count: int) -> float:
    """Perimeter in metres. Diagonals are not needed."""
    return m(calculate_perimeter_mm(measurements, corner_count))


def calculate_area_mm2(measurements: Mapping[str, float], corner_count: int) -> float:
    """Fan-triangulated area in mm².

    Returns the sentinel 0.0 when any edge or required diagonal is missing,
    or when any fan triangle is impossible.
    """
    missing = missing_keys(measurements, corner_count)
    if missing:
        logger.debug("Area deferred, missing measurements: {missing}", missing=",".join(missing))
        return 0.0

    total = 0.0
    for triangle in fan_triangles(corner_count):
        sides = [measured_length(measurements, seg) for seg in triangle.sides]
        area = triangle_area_mm2(*sides)
        if area <= 0.0:
            logger.debug("Triangle {label} is degenerate, area unavailable", label=triangle.label)
            return 0.0
        total += area
    return total


def calculate_area(measurements: Mapping[str, float], corner_count: int) -> float:
    """Area in square metres; 0.0 means not yet computable."""
    return m2(calculate_area_mm2(measurements, corner_count))


__all__ = [
    "calculate_perimeter_mm",
    "calculate_perimeter",
    "calculate_area_mm2",
    "calculate_area",
]
