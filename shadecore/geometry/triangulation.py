from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class InequalityViolation:
    """The longest side of a triangle is not shorter than the other two combined."""

    longest_index: int
    longest: float
    others: tuple[float, float]

    @property
    def others_sum(self) -> float:
        return self.others[0] + self.others[1]


def triangle_violation(p: float, q: float, r: float) -> InequalityViolation | None:
    """Check the strict triangle inequality for sides ``(p, q, r)``.

    Equality is a violation: three corners on a straight line do not make a sail.
    Returns None for a proper triangle.
    """
    sides = (p, q, r)
    for idx in range(3):
        others = tuple(side for j, side in enumerate(sides) if j != idx)
        if others[0] + others[1] <= sides[idx]:
            return InequalityViolation(longest_index=idx, longest=sides[idx], others=(others[0], others[1]))
    return None


def heron_radicand(p: float, q: float, r: float) -> float:
    s = (p + q + r) / 2.0
    return s * (s - p) * (s - q) * (s - r)


def triangle_area_mm2(p: float, q: float, r: float) -> float:
    """Heron's formula; 0.0 for non-positive sides or an impossible triangle."""
    if p <= 0 or q <= 0 or r <= 0:
        return 0.0
    if triangle_violation(p, q, r) is not None:
        return 0.0
    radicand = heron_radicand(p, q, r)
    if radicand <= 0:
        return 0.0
    return math.sqrt(radicand)


__all__ = ["InequalityViolation", "triangle_violation", "heron_radicand", "triangle_area_mm2"]
