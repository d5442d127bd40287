"""
Diagonal Topology

Corners are lettered clockwise from ``A``. A segment between two corners is
addressed by an index pair; the two-letter key (``"AC"``) is only a label.
The set of diagonals a customer must measure is fixed per corner count.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from itertools import combinations

from shadecore.exceptions import InvalidCornerCountError, InvalidMeasurementError
from shadecore.geometry.contract import MAX_CORNERS, MIN_CORNERS, SUPPORTED_CORNER_COUNTS

CORNER_LETTERS = "ABCDEF"

# Fan diagonals from A first, then the closing diagonals
_DIAGONAL_LABELS: dict[int, tuple[str, ...]] = {
    3: (),
    4: ("AC", "BD"),
    5: ("AC", "AD", "CE", "BD", "BE"),
    6: ("AC", "AD", "AE", "BD", "BE", "BF", "CE", "CF", "DF"),
}


def corner_letter(index: int) -> str:
    return CORNER_LETTERS[index]


@dataclass(frozen=True)
class Segment:
    """Straight line between two corners, stored as corner indices."""

    a: int
    b: int

    @property
    def label(self) -> str:
        return corner_letter(self.a) + corner_letter(self.b)

    def reversed(self) -> "Segment":
        return Segment(self.b, self.a)

    def is_edge(self, corner_count: int) -> bool:
        return (self.b - self.a) % corner_count in (1, corner_count - 1)

    @classmethod
    def from_label(cls, label: str) -> "Segment":
        text = label.strip().upper()
        if len(text) != 2 or text[0] == text[1] or any(ch not in CORNER_LETTERS for ch in text):
            raise InvalidMeasurementError(f"Invalid measurement key: {label!r}", {"key": label})
        return cls(CORNER_LETTERS.index(text[0]), CORNER_LETTERS.index(text[1]))


@dataclass(frozen=True)
class Triangle:
    """Three corners and the three segments joining them."""

    corners: tuple[int, int, int]
    sides: tuple[Segment, Segment, Segment]

    @property
    def label(self) -> str:
        return "".join(corner_letter(c) for c in self.corners)


def check_corner_count(corner_count: int) -> int:
    if corner_count not in SUPPORTED_CORNER_COUNTS:
        raise InvalidCornerCountError(
            f"Corner count must be between {MIN_CORNERS} and {MAX_CORNERS}, got {corner_count}",
            {"corner_count": str(corner_count)},
        )
    return corner_count


def edge_segments(corner_count: int) -> tuple[Segment, ...]:
    check_corner_count(corner_count)
    return tuple(Segment(i, (i + 1) % corner_count) for i in range(corner_count))


def edge_keys(corner_count: int) -> tuple[str, ...]:
    return tuple(seg.label for seg in edge_segments(corner_count))


def diagonal_keys(corner_count: int) -> tuple[str, ...]:
    """Diagonal keys the customer must measure for ``corner_count`` corners."""
    check_corner_count(corner_count)
    return _DIAGONAL_LABELS[corner_count]


def diagonal_segments(corner_count: int) -> tuple[Segment, ...]:
    return tuple(Segment.from_label(label) for label in diagonal_keys(corner_count))


def required_segments(corner_count: int) -> tuple[Segment, ...]:
    return edge_segments(corner_count) + diagonal_segments(corner_count)


def required_keys(corner_count: int) -> tuple[str, ...]:
    return tuple(seg.label for seg in required_segments(corner_count))


def canonical_segment(segment: Segment, corner_count: int) -> Segment:
    """Return the segment oriented the way its measurement key is written.

    ``CA`` on a triangle and ``AC`` on a quadrilateral are both valid keys,
    so orientation depends on whether the pair is an edge or a diagonal.
    Raises InvalidMeasurementError when the pair is neither an edge nor a
    required diagonal.
    """
    check_corner_count(corner_count)
    for candidate in required_segments(corner_count):
        if candidate == segment or candidate == segment.reversed():
            return candidate
    raise InvalidMeasurementError(
        f"{segment.label} is not an edge or measured diagonal of a {corner_count}-corner sail",
        {"key": segment.label, "corner_count": str(corner_count)},
    )


def canonical_key(label: str, corner_count: int) -> str:
    return canonical_segment(Segment.from_label(label), corner_count).label


def measured_length(measurements: Mapping[str, float], segment: Segment) -> float | None:
    """Length recorded for ``segment`` under either letter order, if positive."""
    for key in (segment.label, segment.reversed().label):
        value = measurements.get(key)
        if value is not None and value > 0:
            return float(value)
    return None


def missing_keys(measurements: Mapping[str, float], corner_count: int) -> tuple[str, ...]:
    return tuple(
        seg.label for seg in required_segments(corner_count) if measured_length(measurements, seg) is None
    )


def _triangle(a: int, b: int, c: int, corner_count: int) -> Triangle:
    return Triangle(
        corners=(a, b, c),
        sides=(
            canonical_segment(Segment(a, b), corner_count),
            canonical_segment(Segment(b, c), corner_count),
            canonical_segment(Segment(a, c), corner_count),
        ),
    )


def fan_triangles(corner_count: int) -> tuple[Triangle, ...]:
    """The ``corner_count - 2`` triangles fanned out from corner A."""
    check_corner_count(corner_count)
    return tuple(_triangle(0, i, i + 1, corner_count) for i in range(1, corner_count - 1))


def covered_triangles(corner_count: int) -> tuple[Triangle, ...]:
    """Every corner triple whose three sides are all measured, fan triangles first."""
    fan = fan_triangles(corner_count)
    fan_corners = {tri.corners for tri in fan}
    measured = set(required_segments(corner_count))
    measured |= {seg.reversed() for seg in measured}

    extra: list[Triangle] = []
    for a, b, c in combinations(range(corner_count), 3):
        if (a, b, c) in fan_corners:
            continue
        if Segment(a, b) in measured and Segment(b, c) in measured and Segment(a, c) in measured:
            extra.append(_triangle(a, b, c, corner_count))
    return fan + tuple(extra)


__all__ = [
    "CORNER_LETTERS",
    "Segment",
    "Triangle",
    "corner_letter",
    "check_corner_count",
    "edge_segments",
    "edge_keys",
    "diagonal_keys",
    "diagonal_segments",
    "required_segments",
    "required_keys",
    "canonical_segment",
    "canonical_key",
    "measured_length",
    "missing_keys",
    "fan_triangles",
    "covered_triangles",
]
