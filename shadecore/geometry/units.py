"""
Unit Conversion and Formatting

Lengths are stored in millimetres. Customers see either metric (mm) or
imperial (feet and inches) values; fulfilment sees both.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from shadecore.geometry.contract import (
    INCHES_PER_FOOT,
    INCHES_TO_MM,
    MM2_PER_M2,
    MM_TO_INCHES,
    SQ_INCHES_PER_SQ_FOOT,
)


class Unit(str, Enum):
    """Customer-facing unit system."""
    METRIC = "metric"
    IMPERIAL = "imperial"


@dataclass(frozen=True)
class DualMeasurement:
    """Metric and imperial renderings of one length."""

    metric: str
    imperial: str
    metric_raw: int
    imperial_raw: float


def _require_positive(value: float, what: str) -> None:
    if not value > 0:
        raise ValueError(f"{what} must be positive, got {value!r}")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_display_unit(mm: float, unit: Unit | str) -> float:
    """Convert millimetres to the customer unit (inches for imperial)."""
    return mm * MM_TO_INCHES if Unit(unit) is Unit.IMPERIAL else float(mm)


def to_mm(value: float, unit: Unit | str) -> float:
    """Convert a customer-unit value (inches for imperial) to millimetres."""
    return value * INCHES_TO_MM if Unit(unit) is Unit.IMPERIAL else float(value)


def unit_label(unit: Unit | str) -> str:
    return "inches" if Unit(unit) is Unit.IMPERIAL else "millimeters"


def _format_imperial(mm: float) -> str:
    inches = mm * MM_TO_INCHES
    if inches < INCHES_PER_FOOT:
        return f'{inches:.1f}"'

    feet = math.floor(inches / INCHES_PER_FOOT)
    remaining = round(inches - feet * INCHES_PER_FOOT, 1)
    if remaining >= INCHES_PER_FOOT:
        # 11.96" displays as 12.0", carry it into the next foot
        feet += 1
        remaining = 0.0
    if remaining > 0:
        return f"{feet}'{remaining:.1f}\""
    return f"{feet}'"


def format_length(mm: float, unit: Unit | str) -> str:
    """Format a length for the customer.

    Metric renders whole millimetres (``5000mm``). Imperial renders
    ``feet'inches"`` with one decimal of inches once the value reaches a
    foot (``16'4.9"``, or ``16'`` when the inches round to zero), and plain
    inches below that (``9.8"``).
    """
    _require_positive(mm, "length")
    if Unit(unit) is Unit.IMPERIAL:
        return _format_imperial(mm)
    return f"{_round_half_up(mm)}mm"


def format_area(mm2: float, unit: Unit | str) -> str:
    """Format an area given in square millimetres."""
    _require_positive(mm2, "area")
    if Unit(unit) is Unit.IMPERIAL:
        sq_inches = mm2 * (MM_TO_INCHES * MM_TO_INCHES)
        sq_feet = sq_inches / SQ_INCHES_PER_SQ_FOOT
        if sq_feet >= 1:
            return f"{sq_feet:.1f} ft²"
        return f"{_round_half_up(sq_inches)} in²"
    return f"{mm2 / MM2_PER_M2:.2f} m²"


def format_dual(mm: float, original_unit: Unit | str) -> str:
    """Backend rendering carrying both unit systems, metric first.

    ``5000mm (16'4.9")`` for metric entries, ``5000mm (16'4.9" *)`` when the
    customer entered the value in imperial.
    """
    values = dual_values(mm)
    marker = " *" if Unit(original_unit) is Unit.IMPERIAL else ""
    return f"{values.metric} ({values.imperial}{marker})"


def dual_values(mm: float) -> DualMeasurement:
    _require_positive(mm, "length")
    metric_raw = _round_half_up(mm)
    return DualMeasurement(
        metric=f"{metric_raw}mm",
        imperial=_format_imperial(mm),
        metric_raw=metric_raw,
        imperial_raw=round(mm * MM_TO_INCHES, 2),
    )


__all__ = [
    "Unit",
    "DualMeasurement",
    "to_display_unit",
    "to_mm",
    "unit_label",
    "format_length",
    "format_area",
    "format_dual",
    "dual_values",
]
