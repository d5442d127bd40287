from __future__ import annotations

"""
Geometry Contract

Single source of truth for unit factors and corner-count bounds used
throughout the core. All modules should import from here instead of hardcoding.
"""

# Lengths in millimetres unless noted; m constants end with _M

MM_TO_INCHES = 0.0393701
INCHES_TO_MM = 25.4
INCHES_PER_FOOT = 12.0
SQ_INCHES_PER_SQ_FOOT = 144.0
MM2_PER_M2 = 1_000_000.0
MM_PER_M = 1000.0
GRAMS_PER_KG = 1000.0
POUNDS_PER_KG = 2.20462

# Corners
MIN_CORNERS = 3
MAX_CORNERS = 6
SUPPORTED_CORNER_COUNTS = tuple(range(MIN_CORNERS, MAX_CORNERS + 1))

# Pricing/feature tables are looked up on perimeter rounded to this step
PERIMETER_STEP_M = 0.5


def mm(value_m: float) -> float:
    """Convert meters to millimeters."""
    return float(value_m * MM_PER_M)


def m(value_mm: float) -> float:
    """Convert millimeters to meters."""
    return float(value_mm / MM_PER_M)


def m2(value_mm2: float) -> float:
    """Convert square millimeters to square meters."""
    return float(value_mm2 / MM2_PER_M2)


def round_to_step(value: float, step: float = PERIMETER_STEP_M) -> float:
    """Round to the nearest multiple of ``step`` (halves round up)."""
    return float(int(value / step + 0.5) * step)
