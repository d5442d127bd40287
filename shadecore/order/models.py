"""
Configuration, Calculation and Order Models

``PolygonConfiguration`` is the single input to the calculation pipeline.
Measurement keys are canonicalized here so the geometry layer never sees
an unknown or reversed key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from shadecore.catalog.models import EdgeType, FabricType, MeasurementOption
from shadecore.exceptions import InvalidMeasurementError
from shadecore.geometry.topology import (
    canonical_key,
    check_corner_count,
    corner_letter,
    diagonal_keys,
    edge_keys,
)
from shadecore.geometry.units import Unit
from shadecore.pricing.calculator import PriceBreakdown
from shadecore.validate.polygon_validation import PolygonValidationResult


def _canonical_measurements(raw: Any, corner_count: int) -> dict[str, float]:
    if not isinstance(raw, dict):
        raise InvalidMeasurementError("Measurements must be a mapping of segment keys to lengths")
    canonical: dict[str, float] = {}
    for key, value in raw.items():
        if value is None:
            continue
        try:
            length = float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidMeasurementError(f"Measurement {key} is not a number", {"key": str(key)}) from exc
        if not length > 0:
            raise InvalidMeasurementError(
                f"Measurement {key} must be positive, got {value}",
                {"key": str(key), "value": str(value)},
            )
        label = canonical_key(str(key), corner_count)
        if label in canonical and canonical[label] != length:
            raise InvalidMeasurementError(
                f"Conflicting values for {label}: {canonical[label]} and {length}",
                {"key": label},
            )
        canonical[label] = length
    return canonical


def _padded_heights(raw: Any, corner_count: int) -> list[float]:
    heights = [0.0 if value is None else float(value) for value in (raw or [])]
    if len(heights) > corner_count:
        raise InvalidMeasurementError(
            f"Expected at most {corner_count} fixing heights, got {len(heights)}",
            {"count": str(len(heights))},
        )
    for index, height in enumerate(heights):
        if height < 0:
            raise InvalidMeasurementError(
                f"Fixing height at corner {corner_letter(index)} must not be negative",
                {"corner": corner_letter(index), "value": str(height)},
            )
    return heights + [0.0] * (corner_count - len(heights))


class PolygonConfiguration(BaseModel):
    """Everything the customer has entered so far; lengths in mm."""

    model_config = ConfigDict(frozen=True)

    corner_count: int
    unit: Unit = Unit.METRIC
    measurements: dict[str, float] = Field(default_factory=dict)
    fixing_heights: list[float] = Field(default_factory=list, validate_default=True)
    fixing_types: list[Literal["post", "building"]] | None = None
    eye_orientations: list[Literal["horizontal", "vertical"]] | None = None
    fixing_points_installed: bool | None = None
    fabric_type: FabricType = FabricType.MONOTEC_370
    fabric_color: str = ""
    edge_type: EdgeType = EdgeType.WEBBING
    measurement_option: MeasurementOption = MeasurementOption.ADJUST
    currency: str = "NZD"
    quote_name: str | None = None
    customer_reference: str | None = None

    @field_validator("corner_count")
    @classmethod
    def _supported_corner_count(cls, value: int) -> int:
        return check_corner_count(value)

    # corner_count is declared first, so it is already coerced and checked here
    @field_validator("measurements", mode="before")
    @classmethod
    def _canonicalize_measurements(cls, value: Any, info: ValidationInfo) -> Any:
        corner_count = info.data.get("corner_count")
        if corner_count is None:
            return value
        return _canonical_measurements(value or {}, corner_count)

    @field_validator("fixing_heights", mode="before")
    @classmethod
    def _pad_fixing_heights(cls, value: Any, info: ValidationInfo) -> Any:
        corner_count = info.data.get("corner_count")
        if corner_count is None:
            return value
        return _padded_heights(value, corner_count)

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("fabric_color")
    @classmethod
    def _strip_color(cls, value: str) -> str:
        return value.strip()

    @model_validator(mode="after")
    def _per_corner_lists(self) -> "PolygonConfiguration":
        for name in ("fixing_types", "eye_orientations"):
            values = getattr(self, name)
            if values is not None and len(values) > self.corner_count:
                raise ValueError(f"{name} has more entries than corners")
        return self

    def with_corner_count(self, corner_count: int) -> "PolygonConfiguration":
        """New configuration for a different corner count; measurements are cleared."""
        data = self.model_dump()
        data.update(
            corner_count=corner_count,
            measurements={},
            fixing_heights=[],
            fixing_types=None,
            eye_orientations=None,
        )
        return PolygonConfiguration.model_validate(data)

    def with_measurements(self, measurements: dict[str, float]) -> "PolygonConfiguration":
        data = self.model_dump()
        data["measurements"] = {
            **self.measurements,
            **_canonical_measurements(measurements, self.corner_count),
        }
        return PolygonConfiguration.model_validate(data)

    def edge_measurements(self) -> dict[str, float]:
        return {key: self.measurements[key] for key in edge_keys(self.corner_count) if key in self.measurements}

    def diagonal_measurements(self) -> dict[str, float]:
        return {
            key: self.measurements[key] for key in diagonal_keys(self.corner_count) if key in self.measurements
        }

    def anchor_heights(self) -> dict[str, float]:
        """Provided fixing heights keyed by corner letter."""
        return {corner_letter(i): h for i, h in enumerate(self.fixing_heights) if h > 0}


@dataclass(frozen=True)
class ShadeCalculations:
    """Derived values for one configuration; ``area == 0`` means not yet computable."""

    area: float
    perimeter: float
    total_price: float | None = None
    wire_thickness: float | None = None
    webbing_width: float | None = None
    total_weight_grams: float | None = None
    validation: PolygonValidationResult = field(
        default_factory=lambda: PolygonValidationResult(is_valid=True, complete=False)
    )
    price: PriceBreakdown | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def is_orderable(self) -> bool:
        return self.area > 0 and self.validation.is_valid and self.total_price is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "area": self.area,
            "perimeter": self.perimeter,
            "total_price": self.total_price,
            "wire_thickness": self.wire_thickness,
            "webbing_width": self.webbing_width,
            "total_weight_grams": self.total_weight_grams,
            "fabric_cost": self.price.fabric_cost if self.price else None,
            "hardware_cost": self.price.hardware_surcharge if self.price else None,
            "validation": {
                "is_valid": self.validation.is_valid,
                "complete": self.validation.complete,
                "errors": list(self.validation.errors),
                "checked_triangles": list(self.validation.checked_triangles),
            },
            "warnings": list(self.warnings),
        }


class FormattedMeasurement(BaseModel):
    model_config = ConfigDict(frozen=True)

    unit: str
    formatted: str


class OrderPayload(BaseModel):
    """Add-to-cart record: configuration, calculations and both measurement projections."""

    model_config = ConfigDict(frozen=True)

    fabric_type: FabricType
    fabric_color: str
    edge_type: EdgeType
    corner_count: int
    unit: Unit
    currency: str
    measurement_option: MeasurementOption
    measurements: dict[str, float]
    fixing_heights: list[float]
    fixing_types: list[str] | None = None
    eye_orientations: list[str] | None = None
    fixing_points_installed: bool | None = None

    area: float
    perimeter: float
    total_price: float
    total_weight_grams: float | None = None
    wire_thickness: float | None = None
    webbing_width: float | None = None

    edge_measurements: dict[str, FormattedMeasurement]
    diagonal_measurements: dict[str, FormattedMeasurement]
    anchor_measurements: dict[str, FormattedMeasurement]
    backend_edge_measurements: dict[str, str]
    backend_diagonal_measurements: dict[str, str]
    backend_anchor_measurements: dict[str, str]

    fabric_label: str
    fire_rating_label: str | None = None
    shade_factor: float | None = None
    warranty_years: int
    edge_label: str
    hardware_included: str
    area_display: str
    perimeter_display: str
    wire_thickness_display: str
    webbing_width_display: str
    weight_display: str
    price_display: str
    quote_name: str
    # Quote name made safe for exported file names
    file_stem: str
    customer_reference: str = ""
    original_unit: Unit
    created_at: datetime


__all__ = [
    "PolygonConfiguration",
    "ShadeCalculations",
    "FormattedMeasurement",
    "OrderPayload",
]
