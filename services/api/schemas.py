from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from shadecore.catalog.models import EdgeType, FabricType, MeasurementOption
from shadecore.geometry.units import Unit
from shadecore.order.models import PolygonConfiguration, ShadeCalculations
from shadecore.validate.measurement_validation import MeasurementCheckResult
from shadecore.validate.polygon_validation import PolygonValidationResult


class ShadeConfigurationIn(BaseModel):
    """Request body; canonicalization and range checks happen in PolygonConfiguration."""

    corner_count: int = Field(..., description="Number of sail corners (3-6)")
    unit: Unit = Unit.METRIC
    measurements: dict[str, float | None] = Field(default_factory=dict, description="Lengths in mm keyed AB, BC, AC ...")
    fixing_heights: list[float | None] = Field(default_factory=list, description="Anchor heights in mm, A first")
    fixing_types: list[Literal["post", "building"]] | None = None
    eye_orientations: list[Literal["horizontal", "vertical"]] | None = None
    fixing_points_installed: bool | None = None
    fabric_type: FabricType = FabricType.MONOTEC_370
    fabric_color: str = ""
    edge_type: EdgeType = EdgeType.WEBBING
    measurement_option: MeasurementOption = MeasurementOption.ADJUST
    currency: str | None = None
    quote_name: str | None = None
    customer_reference: str | None = None

    def to_configuration(self, default_currency: str) -> PolygonConfiguration:
        data = self.model_dump()
        data["currency"] = self.currency or default_currency
        return PolygonConfiguration.model_validate(data)


class TopologyResponse(BaseModel):
    corner_count: int
    edge_keys: list[str]
    diagonal_keys: list[str]
    triangles: list[str]


class PolygonValidationOut(BaseModel):
    is_valid: bool
    complete: bool
    errors: list[str] = Field(default_factory=list)
    checked_triangles: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: PolygonValidationResult) -> "PolygonValidationOut":
        return cls(
            is_valid=result.is_valid,
            complete=result.complete,
            errors=list(result.errors),
            checked_triangles=list(result.checked_triangles),
        )


class MeasurementCheckOut(BaseModel):
    is_valid: bool
    errors: dict[str, str] = Field(default_factory=dict)
    typo_suggestions: dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, result: MeasurementCheckResult) -> "MeasurementCheckOut":
        return cls(is_valid=result.is_valid, errors=result.errors, typo_suggestions=result.typo_suggestions)


class ValidateResponse(BaseModel):
    validation: PolygonValidationOut
    measurements: MeasurementCheckOut
    heights: MeasurementCheckOut
    perimeter_warning: str | None = None
    diagonal_messages: list[str] = Field(default_factory=list)


class CalculationResponse(BaseModel):
    area: float
    perimeter: float
    total_price: float | None = None
    currency: str
    price_display: str | None = None
    fabric_cost: float | None = None
    hardware_cost: float | None = None
    wire_thickness: float | None = None
    webbing_width: float | None = None
    total_weight_grams: float | None = None
    validation: PolygonValidationOut
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_calculations(
        cls,
        calculations: ShadeCalculations,
        currency: str,
        price_display: str | None,
    ) -> "CalculationResponse":
        data = calculations.to_dict()
        data["validation"] = PolygonValidationOut.from_result(calculations.validation)
        return cls(currency=currency, price_display=price_display, **data)


__all__ = [
    "ShadeConfigurationIn",
    "TopologyResponse",
    "PolygonValidationOut",
    "MeasurementCheckOut",
    "ValidateResponse",
    "CalculationResponse",
]
