"""
Product Catalog Models

Closed, enum-keyed tables for fabrics, edge finishes, currencies and the
engineering tier tables. Every lookup goes through a method that raises a
catalog error for unknown keys.
"""

from __future__ import annotations

from enum import Enum

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shadecore.exceptions import CatalogError, UnknownCatalogKeyError, UnsupportedCurrencyError
from shadecore.geometry.contract import SUPPORTED_CORNER_COUNTS


class FabricType(str, Enum):
    MONOTEC_370 = "monotec370"
    EXTRABLOCK_330 = "extrablock330"
    SHADETEC_320 = "shadetec320"


class EdgeType(str, Enum):
    WEBBING = "webbing"
    CABLED = "cabled"


class MeasurementOption(str, Enum):
    """Whether tensioning hardware is supplied (``adjust``) or not (``exact``)."""
    ADJUST = "adjust"
    EXACT = "exact"


class FabricColor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    shade_factor: float | None = Field(default=None, ge=0.0, le=100.0)
    fr_certified: bool = True


class Fabric(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    price_per_sqm: float = Field(gt=0.0, description="Base currency per m² before markup")
    density_gsm: float = Field(gt=0.0, description="Fabric weight in g/m²")
    warranty_years: int = Field(ge=0)
    uv_protection: str = ""
    made_in: str = ""
    colors: list[FabricColor] = Field(default_factory=list)

    def color(self, name: str) -> FabricColor:
        wanted = name.strip().lower()
        for color in self.colors:
            if color.name.lower() == wanted:
                return color
        raise UnknownCatalogKeyError(
            f"Color '{name}' is not available for {self.label}",
            {"fabric": self.label, "color": name},
        )


class EdgeFinish(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    price_factor: float = Field(1.0, gt=0.0)


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: float = Field(gt=0.0, description="Multiplier against the base currency")
    symbol: str
    name: str = ""


class Tier(BaseModel):
    """One step of a perimeter-keyed feature table (upper bound inclusive, metres)."""
    model_config = ConfigDict(frozen=True)

    max_perimeter_m: float = Field(gt=0.0)
    value_mm: float = Field(gt=0.0)


class PricingRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_currency: str = "NZD"
    markup: float = Field(1.0, gt=0.0)
    corner_price_factors: dict[int, float]
    hardware_costs: dict[int, float]


def _check_corner_table(name: str, table: dict[int, float]) -> dict[int, float]:
    missing = [count for count in SUPPORTED_CORNER_COUNTS if count not in table]
    if missing:
        raise ValueError(f"{name} is missing corner counts {missing}")
    if any(value < 0 for value in table.values()):
        raise ValueError(f"{name} entries must not be negative")
    return table


def _check_tiers(name: str, tiers: list[Tier]) -> list[Tier]:
    if not tiers:
        raise ValueError(f"{name} must contain at least one tier")
    bounds = [tier.max_perimeter_m for tier in tiers]
    if bounds != sorted(bounds) or len(set(bounds)) != len(bounds):
        raise ValueError(f"{name} tiers must be strictly increasing by max_perimeter_m")
    return tiers


class Catalog(BaseModel):
    """Fabric/color/edge catalog plus exchange-rate table."""
    model_config = ConfigDict(frozen=True)

    fabrics: dict[FabricType, Fabric]
    edges: dict[EdgeType, EdgeFinish]
    currencies: dict[str, Currency]
    pricing: PricingRules
    weight_adjustment: dict[int, float]
    wire_gauges: list[Tier]
    webbing_widths: list[Tier]

    @field_validator("currencies", mode="before")
    @classmethod
    def _upper_codes(cls, value: object) -> object:
        if isinstance(value, dict):
            return {str(code).strip().upper(): entry for code, entry in value.items()}
        return value

    @field_validator("weight_adjustment")
    @classmethod
    def _weight_corners(cls, value: dict[int, float]) -> dict[int, float]:
        return _check_corner_table("weight_adjustment", value)

    @field_validator("wire_gauges")
    @classmethod
    def _wire_tiers(cls, value: list[Tier]) -> list[Tier]:
        return _check_tiers("wire_gauges", value)

    @field_validator("webbing_widths")
    @classmethod
    def _webbing_tiers(cls, value: list[Tier]) -> list[Tier]:
        return _check_tiers("webbing_widths", value)

    @model_validator(mode="after")
    def _exhaustive(self) -> "Catalog":
        missing_fabrics = [f.value for f in FabricType if f not in self.fabrics]
        if missing_fabrics:
            raise ValueError(f"Catalog is missing fabrics {missing_fabrics}")
        missing_edges = [e.value for e in EdgeType if e not in self.edges]
        if missing_edges:
            raise ValueError(f"Catalog is missing edge types {missing_edges}")
        _check_corner_table("pricing.corner_price_factors", self.pricing.corner_price_factors)
        _check_corner_table("pricing.hardware_costs", self.pricing.hardware_costs)
        if self.pricing.base_currency.upper() not in self.currencies:
            raise ValueError(f"Base currency {self.pricing.base_currency} has no exchange rate")
        return self

    def fabric(self, fabric_type: FabricType | str) -> Fabric:
        key = resolve_key(FabricType, fabric_type, "fabric")
        return self.fabrics[key]

    def edge(self, edge_type: EdgeType | str) -> EdgeFinish:
        key = resolve_key(EdgeType, edge_type, "edge type")
        return self.edges[key]

    def currency(self, code: str) -> Currency:
        normalized = (code or "").strip().upper()
        entry = self.currencies.get(normalized)
        if entry is None:
            logger.warning("Rejected unsupported currency {code}", code=code)
            raise UnsupportedCurrencyError(
                f"Unsupported currency: {code!r}",
                {"currency": str(code), "supported": ",".join(sorted(self.currencies))},
            )
        return entry

    def exchange_rate(self, code: str) -> float:
        return self.currency(code).rate

    def corner_price_factor(self, corner_count: int) -> float:
        return _corner_entry(self.pricing.corner_price_factors, corner_count, "corner price factor")

    def hardware_cost(self, corner_count: int) -> float:
        return _corner_entry(self.pricing.hardware_costs, corner_count, "hardware cost")

    def weight_factor(self, corner_count: int) -> float:
        return _corner_entry(self.weight_adjustment, corner_count, "weight adjustment")


def resolve_key(enum_cls: type[Enum], value: Enum | str, what: str):
    """Coerce a raw key to ``enum_cls``, raising UnknownCatalogKeyError when it is not a member."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError as exc:
        logger.warning("Rejected unknown {what} {value}", what=what, value=value)
        raise UnknownCatalogKeyError(
            f"Unknown {what}: {value!r}",
            {what: str(value), "known": ",".join(member.value for member in enum_cls)},
        ) from exc


def _corner_entry(table: dict[int, float], corner_count: int, what: str) -> float:
    try:
        return table[corner_count]
    except KeyError as exc:
        raise UnknownCatalogKeyError(
            f"No {what} for {corner_count} corners",
            {"corner_count": str(corner_count)},
        ) from exc


def tier_value(tiers: list[Tier], perimeter_m: float) -> float:
    """Value of the first tier covering ``perimeter_m``; the last tier beyond the table."""
    if not tiers:
        raise CatalogError("Tier table is empty")
    for tier in tiers:
        if perimeter_m <= tier.max_perimeter_m:
            return tier.value_mm
    return tiers[-1].value_mm


__all__ = [
    "FabricType",
    "EdgeType",
    "MeasurementOption",
    "FabricColor",
    "Fabric",
    "EdgeFinish",
    "Currency",
    "Tier",
    "PricingRules",
    "Catalog",
    "resolve_key",
    "tier_value",
]
