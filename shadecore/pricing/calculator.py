"""
Price Calculation

Price scales with area: a per-m² base rate derived from the fabric, edge
finish and corner count, plus the hardware kit when the customer asks for
adjustable fixings. Everything is computed in the base currency and then
converted once with the catalog exchange rate.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from shadecore.catalog.models import Catalog, EdgeType, FabricType, MeasurementOption, resolve_key
from shadecore.geometry.topology import check_corner_count


@dataclass(frozen=True)
class PriceBreakdown:
    """Price components; ``total_price`` is in ``currency``, the rest in the base currency."""

    currency: str
    exchange_rate: float
    base_price_per_area: float
    fabric_cost: float
    hardware_surcharge: float
    total_price: float

    @property
    def hardware_included(self) -> bool:
        return self.hardware_surcharge > 0


def base_price_per_area(
    fabric_type: FabricType | str,
    corner_count: int,
    edge_type: EdgeType | str,
    catalog: Catalog,
) -> float:
    fabric = catalog.fabric(fabric_type)
    edge = catalog.edge(edge_type)
    return (
        fabric.price_per_sqm
        * edge.price_factor
        * catalog.corner_price_factor(corner_count)
        * catalog.pricing.markup
    )


def hardware_surcharge(
    corner_count: int,
    measurement_option: MeasurementOption | str,
    catalog: Catalog,
) -> float:
    option = resolve_key(MeasurementOption, measurement_option, "measurement option")
    if option is MeasurementOption.EXACT:
        return 0.0
    return catalog.hardware_cost(corner_count)


def calculate_price(
    fabric_type: FabricType | str,
    corner_count: int,
    edge_type: EdgeType | str,
    measurement_option: MeasurementOption | str,
    area_m2: float,
    currency: str,
    catalog: Catalog,
) -> PriceBreakdown:
    """
    Price a sail in the requested currency.

    Args:
        fabric_type: Catalog fabric
        corner_count: Number of corners (3-6)
        edge_type: Webbing or cabled edge finish
        measurement_option: ``adjust`` adds the hardware kit, ``exact`` does not
        area_m2: Sail area in square metres
        currency: ISO currency code present in the catalog
        catalog: Product catalog

    Returns:
        PriceBreakdown with the total rounded to cents

    Raises:
        UnsupportedCurrencyError: If ``currency`` has no exchange rate
        UnknownCatalogKeyError: If the fabric, edge type or option is unknown
        InvalidCornerCountError: If ``corner_count`` is outside 3-6
    """
    check_corner_count(corner_count)
    rate = catalog.exchange_rate(currency)
    per_area = base_price_per_area(fabric_type, corner_count, edge_type, catalog)
    surcharge = hardware_surcharge(corner_count, measurement_option, catalog)

    fabric_cost = per_area * area_m2
    total = round((fabric_cost + surcharge) * rate, 2)

    logger.debug(
        "Priced {corners}-corner sail: {area:.3f} m² at {per_area:.2f}/m² + {surcharge:.2f} -> {total} {currency}",
        corners=corner_count,
        area=area_m2,
        per_area=per_area,
        surcharge=surcharge,
        total=total,
        currency=currency.upper(),
    )
    return PriceBreakdown(
        currency=currency.strip().upper(),
        exchange_rate=rate,
        base_price_per_area=per_area,
        fabric_cost=fabric_cost,
        hardware_surcharge=surcharge,
        total_price=total,
    )


__all__ = ["PriceBreakdown", "base_price_per_area", "hardware_surcharge", "calculate_price"]
