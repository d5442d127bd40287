"""
Order Payload Assembly

Builds the add-to-cart record once, merging configuration, calculations,
catalog labels and every display string checkout and fulfilment need.
Customer-facing measurements use the customer's unit; backend copies carry
both unit systems.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone

from loguru import logger

from shadecore.catalog.models import Catalog, EdgeType, MeasurementOption
from shadecore.exceptions import OrderAssemblyError
from shadecore.geometry.contract import GRAMS_PER_KG, MM2_PER_M2, MM_PER_M, MM_TO_INCHES, POUNDS_PER_KG
from shadecore.geometry.units import Unit, format_area, format_dual, format_length, unit_label
from shadecore.order.models import (
    FormattedMeasurement,
    OrderPayload,
    PolygonConfiguration,
    ShadeCalculations,
)
from shadecore.order.naming import (
    default_quote_name,
    sanitize_customer_reference,
    sanitize_for_filename,
    sanitize_quote_name,
)
from shadecore.pricing.currency import format_currency

NOT_FR_CERTIFIED = "Not FR Certified"
NOT_APPLICABLE = "N/A"


def customer_projection(values: Mapping[str, float], unit: Unit) -> dict[str, FormattedMeasurement]:
    label = unit_label(unit)
    return {
        key: FormattedMeasurement(unit=label, formatted=format_length(value, unit))
        for key, value in values.items()
        if value > 0
    }


def backend_projection(values: Mapping[str, float], original_unit: Unit) -> dict[str, str]:
    return {key: format_dual(value, original_unit) for key, value in values.items() if value > 0}


def format_size(size_mm: float | None, unit: Unit) -> str:
    """Wire or webbing size: ``4mm`` or ``0.16"``."""
    if size_mm is None:
        return NOT_APPLICABLE
    if unit is Unit.IMPERIAL:
        return f'{size_mm * MM_TO_INCHES:.2f}"'
    return f"{size_mm:g}mm"


def format_weight(grams: float | None, unit: Unit) -> str:
    if grams is None:
        return NOT_APPLICABLE
    kilograms = grams / GRAMS_PER_KG
    if unit is Unit.IMPERIAL:
        return f"{kilograms * POUNDS_PER_KG:.1f} lb"
    return f"{kilograms:.1f} kg"


def assemble_order_payload(
    config: PolygonConfiguration,
    calculations: ShadeCalculations,
    catalog: Catalog,
    *,
    created_at: datetime | None = None,
) -> OrderPayload:
    """
    Build the order payload for a complete, valid configuration.

    Args:
        config: Customer configuration
        calculations: Result of ``calculate_shade`` for ``config``
        catalog: Product catalog used for labels and currency symbols
        created_at: Timestamp to record; defaults to now (UTC)

    Returns:
        Frozen OrderPayload

    Raises:
        OrderAssemblyError: If the area is not computable, validation failed
            or the price is missing
        UnknownCatalogKeyError: If the fabric color is not offered for the fabric
    """
    if calculations.area <= 0:
        raise OrderAssemblyError(
            "Cannot create an order before every edge and diagonal is measured",
            {"corner_count": str(config.corner_count)},
        )
    if not calculations.validation.is_valid:
        raise OrderAssemblyError(
            "Cannot create an order for measurements that do not form a valid shape",
            {"errors": "; ".join(calculations.validation.errors)},
        )
    if calculations.total_price is None:
        raise OrderAssemblyError("Cannot create an order without a price")

    unit = config.unit
    fabric = catalog.fabric(config.fabric_type)
    color = fabric.color(config.fabric_color) if config.fabric_color else None
    edge = catalog.edge(config.edge_type)
    timestamp = created_at or datetime.now(timezone.utc)
    # Eye orientation only applies to fixing points that are already installed
    eye_orientations = None
    if config.fixing_points_installed and config.eye_orientations:
        eye_orientations = list(config.eye_orientations)

    quote_name = sanitize_quote_name(config.quote_name) or default_quote_name(
        config.corner_count,
        fabric.label,
        config.fabric_color,
        on=timestamp.date(),
    )

    payload = OrderPayload(
        fabric_type=config.fabric_type,
        fabric_color=config.fabric_color,
        edge_type=config.edge_type,
        corner_count=config.corner_count,
        unit=unit,
        currency=config.currency,
        measurement_option=config.measurement_option,
        measurements=dict(config.measurements),
        fixing_heights=list(config.fixing_heights),
        fixing_types=list(config.fixing_types) if config.fixing_types is not None else None,
        eye_orientations=eye_orientations,
        fixing_points_installed=config.fixing_points_installed,
        area=calculations.area,
        perimeter=calculations.perimeter,
        total_price=calculations.total_price,
        total_weight_grams=calculations.total_weight_grams,
        wire_thickness=calculations.wire_thickness,
        webbing_width=calculations.webbing_width,
        edge_measurements=customer_projection(config.edge_measurements(), unit),
        diagonal_measurements=customer_projection(config.diagonal_measurements(), unit),
        anchor_measurements=customer_projection(config.anchor_heights(), unit),
        backend_edge_measurements=backend_projection(config.edge_measurements(), unit),
        backend_diagonal_measurements=backend_projection(config.diagonal_measurements(), unit),
        backend_anchor_measurements=backend_projection(config.anchor_heights(), unit),
        fabric_label=fabric.label,
        fire_rating_label=NOT_FR_CERTIFIED if color is not None and not color.fr_certified else None,
        shade_factor=color.shade_factor if color is not None else None,
        warranty_years=fabric.warranty_years,
        edge_label=edge.label,
        hardware_included="Included" if config.measurement_option is MeasurementOption.ADJUST else "Not Included",
        area_display=format_area(calculations.area * MM2_PER_M2, unit),
        perimeter_display=format_length(calculations.perimeter * MM_PER_M, unit),
        wire_thickness_display=format_size(
            calculations.wire_thickness if config.edge_type is EdgeType.CABLED else None, unit
        ),
        webbing_width_display=format_size(
            calculations.webbing_width if config.edge_type is EdgeType.WEBBING else None, unit
        ),
        weight_display=format_weight(calculations.total_weight_grams, unit),
        price_display=format_currency(calculations.total_price, config.currency, catalog),
        quote_name=quote_name,
        file_stem=sanitize_for_filename(quote_name),
        customer_reference=sanitize_customer_reference(config.customer_reference),
        original_unit=unit,
        created_at=timestamp,
    )

    logger.info(
        "Assembled order payload for {corners}-corner {fabric} sail, {price}",
        corners=config.corner_count,
        fabric=fabric.label,
        price=payload.price_display,
    )
    return payload


__all__ = [
    "NOT_FR_CERTIFIED",
    "customer_projection",
    "backend_projection",
    "format_size",
    "format_weight",
    "assemble_order_payload",
]
