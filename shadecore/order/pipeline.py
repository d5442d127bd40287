"""
Calculation Pipeline

Runs every stage for a configuration from scratch:
topology, validation, area/perimeter, physical properties, price.
"""

from __future__ import annotations

from loguru import logger

from shadecore.catalog.models import Catalog
from shadecore.geometry.area import calculate_area, calculate_perimeter
from shadecore.geometry.layout import layout_warnings
from shadecore.order.models import PolygonConfiguration, ShadeCalculations
from shadecore.physical.properties import estimate_physical_properties
from shadecore.pricing.calculator import calculate_price
from shadecore.settings import Settings, get_settings
from shadecore.validate.measurement_validation import check_diagonal_ranges, check_perimeter_limit
from shadecore.validate.polygon_validation import PolygonValidationResult, validate_polygon


def _diagnostics(config: PolygonConfiguration, perimeter_m: float, settings: Settings) -> list[str]:
    warnings: list[str] = []
    if perimeter_m > 0:
        message = check_perimeter_limit(perimeter_m, config.unit, settings.limits.max_perimeter_m)
        if message:
            warnings.append(message)
    warnings.extend(
        check_diagonal_ranges(config.measurements, config.corner_count, settings.limits.diagonal_tolerance)
    )
    warnings.extend(layout_warnings(config.measurements, config.corner_count, settings.limits.diagonal_tolerance))
    return warnings


def calculate_shade(
    config: PolygonConfiguration,
    catalog: Catalog,
    settings: Settings | None = None,
) -> ShadeCalculations:
    """
    Compute area, perimeter, engineering sizes and price for a configuration.

    Incomplete input is not an error: area stays 0, validation reports
    ``complete=False`` and ``total_price`` is None.

    Raises:
        UnsupportedCurrencyError: If the configuration currency is not in the catalog
        UnknownCatalogKeyError: If the fabric or edge type is not in the catalog
    """
    settings = settings or get_settings()
    # Unknown currencies fail even while the area is still deferred
    catalog.currency(config.currency)

    measurements = config.measurements
    corners = config.corner_count

    area = calculate_area(measurements, corners)
    perimeter = calculate_perimeter(measurements, corners)

    if settings.validation.skip_when_area_computed and area > 0:
        validation = PolygonValidationResult(is_valid=True)
    else:
        validation = validate_polygon(measurements, corners)

    physical = estimate_physical_properties(
        area, perimeter, corners, config.edge_type, config.fabric_type, catalog
    )

    price = None
    if area > 0:
        price = calculate_price(
            config.fabric_type,
            corners,
            config.edge_type,
            config.measurement_option,
            area,
            config.currency,
            catalog,
        )

    warnings = _diagnostics(config, perimeter, settings)

    logger.debug(
        "Calculated {corners}-corner sail: area={area:.3f} m², perimeter={perimeter:.2f} m, valid={valid}",
        corners=corners,
        area=area,
        perimeter=perimeter,
        valid=validation.is_valid,
    )
    return ShadeCalculations(
        area=area,
        perimeter=perimeter,
        total_price=price.total_price if price else None,
        wire_thickness=physical.wire_thickness,
        webbing_width=physical.webbing_width,
        total_weight_grams=physical.total_weight_grams,
        validation=validation,
        price=price,
        warnings=warnings,
    )


__all__ = ["calculate_shade"]
