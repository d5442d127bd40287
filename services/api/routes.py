from __future__ import annotations

from fastapi import APIRouter

from shadecore.catalog.loader import get_catalog
from shadecore.catalog.models import Catalog
from shadecore.geometry.area import calculate_perimeter
from shadecore.geometry.topology import covered_triangles, diagonal_keys, edge_keys
from shadecore.order.models import OrderPayload
from shadecore.order.payload import assemble_order_payload
from shadecore.order.pipeline import calculate_shade
from shadecore.pricing.currency import format_currency
from shadecore.settings import get_settings
from shadecore.validate.measurement_validation import (
    check_diagonal_ranges,
    check_heights,
    check_measurements,
    check_perimeter_limit,
    format_diagonal_errors,
)
from shadecore.validate.polygon_validation import validate_polygon

from services.api.schemas import (
    CalculationResponse,
    MeasurementCheckOut,
    PolygonValidationOut,
    ShadeConfigurationIn,
    TopologyResponse,
    ValidateResponse,
)

router = APIRouter(prefix="/api/v1")


def _catalog() -> Catalog:
    path = get_settings().catalog.path
    return get_catalog(str(path) if path else None)


@router.get("/topology/{corner_count}", response_model=TopologyResponse, tags=["topology"])
async def get_topology(corner_count: int) -> TopologyResponse:
    return TopologyResponse(
        corner_count=corner_count,
        edge_keys=list(edge_keys(corner_count)),
        diagonal_keys=list(diagonal_keys(corner_count)),
        triangles=[triangle.label for triangle in covered_triangles(corner_count)],
    )


@router.post("/shade/validate", response_model=ValidateResponse, tags=["shade"])
async def validate_shade(payload: ShadeConfigurationIn) -> ValidateResponse:
    settings = get_settings()
    config = payload.to_configuration(settings.catalog.default_currency)
    limits = settings.limits

    perimeter = calculate_perimeter(config.measurements, config.corner_count)
    perimeter_warning = None
    if perimeter > 0:
        perimeter_warning = check_perimeter_limit(perimeter, config.unit, limits.max_perimeter_m)
    diagonal_messages = check_diagonal_ranges(config.measurements, config.corner_count, limits.diagonal_tolerance)

    return ValidateResponse(
        validation=PolygonValidationOut.from_result(validate_polygon(config.measurements, config.corner_count)),
        measurements=MeasurementCheckOut.from_result(check_measurements(config.measurements, config.unit, limits)),
        heights=MeasurementCheckOut.from_result(check_heights(config.fixing_heights, config.unit, limits)),
        perimeter_warning=perimeter_warning,
        diagonal_messages=format_diagonal_errors(diagonal_messages),
    )


@router.post("/shade/calculate", response_model=CalculationResponse, tags=["shade"])
async def calculate_shade_api(payload: ShadeConfigurationIn) -> CalculationResponse:
    settings = get_settings()
    catalog = _catalog()
    config = payload.to_configuration(settings.catalog.default_currency)
    calculations = calculate_shade(config, catalog, settings)
    price_display = None
    if calculations.total_price is not None:
        price_display = format_currency(calculations.total_price, config.currency, catalog)
    return CalculationResponse.from_calculations(calculations, config.currency, price_display)


@router.post("/shade/order-payload", response_model=OrderPayload, tags=["shade"])
async def create_order_payload(payload: ShadeConfigurationIn) -> OrderPayload:
    settings = get_settings()
    catalog = _catalog()
    config = payload.to_configuration(settings.catalog.default_currency)
    calculations = calculate_shade(config, catalog, settings)
    return assemble_order_payload(config, calculations, catalog)


__all__ = ["router"]
