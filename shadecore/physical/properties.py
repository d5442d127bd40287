"""
Physical Property Estimation

Wire gauge and webbing width come from perimeter tiers in the catalog; the
fabric weight scales the bare fabric density by a per-corner-count factor
for seams, patches and hems.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from shadecore.catalog.models import Catalog, EdgeType, FabricType, resolve_key, tier_value
from shadecore.geometry.contract import round_to_step


@dataclass(frozen=True)
class PhysicalProperties:
    wire_thickness: float | None = None
    webbing_width: float | None = None
    total_weight_grams: float | None = None


def lookup_wire_thickness(perimeter_m: float, catalog: Catalog) -> float:
    return tier_value(catalog.wire_gauges, round_to_step(perimeter_m))


def lookup_webbing_width(perimeter_m: float, catalog: Catalog) -> float:
    return tier_value(catalog.webbing_widths, round_to_step(perimeter_m))


def estimate_weight_grams(area_m2: float, corner_count: int, fabric_type: FabricType | str, catalog: Catalog) -> float:
    fabric = catalog.fabric(fabric_type)
    return area_m2 * fabric.density_gsm * catalog.weight_factor(corner_count)


def estimate_physical_properties(
    area_m2: float,
    perimeter_m: float,
    corner_count: int,
    edge_type: EdgeType | str,
    fabric_type: FabricType | str,
    catalog: Catalog,
) -> PhysicalProperties:
    """
    Derive engineering quantities for a sail.

    Args:
        area_m2: Sail area; 0 means the shape is not yet computable
        perimeter_m: Sum of edge lengths
        corner_count: Number of corners
        edge_type: Selects wire (cabled) or webbing sizing
        fabric_type: Fabric whose density drives the weight
        catalog: Product catalog

    Returns:
        PhysicalProperties with every field None while ``area_m2 <= 0``
    """
    if area_m2 <= 0:
        return PhysicalProperties()

    edge = resolve_key(EdgeType, edge_type, "edge type")
    wire = lookup_wire_thickness(perimeter_m, catalog) if edge is EdgeType.CABLED else None
    webbing = lookup_webbing_width(perimeter_m, catalog) if edge is EdgeType.WEBBING else None
    weight = estimate_weight_grams(area_m2, corner_count, fabric_type, catalog)

    logger.debug(
        "Physical properties: wire={wire} webbing={webbing} weight={weight:.0f}g",
        wire=wire,
        webbing=webbing,
        weight=weight,
    )
    return PhysicalProperties(wire_thickness=wire, webbing_width=webbing, total_weight_grams=weight)


__all__ = [
    "PhysicalProperties",
    "lookup_wire_thickness",
    "lookup_webbing_width",
    "estimate_weight_grams",
    "estimate_physical_properties",
]
