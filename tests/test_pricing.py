from __future__ import annotations

import pytest

from shadecore.catalog.models import EdgeType, FabricType, MeasurementOption
from shadecore.exceptions import InvalidCornerCountError, UnknownCatalogKeyError, UnsupportedCurrencyError
from shadecore.pricing.calculator import base_price_per_area, calculate_price
from shadecore.pricing.currency import format_currency, format_currency_compact


def _price(catalog, **overrides):
    args = {
        "fabric_type": FabricType.MONOTEC_370,
        "corner_count": 4,
        "edge_type": EdgeType.WEBBING,
        "measurement_option": MeasurementOption.EXACT,
        "area_m2": 16.0,
        "currency": "NZD",
        "catalog": catalog,
    }
    args.update(overrides)
    return calculate_price(**args)


def test_base_price_per_area(catalog):
    assert base_price_per_area("monotec370", 4, "webbing", catalog) == pytest.approx(62.0 * 1.05 * 1.40)
    assert base_price_per_area("monotec370", 4, "cabled", catalog) == pytest.approx(62.0 * 1.05 * 1.05 * 1.40)


def test_price_scales_with_area(catalog):
    breakdown = _price(catalog)
    assert breakdown.total_price == pytest.approx(1458.24)
    assert breakdown.hardware_surcharge == 0
    assert not breakdown.hardware_included


def test_adjust_adds_hardware(catalog):
    breakdown = _price(catalog, measurement_option="adjust")
    assert breakdown.hardware_surcharge == pytest.approx(291.04)
    assert breakdown.hardware_included
    assert breakdown.total_price == pytest.approx(1749.28)


def test_price_is_idempotent(catalog):
    assert _price(catalog) == _price(catalog)


def test_currency_change_scales_by_rate_ratio(catalog):
    nzd = _price(catalog, measurement_option="adjust").total_price
    usd = _price(catalog, measurement_option="adjust", currency="USD").total_price
    aud = _price(catalog, measurement_option="adjust", currency="aud").total_price
    assert usd / nzd == pytest.approx(0.58, rel=1e-3)
    assert aud / usd == pytest.approx(0.88 / 0.58, rel=1e-3)


def test_total_is_rounded_to_cents(catalog):
    total = _price(catalog, area_m2=3.8971, currency="EUR").total_price
    assert round(total, 2) == total


def test_unsupported_currency(catalog):
    with pytest.raises(UnsupportedCurrencyError):
        _price(catalog, currency="JPY")


def test_unknown_catalog_keys(catalog):
    with pytest.raises(UnknownCatalogKeyError):
        _price(catalog, fabric_type="silk")
    with pytest.raises(UnknownCatalogKeyError):
        _price(catalog, edge_type="rope")
    with pytest.raises(UnknownCatalogKeyError):
        _price(catalog, measurement_option="guess")
    with pytest.raises(InvalidCornerCountError):
        _price(catalog, corner_count=8)


def test_format_currency(catalog):
    assert format_currency(1234.5, "NZD", catalog) == "NZ$1234.50"
    assert format_currency(99, "gbp", catalog) == "£99.00"
    with pytest.raises(UnsupportedCurrencyError):
        format_currency(1, "XYZ", catalog)


def test_format_currency_compact(catalog):
    assert format_currency_compact(950, "USD", catalog) == "US$950"
    assert format_currency_compact(1234.5, "NZD", catalog) == "NZ$1.2K"
    assert format_currency_compact(2_500_000, "EUR", catalog) == "€2.5M"
