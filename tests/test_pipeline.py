from __future__ import annotations

import pytest

from shadecore.exceptions import UnsupportedCurrencyError
from shadecore.order.models import PolygonConfiguration
from shadecore.order.pipeline import calculate_shade
from shadecore.settings import Settings, ValidationSettings


def _config(measurements, corner_count=4, **overrides):
    return PolygonConfiguration(corner_count=corner_count, measurements=measurements, **overrides)


def test_square_sail(square, catalog, settings):
    calc = calculate_shade(_config(square, measurement_option="exact"), catalog, settings)
    assert calc.area == pytest.approx(16.0, abs=1e-3)
    assert calc.perimeter == pytest.approx(16.0)
    assert calc.total_price == pytest.approx(1458.24)
    assert calc.price is not None
    assert calc.webbing_width == 50
    assert calc.wire_thickness is None
    assert calc.total_weight_grams == pytest.approx(calc.area * 370 * 1.15)
    assert calc.validation.is_valid
    assert calc.validation.complete
    assert calc.warnings == []
    assert calc.is_orderable


def test_incomplete_input_defers_everything(square, catalog, settings):
    del square["BD"]
    calc = calculate_shade(_config(square), catalog, settings)
    assert calc.area == 0
    assert calc.total_price is None
    assert not calc.validation.complete
    assert calc.validation.is_valid

    calc = calculate_shade(_config({"AB": 4000, "BC": 4000}), catalog, settings)
    assert calc.area == 0
    assert calc.total_price is None
    assert calc.total_weight_grams is None
    assert not calc.validation.complete
    assert not calc.is_orderable


def test_degenerate_triangle(catalog, settings):
    calc = calculate_shade(_config({"AB": 1000, "BC": 1000, "CA": 5000}, corner_count=3), catalog, settings)
    assert calc.area == 0
    assert calc.perimeter == pytest.approx(7.0)
    assert calc.total_price is None
    assert not calc.validation.is_valid
    assert calc.validation.errors[0].startswith("Triangle ABC")


def test_closing_diagonal_is_validated_by_default(square, catalog, settings):
    square["BD"] = 9000
    calc = calculate_shade(_config(square), catalog, settings)
    assert calc.area > 0
    assert calc.total_price is not None
    assert not calc.validation.is_valid
    assert not calc.is_orderable
    assert any(message.startswith("Diagonal BD") for message in calc.warnings)


def test_legacy_skip_when_area_computed(square, catalog):
    square["BD"] = 9000
    legacy = Settings(validation=ValidationSettings(skip_when_area_computed=True))
    calc = calculate_shade(_config(square), catalog, legacy)
    assert calc.validation.is_valid
    assert calc.is_orderable


def test_perimeter_limit_warning(catalog, settings):
    calc = calculate_shade(
        _config({"AB": 20000, "BC": 20000, "CA": 20000}, corner_count=3), catalog, settings
    )
    assert calc.perimeter == pytest.approx(60.0)
    assert calc.warnings[0].startswith("Shade sail is too large (60.0m perimeter)")


def test_cabled_edge(square, catalog, settings):
    calc = calculate_shade(_config(square, edge_type="cabled"), catalog, settings)
    assert calc.wire_thickness == 4
    assert calc.webbing_width is None


def test_unsupported_currency(square, catalog, settings):
    with pytest.raises(UnsupportedCurrencyError):
        calculate_shade(_config(square, currency="JPY"), catalog, settings)


def test_recalculation_is_stable(square, catalog, settings):
    config = _config(square)
    assert calculate_shade(config, catalog, settings) == calculate_shade(config, catalog, settings)


def test_to_dict(square, catalog, settings):
    data = calculate_shade(_config(square), catalog, settings).to_dict()
    assert data["hardware_cost"] == pytest.approx(291.04)
    assert data["validation"]["checked_triangles"] == ["ABC", "ACD", "ABD", "BCD"]
    assert data["warnings"] == []


def test_unsupported_currency_with_incomplete_input(catalog, settings):
    with pytest.raises(UnsupportedCurrencyError):
        calculate_shade(_config({"AB": 4000}, currency="JPY"), catalog, settings)
