"""Tests for custom exception hierarchy."""

from shadecore.exceptions import (
    CatalogError,
    ConfigurationError,
    InvalidCornerCountError,
    InvalidMeasurementError,
    OrderAssemblyError,
    ShadeCoreError,
    UnknownCatalogKeyError,
    UnsupportedCurrencyError,
    ValidationError,
)


def test_shadecore_error_base():
    """Test base ShadeCoreError."""
    error = ShadeCoreError("Test error", {"key": "value"})
    assert str(error) == "Test error"
    assert error.message == "Test error"
    assert error.details == {"key": "value"}


def test_details_default_to_empty():
    error = ConfigurationError("Config missing")
    assert isinstance(error, ShadeCoreError)
    assert error.details == {}


def test_validation_errors():
    """Corner count and measurement errors share the ValidationError base."""
    for error in (InvalidCornerCountError("bad corners"), InvalidMeasurementError("bad length")):
        assert isinstance(error, ValidationError)
        assert isinstance(error, ShadeCoreError)
        assert not isinstance(error, ValueError)


def test_catalog_errors():
    """Test catalog lookup failures."""
    error = UnsupportedCurrencyError("Unsupported currency: XYZ", {"currency": "XYZ"})
    assert isinstance(error, UnknownCatalogKeyError)
    assert isinstance(error, CatalogError)
    assert error.details["currency"] == "XYZ"


def test_order_assembly_error():
    error = OrderAssemblyError("Cannot create an order")
    assert isinstance(error, ShadeCoreError)
    assert not isinstance(error, ValidationError)
