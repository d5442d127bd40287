"""Custom exception hierarchy for the shade sail core."""

from __future__ import annotations

from typing import Any


class ShadeCoreError(Exception):
    """Base exception for all shadecore-specific errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ShadeCoreError):
    """Raised when configuration is invalid or missing."""
    pass


class CatalogError(ShadeCoreError):
    """Raised when the fabric/currency catalog is invalid."""
    pass


class UnknownCatalogKeyError(CatalogError):
    """Raised when a fabric, color, edge type or corner count is not in the catalog."""
    pass


class UnsupportedCurrencyError(UnknownCatalogKeyError):
    """Raised when a currency code has no exchange rate."""
    pass


class ValidationError(ShadeCoreError):
    """Base class for input validation errors."""
    pass


class InvalidCornerCountError(ValidationError):
    """Raised when a corner count outside 3..6 reaches the geometry layer."""
    pass


class InvalidMeasurementError(ValidationError):
    """Raised when a measurement key or value is rejected at the input boundary."""
    pass


class OrderAssemblyError(ShadeCoreError):
    """Raised when an order payload is requested for an incomplete or invalid shape."""
    pass


__all__ = [
    "ShadeCoreError",
    "ConfigurationError",
    "CatalogError",
    "UnknownCatalogKeyError",
    "UnsupportedCurrencyError",
    "ValidationError",
    "InvalidCornerCountError",
    "InvalidMeasurementError",
    "OrderAssemblyError",
]
