"""Currency display helpers. Amounts are already in the target currency."""

from __future__ import annotations

from shadecore.catalog.models import Catalog


def format_currency(amount: float, code: str, catalog: Catalog) -> str:
    """``NZ$1234.56`` style string with the catalog symbol."""
    symbol = catalog.currency(code).symbol
    return f"{symbol}{amount:.2f}"


def format_currency_compact(amount: float, code: str, catalog: Catalog) -> str:
    """Short form for tight layouts: ``NZ$1.2K``, ``NZ$3.4M``, ``NZ$950``."""
    symbol = catalog.currency(code).symbol
    if amount >= 1_000_000:
        return f"{symbol}{amount / 1_000_000:.1f}M"
    if amount >= 1000:
        return f"{symbol}{amount / 1000:.1f}K"
    return f"{symbol}{amount:.0f}"


__all__ = ["format_currency", "format_currency_compact"]
