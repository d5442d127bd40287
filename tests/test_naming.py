from __future__ import annotations

from datetime import date

from shadecore.order.naming import (
    MAX_QUOTE_NAME_LENGTH,
    default_quote_name,
    sanitize_customer_reference,
    sanitize_for_filename,
    sanitize_quote_name,
    validate_customer_reference,
    validate_quote_name,
)


def test_default_quote_name():
    name = default_quote_name(4, "Monotec 370", "Charcoal", on=date(2026, 10, 19))
    assert name == "4-Corner Monotec 370 Charcoal Shade Sail - Oct 19"


def test_default_quote_name_without_color():
    assert default_quote_name(3, "Shadetec 320", "", on=date(2026, 3, 5)) == "3-Corner Shadetec 320 Shade Sail - Mar 5"


def test_default_quote_name_without_fabric():
    assert default_quote_name(5, None, None, on=date(2026, 1, 1)) == "5-Corner Custom Shade Sail - Jan 1"


def test_long_default_name_is_truncated():
    name = default_quote_name(6, "X" * 120, "Charcoal", on=date(2026, 10, 19))
    assert len(name) == MAX_QUOTE_NAME_LENGTH
    assert name.endswith("...")


def test_sanitize_quote_name():
    assert sanitize_quote_name("  Back deck  ") == "Back deck"
    assert sanitize_quote_name(None) == ""
    assert len(sanitize_quote_name("a" * 150)) == MAX_QUOTE_NAME_LENGTH


def test_sanitize_customer_reference():
    assert sanitize_customer_reference(" PO-123 ") == "PO-123"
    assert len(sanitize_customer_reference("r" * 80)) == 50


def test_sanitize_for_filename():
    assert sanitize_for_filename("My: Quote/1?") == "My-Quote1"
    assert sanitize_for_filename("Back  deck sail") == "Back-deck-sail"
    assert sanitize_for_filename("...") == "quote"
    assert sanitize_for_filename("") == ""


def test_validate_lengths():
    assert validate_quote_name("Back deck") is None
    assert validate_quote_name("a" * 101) == "Quote name must be 100 characters or less"
    assert validate_customer_reference(None) is None
    assert validate_customer_reference("r" * 51) == "Customer reference must be 50 characters or less"
