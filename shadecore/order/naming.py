"""Quote names and customer references shown on saved quotes and exported files."""

from __future__ import annotations

import re
from datetime import date

MAX_QUOTE_NAME_LENGTH = 100
MAX_REFERENCE_LENGTH = 50
MAX_FILENAME_LENGTH = 100

_RESERVED_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_WHITESPACE = re.compile(r"\s+")


def default_quote_name(
    corner_count: int,
    fabric_label: str | None,
    fabric_color: str | None,
    on: date | None = None,
) -> str:
    """``4-Corner Monotec 370 Charcoal Shade Sail - Oct 19``."""
    day = on or date.today()
    name = f"{corner_count}-Corner {fabric_label or 'Custom'}"
    if fabric_color:
        name += f" {fabric_color}"
    name += f" Shade Sail - {day.strftime('%b')} {day.day}"

    if len(name) > MAX_QUOTE_NAME_LENGTH:
        name = name[: MAX_QUOTE_NAME_LENGTH - 3] + "..."
    return name


def _trim(text: str | None, limit: int) -> str:
    if not text:
        return ""
    return text.strip()[:limit]


def sanitize_quote_name(name: str | None) -> str:
    return _trim(name, MAX_QUOTE_NAME_LENGTH)


def sanitize_customer_reference(reference: str | None) -> str:
    return _trim(reference, MAX_REFERENCE_LENGTH)


def sanitize_for_filename(name: str | None) -> str:
    """Filesystem-safe slug: reserved characters removed, whitespace to ``-``."""
    if not name:
        return ""
    cleaned = _RESERVED_FILENAME_CHARS.sub("", name.strip())
    cleaned = _WHITESPACE.sub("-", cleaned)
    cleaned = cleaned.strip(".")[:MAX_FILENAME_LENGTH]
    return cleaned or "quote"


def validate_quote_name(name: str | None) -> str | None:
    """Error message when the trimmed name is too long, else None."""
    if name and len(name.strip()) > MAX_QUOTE_NAME_LENGTH:
        return f"Quote name must be {MAX_QUOTE_NAME_LENGTH} characters or less"
    return None


def validate_customer_reference(reference: str | None) -> str | None:
    if reference and len(reference.strip()) > MAX_REFERENCE_LENGTH:
        return f"Customer reference must be {MAX_REFERENCE_LENGTH} characters or less"
    return None


__all__ = [
    "MAX_QUOTE_NAME_LENGTH",
    "MAX_REFERENCE_LENGTH",
    "default_quote_name",
    "sanitize_quote_name",
    "sanitize_customer_reference",
    "sanitize_for_filename",
    "validate_quote_name",
    "validate_customer_reference",
]
