"""Loguru sinks for the CLI and the API service."""

from __future__ import annotations

import json
import sys
from typing import Any

from loguru import logger

from shadecore.settings import LoggingSettings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

FILE_ROTATION = "10 MB"
FILE_RETENTION = "7 days"


def _json_line(record: dict[str, Any]) -> str:
    """One JSON object per record; bound kwargs (corners, currency, ...) become top-level keys."""
    entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
        "message": record["message"],
    }
    for key, value in record["extra"].items():
        if key.startswith("_"):
            continue
        entry.setdefault(key, value if isinstance(value, (int, float, bool)) or value is None else str(value))

    exception = record["exception"]
    if exception is not None and exception.type is not None:
        entry["error"] = {"type": exception.type.__name__, "value": str(exception.value)}

    # Returned text is used as a format template by loguru
    record["extra"]["_json"] = json.dumps(entry, ensure_ascii=False)
    return "{extra[_json]}\n"


def setup_logging(settings: LoggingSettings, *, level: str | None = None) -> None:
    """Replace loguru's default sink with the configured ones.

    Args:
        settings: Logging section of the application settings.
        level: Overrides ``settings.level`` (the CLI ``--log-level`` flag).
    """
    logger.remove()

    effective_level = (level or settings.level).upper()
    formatter: Any = _json_line if settings.json_format else CONSOLE_FORMAT

    logger.add(
        sys.stderr,
        format=formatter,
        level=effective_level,
        colorize=not settings.json_format,
    )

    if settings.file:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            settings.file,
            format=formatter,
            level=effective_level,
            rotation=FILE_ROTATION,
            retention=FILE_RETENTION,
            compression="zip",
        )

    logger.debug(
        "Logging configured: level={level} json={json_format}",
        level=effective_level,
        json_format=settings.json_format,
    )


__all__ = ["CONSOLE_FORMAT", "setup_logging"]
