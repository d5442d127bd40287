from __future__ import annotations

import json

from loguru import logger

from shadecore.logging_config import setup_logging
from shadecore.settings import LoggingSettings


def test_json_lines_carry_bound_fields(tmp_path):
    path = tmp_path / "logs" / "shadecore.log"
    setup_logging(LoggingSettings(level="info", json_format=True, file=path))
    try:
        logger.debug("Not written at INFO")
        logger.info("Priced {corners}-corner sail", corners=4, currency="NZD")
    finally:
        logger.remove()

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["message"] == "Priced 4-corner sail"
    assert entry["level"] == "INFO"
    assert entry["corners"] == 4
    assert entry["currency"] == "NZD"


def test_level_override(tmp_path):
    path = tmp_path / "debug.log"
    setup_logging(LoggingSettings(level="WARNING", file=path), level="debug")
    try:
        logger.debug("Tier lookup at {perimeter}m", perimeter=16.0)
    finally:
        logger.remove()

    assert "Tier lookup at 16.0m" in path.read_text(encoding="utf-8")
