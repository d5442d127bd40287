"""CLI for shade sail calculations."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from shadecore.catalog.loader import get_catalog
from shadecore.exceptions import ShadeCoreError
from shadecore.geometry.topology import covered_triangles, diagonal_keys, edge_keys
from shadecore.logging_config import setup_logging
from shadecore.order.models import PolygonConfiguration
from shadecore.order.payload import assemble_order_payload
from shadecore.order.pipeline import calculate_shade
from shadecore.settings import Settings
from shadecore.validate.measurement_validation import check_measurements
from shadecore.validate.polygon_validation import validate_polygon


def _read_configuration(path: Path, settings: Settings) -> PolygonConfiguration:
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ShadeCoreError("Configuration file must contain a JSON object", {"path": str(path)})
    data.setdefault("currency", settings.catalog.default_currency)
    return PolygonConfiguration.model_validate(data)


def _command_topology(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    return {
        "corner_count": args.corners,
        "edge_keys": list(edge_keys(args.corners)),
        "diagonal_keys": list(diagonal_keys(args.corners)),
        "triangles": [triangle.label for triangle in covered_triangles(args.corners)],
    }


def _command_validate(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    config = _read_configuration(args.config, settings)
    result = validate_polygon(config.measurements, config.corner_count)
    ranges = check_measurements(config.measurements, config.unit, settings.limits)
    return {
        "is_valid": result.is_valid,
        "complete": result.complete,
        "errors": result.errors,
        "range_errors": ranges.errors,
        "typo_suggestions": ranges.typo_suggestions,
    }


def _command_calculate(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    config = _read_configuration(args.config, settings)
    catalog = get_catalog(str(settings.catalog.path) if settings.catalog.path else None)
    return calculate_shade(config, catalog, settings).to_dict()


def _command_payload(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    config = _read_configuration(args.config, settings)
    catalog = get_catalog(str(settings.catalog.path) if settings.catalog.path else None)
    calculations = calculate_shade(config, catalog, settings)
    return assemble_order_payload(config, calculations, catalog).model_dump(mode="json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shadecore", description="Validate, measure and price custom shade sails")
    parser.add_argument("--settings", type=Path, help="Settings YAML (default: SHADECORE_CONFIG or config/default.yaml)")
    parser.add_argument("--log-level", help="Override the configured log level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    topology = subparsers.add_parser("topology", help="List edge and diagonal keys for a corner count")
    topology.add_argument("corners", type=int, help="Number of corners (3-6)")
    topology.set_defaults(handler=_command_topology)

    for name, handler, help_text in (
        ("validate", _command_validate, "Check measurements for geometric feasibility"),
        ("calculate", _command_calculate, "Compute area, perimeter, sizing and price"),
        ("payload", _command_payload, "Assemble the order payload"),
    ):
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("config", type=Path, help="Configuration JSON file")
        command.set_defaults(handler=handler)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.load(args.settings)
    except ShadeCoreError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 2

    setup_logging(settings.logging, level=args.log_level)

    try:
        result = args.handler(args, settings)
    except (ShadeCoreError, PydanticValidationError) as exc:
        logger.error("{command} failed: {error}", command=args.command, error=str(exc))
        return 1
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Could not read configuration: {error}", error=str(exc))
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
