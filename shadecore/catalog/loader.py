from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from shadecore.catalog.models import Catalog
from shadecore.exceptions import CatalogError

DEFAULT_CATALOG_PATH = Path(__file__).parent / "default_catalog.yaml"


def load_catalog(path: Path | str | None = None) -> Catalog:
    """Load and check a catalog YAML document.

    Args:
        path: Catalog file. Defaults to the bundled ``default_catalog.yaml``.

    Returns:
        Catalog with every fabric, edge type and corner count resolved.

    Raises:
        CatalogError: If the file is missing, unreadable or incomplete.
    """
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    if not catalog_path.exists():
        raise CatalogError(f"Catalog file not found: {catalog_path}", {"path": str(catalog_path)})

    with catalog_path.open("r", encoding="utf-8") as fp:
        try:
            payload: Any = yaml.safe_load(fp) or {}
        except yaml.YAMLError as exc:
            raise CatalogError(f"Catalog is not valid YAML: {catalog_path}", {"path": str(catalog_path)}) from exc

    if not isinstance(payload, dict):
        raise CatalogError("Catalog root must be a mapping", {"path": str(catalog_path)})

    try:
        catalog = Catalog(**payload)
    except PydanticValidationError as exc:
        raise CatalogError(f"Invalid catalog: {exc}", {"path": str(catalog_path)}) from exc

    logger.debug(
        "Catalog loaded from {path} ({fabrics} fabrics, {currencies} currencies)",
        path=str(catalog_path),
        fabrics=len(catalog.fabrics),
        currencies=len(catalog.currencies),
    )
    return catalog


@lru_cache(maxsize=8)
def get_catalog(path: str | None = None) -> Catalog:
    return load_catalog(path)


def get_default_catalog() -> Catalog:
    return get_catalog(None)


__all__ = ["DEFAULT_CATALOG_PATH", "load_catalog", "get_catalog", "get_default_catalog"]
