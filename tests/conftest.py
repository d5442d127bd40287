from __future__ import annotations

import pytest

from shadecore.catalog.loader import get_default_catalog
from shadecore.catalog.models import Catalog
from shadecore.settings import Settings

SQUARE = {"AB": 4000, "BC": 4000, "CD": 4000, "DA": 4000, "AC": 5657, "BD": 5657}
EQUILATERAL = {"AB": 3000, "BC": 3000, "CA": 3000}


@pytest.fixture()
def catalog() -> Catalog:
    return get_default_catalog()


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def square() -> dict[str, float]:
    return dict(SQUARE)


@pytest.fixture()
def equilateral() -> dict[str, float]:
    return dict(EQUILATERAL)
