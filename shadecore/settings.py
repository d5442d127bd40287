from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from shadecore.exceptions import ConfigurationError

_PROJECT_ROOT = Path(__file__).parent.parent

# Load .env file from project root
_env_path = _PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

DEFAULT_CONFIG_PATH = _PROJECT_ROOT / "config" / "default.yaml"


class CatalogSettings(BaseModel):
    path: Path | None = None
    default_currency: str = "NZD"

    @field_validator("default_currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.strip().upper()


class ValidationSettings(BaseModel):
    # Legacy behaviour: skip triangle checks once an area has been computed
    skip_when_area_computed: bool = False


class LimitSettings(BaseModel):
    # Lengths in mm unless noted
    min_measurement_mm: float = Field(1000.0, gt=0.0)
    max_measurement_mm: float = Field(99999.0, gt=0.0)
    typical_edge_min_mm: float = Field(1800.0, gt=0.0)
    typical_edge_max_mm: float = Field(15000.0, gt=0.0)
    typical_height_min_mm: float = Field(900.0, gt=0.0)
    typical_height_max_mm: float = Field(8000.0, gt=0.0)
    typical_edge_min_in: float = Field(79.0, gt=0.0)
    typical_edge_max_in: float = Field(591.0, gt=0.0)
    typical_height_min_in: float = Field(79.0, gt=0.0)
    typical_height_max_in: float = Field(315.0, gt=0.0)
    max_perimeter_m: float = Field(50.0, gt=0.0)
    diagonal_tolerance: float = Field(0.05, ge=0.0, le=0.5)

    @model_validator(mode="after")
    def _check_ranges(self) -> "LimitSettings":
        if self.min_measurement_mm >= self.max_measurement_mm:
            raise ValueError("min_measurement_mm must be smaller than max_measurement_mm")
        if self.typical_edge_min_mm >= self.typical_edge_max_mm:
            raise ValueError("typical edge range is empty")
        if self.typical_height_min_mm >= self.typical_height_max_mm:
            raise ValueError("typical height range is empty")
        return self


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    file: Path | None = None

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper()


class ApiSettings(BaseModel):
    title: str = "Shade Sail Configurator API"
    ui_origin: str = "http://localhost:3000"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)


class Settings(BaseModel):
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    limits: LimitSettings = Field(default_factory=LimitSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                SHADECORE_CONFIG environment variable or defaults to config/default.yaml.

        Returns:
            Settings instance with loaded configuration. Built-in defaults are
            used when no path was requested and the default file is absent.

        Raises:
            ConfigurationError: If a requested file does not exist or is invalid.
        """
        env_path = os.getenv("SHADECORE_CONFIG")
        requested = path or (Path(env_path) if env_path else None)
        config_path = requested or DEFAULT_CONFIG_PATH
        if not config_path.exists():
            if requested is not None:
                raise ConfigurationError(
                    f"Configuration file not found: {config_path}",
                    {"path": str(config_path)},
                )
            return cls()
        with config_path.open("r", encoding="utf-8") as fp:
            try:
                payload: Any = yaml.safe_load(fp) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(
                    f"Configuration file is not valid YAML: {config_path}",
                    {"path": str(config_path)},
                ) from exc
        if not isinstance(payload, dict):
            raise ConfigurationError("Configuration root must be a mapping", {"path": str(config_path)})
        try:
            return cls(**payload)
        except (PydanticValidationError, TypeError) as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}", {"path": str(config_path)}) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "CatalogSettings",
    "ValidationSettings",
    "LimitSettings",
    "LoggingSettings",
    "ApiSettings",
    "DEFAULT_CONFIG_PATH",
    "get_settings",
]
