"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (POKECATALOG__CATALOG__PAGE_SIZE=40)
  2. pokecatalog.yaml       (searched in cwd, then the platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("pokecatalog")


def _find_config_file() -> str | None:
    """Return the path of the first pokecatalog.yaml found, or None."""
    candidates = [
        Path("pokecatalog.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "pokecatalog.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ApiSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    base_url: str = "https://pokeapi.co/api/v2"
    timeout_seconds: float = 10.0
    user_agent: str = "pokecatalog/0.1"

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must use http or https scheme")
        return v


class CatalogSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    page_size: int = 20
    bulk_batch_size: int = 100
    # Upper bound on the background load, whatever count the source reports.
    bulk_max_total: int = 1025
    decoration_concurrency: int = 10
    language: str = "ja-Hrkt"
    fallback_languages: list[str] = ["ja"]

    @field_validator("page_size", "bulk_batch_size", "bulk_max_total", "decoration_concurrency")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: POKECATALOG__API__TIMEOUT_SECONDS=5
        env_prefix="POKECATALOG__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    api: ApiSettings = ApiSettings()
    catalog: CatalogSettings = CatalogSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
