"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (DOXYCONTEXT__SITE__BASE_URL=https://...)
  2. doxycontext.yaml       (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults. The
``--base-url`` command-line flag is applied by server.main() on top of these.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_USER_AGENT = "doxycontext/1.0 (Doxygen documentation crawler)"


def _find_config_file() -> str | None:
    """Return the path of the first doxycontext.yaml found, or None."""
    candidates = [
        Path("doxycontext.yaml"),
        Path(platformdirs.user_config_dir("doxycontext")) / "doxycontext.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "0.0.0.0"
    port: int = 8080
    auth_enabled: bool = False
    auth_key: str = ""


class SiteSettings(BaseModel):
    # Default documentation root used when a tool call omits base_url
    base_url: str | None = None

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.rstrip("/") or None


class CrawlerSettings(BaseModel):
    user_agent: str = DEFAULT_USER_AGENT
    page_ttl_seconds: int = 5 * 60
    index_ttl_seconds: int = 30 * 60
    cleanup_interval_seconds: int = 10 * 60
    request_timeout_seconds: float = 30.0


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: DOXYCONTEXT__SERVER__PORT=9090
        env_prefix="DOXYCONTEXT__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    site: SiteSettings = SiteSettings()
    crawler: CrawlerSettings = CrawlerSettings()
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
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
        )
