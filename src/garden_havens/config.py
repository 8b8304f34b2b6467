"""
Application settings.

Values come from environment variables prefixed ``GARDEN_HAVENS_`` (or a
local ``.env`` file), falling back to the defaults below::

    GARDEN_HAVENS_LOCALE=fr garden-havens refresh
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

WORLD_ATLAS_URL = "https://cdn.jsdelivr.net/npm/world-atlas@2/countries-110m.json"


class Settings(BaseSettings):
    """Runtime configuration for the site builder and renderers."""

    model_config = SettingsConfigDict(
        env_prefix="GARDEN_HAVENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Garden Havens"
    app_env: str = "development"
    debug: bool = False
    locale: str = Field(default="en", description="UI language (en, fr, es, zh)")

    data_dir: Path = Path("data")
    api_port: int = 8000

    globe_diameter: int = Field(default=200, gt=0)
    range_map_width: int = Field(default=400, gt=0)
    occurrence_limit: int = Field(default=300, gt=0, le=300)
    world_topology_url: str = WORLD_ATLAS_URL

    @property
    def site_dir(self) -> Path:
        """Where the build flow writes the static site."""
        return self.data_dir / "derived" / "site"

    @property
    def preferences_path(self) -> Path:
        return self.data_dir / "preferences.json"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
