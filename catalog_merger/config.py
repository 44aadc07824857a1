"""Application settings loaded from environment variables.

Uses pydantic-settings. Variables are prefixed with ``CATALOG_MERGER_`` and
may also come from a local ``.env`` file.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CATALOG_MERGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        pattern="^(development|production)$",
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level",
    )
    storage_dir: str = Field(
        default=".catalog_merger",
        description="Directory holding the saved primary/secondary/merged slots",
    )
    preview_rows: int = Field(
        default=3,
        ge=1,
        le=100,
        description="Rows shown in table previews",
    )
    server_name: str = Field(default="127.0.0.1", description="Gradio host")
    server_port: int = Field(default=7860, ge=1000, le=65535, description="Gradio port")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance. Call ``get_settings.cache_clear()`` to reload."""
    return Settings()
