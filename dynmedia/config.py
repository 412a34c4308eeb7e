"""Configuration for the dynamic media path service."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dynmedia.core.catalog import default_catalog_path
from dynmedia.core.dimensions import Dimension


class Settings(BaseSettings):
    """
    Service configuration.

    All settings can be overridden via environment variables.
    """

    SERVICE_NAME: str = Field(default="dynmedia")
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )

    # Asset catalog
    CATALOG_PATH: Path = Field(default_factory=default_catalog_path)

    # Largest image the image server renders; a catalog size_limit takes precedence
    SIZE_LIMIT_WIDTH: int = Field(default=2000, ge=1)
    SIZE_LIMIT_HEIGHT: int = Field(default=2000, ge=1)

    DEFAULT_LOCALE: str = Field(default="en")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def size_limit(self) -> Dimension:
        return Dimension(width=self.SIZE_LIMIT_WIDTH, height=self.SIZE_LIMIT_HEIGHT)


settings = Settings()
