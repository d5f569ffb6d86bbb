from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///data/transactions.db"


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables and .env file.

    This uses pydantic-settings so that we get type validation and defaults.
    Business lookup tables (exchange rates, high-risk countries) are not
    settings; they live in ``txn_etl.transformation.config``.
    """

    # App basics
    ENV: Literal["development", "staging", "production"] = "development"
    """Environment mode: affects log rendering."""

    DEBUG: bool = False
    """Enable debug logging."""

    LOG_LEVEL: str = "INFO"
    """Root log level used by configure_logging."""

    # Source / destination
    INPUT_PATH: str = "data/transactions.csv"
    """Default CSV file read when no path is given on the command line."""

    DATABASE_URL: Optional[str] = None
    """Database connection URL. If None, uses the local SQLite file."""

    LOAD_BATCH_SIZE: int = Field(default=100, ge=1, le=10_000)
    """Rows committed per sub-batch by the database loader."""

    # Business
    REFERENCE_CURRENCY: str = "USD"
    """Currency every amount is converted to."""

    # Reporting
    REPORT_DIR: str = "."
    """Directory the quality report file is written to."""

    WRITE_REPORT: bool = True
    """Write the quality report to a file in addition to stdout."""

    REPORT_MAX_REJECTIONS: int = Field(default=10, ge=0)
    """Number of rejection reasons listed in the report before truncating."""

    # Model config
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL or DEFAULT_DATABASE_URL


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance to avoid re-parsing .env repeatedly."""
    return Settings()
