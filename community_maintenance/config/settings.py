"""
Configuration Management for the Maintenance Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The storage root is still injectable at construction time so tests can
point every component at an isolated temporary directory.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from community_maintenance.models.record import DEFAULT_APP_ID, DEFAULT_CURRENCY


# Reference lists shipped inside the package
BUNDLED_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class StorageSettings(BaseSettings):
    """Where and how the database file is stored."""

    model_config = SettingsConfigDict(
        env_prefix="MAINTENANCE_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="App-private directory holding the database, reports and receipts"
    )
    db_filename: str = Field(
        default="maintenance.json",
        description="Database file name inside data_dir"
    )
    app_id: str = Field(
        default=DEFAULT_APP_ID,
        description="App identifier stamped on a fresh database"
    )
    currency: str = Field(
        default=DEFAULT_CURRENCY,
        min_length=3,
        max_length=3,
        description="Currency code stamped on a fresh database"
    )

    @field_validator("currency")
    @classmethod
    def uppercase_currency(cls, v: str) -> str:
        return v.upper()

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_filename


class ReferenceSettings(BaseSettings):
    """Static dropdown lists (flat numbers, expense categories)."""

    model_config = SettingsConfigDict(
        env_prefix="REFERENCE_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=BUNDLED_DATA_DIR,
        description="Directory holding the reference list files"
    )
    flats_filename: str = Field(
        default="flats.json",
        description="JSON array of flat numbers"
    )
    expenses_filename: str = Field(
        default="standardExpenses.json",
        description="JSON array of standard expense categories"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Level for the local structured log"
    )

    # Audit trail persisted next to the database
    audit_log_enabled: bool = Field(
        default=False,
        description="Append audit events to a JSON-lines file in the data directory"
    )
    audit_log_filename: str = Field(
        default="audit.log.jsonl",
        description="Audit file name inside the data directory"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def reference(self) -> ReferenceSettings:
        return ReferenceSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
