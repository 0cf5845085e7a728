"""
Configuration Management for the Budget Tracker

Uses pydantic-settings for type-safe configuration from environment
variables and an optional ``.env`` file. Nothing is required: every
field has a default suitable for a single local user.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the store file"
    )
    store_filename: str = Field(
        default="budget_store.json",
        description="Name of the JSON file backing the key-value store"
    )

    # Keys inside the store
    ledger_key: str = Field(
        default="budget_data",
        min_length=1,
        description="Key holding the serialized ledger"
    )
    dark_mode_key: str = Field(
        default="dark_mode_preference",
        min_length=1,
        description="Key holding the dark mode flag"
    )

    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for a file write before giving up"
    )

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.store_filename


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Display
    currency_symbol: str = Field(
        default="$",
        max_length=3,
        description="Prefix for displayed amounts"
    )

    # Validation thresholds
    large_amount_warning: Decimal = Field(
        default=Decimal("10000"),
        gt=0,
        description="Amounts above this get a non-blocking warning"
    )

    @field_validator("currency_symbol")
    @classmethod
    def strip_symbol(cls, v: str) -> str:
        return v.strip()


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
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    ``<name>_error`` entry for each section that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
