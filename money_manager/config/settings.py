"""
Configuration Management for Money Manager

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage location, logging and validation thresholds are all read once
and validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MONEY_MANAGER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["json_file", "memory"] = Field(
        default="json_file",
        description="Where ledger records are persisted"
    )
    data_dir: Path = Field(
        default=Path(".money_manager"),
        description="Directory holding one JSON file per record"
    )
    # Legacy behavior: never write an empty collection
    skip_empty_writes: bool = Field(
        default=False,
        description="Skip persisting a collection when it is empty"
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

    # Logging
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG level regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        description="Standard library log level name"
    )

    # Display
    currency_symbol: str = Field(
        default="₹",
        max_length=5,
        description="Symbol shown before amounts"
    )

    # Validation thresholds
    max_transaction_amount: float = Field(
        default=10_000_000.0,
        gt=0,
        description="Amounts above this get a sanity warning"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any case, reject unknown level names."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


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
