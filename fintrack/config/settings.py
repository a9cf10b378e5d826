"""
Configuration Management for FinanceTracker

Uses pydantic-settings for type-safe configuration from environment variables.

All knobs live here: where the key-value store is kept, the default
monthly budget, and the shape of the dashboard aggregates.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Loads configuration from FINTRACK_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    storage_backend: str = Field(
        default="json",
        pattern="^(json|memory)$",
        description="Key-value backend: 'json' file or in-process 'memory'",
    )
    storage_path: str = Field(
        default="fintrack_storage.json",
        description="Path of the JSON file backing the key-value store",
    )

    # Budget
    default_budget: Decimal = Field(
        default=Decimal("5000"),
        ge=0,
        description="Monthly budget used until the user sets one",
    )

    # Dashboard aggregates
    series_window: int = Field(
        default=6,
        ge=1,
        le=24,
        description="Number of months in the income/expense trend",
    )
    category_top_n: int = Field(
        default=8,
        ge=1,
        le=50,
        description="How many expense categories the breakdown keeps",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level",
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON (False gives console output)",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any casing, store upper-case."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
