"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage location and dashboard limits are the only knobs;
everything else about the expense model is fixed.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local JSON storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSES_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    enabled: bool = Field(
        default=True,
        description="Persist expenses to disk (False keeps them in memory only)"
    )
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the expenses file"
    )
    storage_key: str = Field(
        default="indian-expenses",
        min_length=1,
        description="Name of the expenses collection (file stem)"
    )

    @field_validator('storage_key')
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """The key becomes a file name, so path separators are not allowed."""
        if "/" in v or "\\" in v:
            raise ValueError(f"Storage key must not contain path separators: {v}")
        return v

    @property
    def file_path(self) -> Path:
        """Full path of the JSON file backing the store."""
        return self.data_dir / f"{self.storage_key}.json"


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

    # Environment
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
        description="Log level for the structured logger"
    )

    # Dashboard limits
    top_categories_limit: int = Field(
        default=5,
        ge=1,
        le=20,
        description="How many categories the dashboard ranks"
    )
    recent_expenses_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="How many recently added expenses the dashboard lists"
    )

    # Validation thresholds
    max_expense_amount_inr: float = Field(
        default=1000000.0,
        description="Amount above which the form asks the user to double-check"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.upper()
        if level not in allowed:
            raise ValueError(f"Unknown log level: {v}. Allowed: {sorted(allowed)}")
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


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the groups that failed.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
