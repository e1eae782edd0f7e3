"""
Runtime Settings for Purse

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Runtime settings (where the ledger lives, how loud the logs
are) are kept apart from the user's ledger configuration (categories,
budgets, goals). The latter is plain data handed to the core on every call,
see purse.config.ledger_config.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATA_PATH = "~/.purse_data.json"


class StorageSettings(BaseSettings):
    """Ledger file storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PURSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_path: str = Field(
        default=DEFAULT_DATA_PATH,
        description="Path to the JSON ledger file"
    )
    write_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed ledger write is attempted"
    )

    @field_validator('data_path')
    @classmethod
    def validate_data_path(cls, v: str) -> str:
        """Reject blank paths; existence is not required (missing = empty ledger)."""
        if not v.strip():
            raise ValueError("data_path must not be empty")
        return v.strip()

    @property
    def resolved_data_path(self) -> Path:
        """Data path with ~ expanded."""
        return Path(self.data_path).expanduser()


class AppSettings(BaseSettings):
    """
    Logging, audit and budget defaults.

    Read from PURSE_* environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PURSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = Field(
        default="INFO",
        description="Standard logging level name"
    )
    audit_enabled: bool = Field(
        default=True,
        description="Emit audit events for ledger mutations"
    )
    default_cycle_start_day: int = Field(
        default=1,
        ge=1,
        le=31,
        description="Budget cycle start day used when the ledger config has none"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Groups the storage and app settings.
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
    Try loading every settings group.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries describing failures.
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
