"""
Configuration Management for LentGreen

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The default currency and the reminders flag are plain settings handed to
the collaborators that need them, never module-level globals.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value persistence configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LENTGREEN_STORAGE_",
        extra="ignore"
    )

    backend: str = Field(
        default="json_file",
        pattern="^(json_file|memory)$",
        description="Storage backend to use"
    )
    data_dir: Path = Field(
        default=Path.home() / ".lentgreen",
        description="Directory holding one JSON file per storage key"
    )

    # Keys of the three independently stored records
    debts_key: str = Field(
        default="lentgreen_debts",
        min_length=1,
        description="Key for the debt list"
    )
    people_key: str = Field(
        default="lentgreen_people",
        min_length=1,
        description="Key for the person list"
    )
    templates_key: str = Field(
        default="lentgreen_templates",
        min_length=1,
        description="Key for the template list"
    )


class ReminderSettings(BaseSettings):
    """Due-date reminder configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LENTGREEN_REMINDERS_",
        extra="ignore"
    )

    enabled: bool = Field(
        default=False,
        description="Whether due-date reminders are scheduled at all"
    )
    hour: int = Field(
        default=9,
        ge=0,
        le=23,
        description="Hour of day the reminder fires"
    )
    minute: int = Field(
        default=0,
        ge=0,
        le=59,
        description="Minute of the hour the reminder fires"
    )
    days_before: int = Field(
        default=1,
        ge=0,
        description="How many days before the due date the reminder fires"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LENTGREEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_currency: str = Field(
        default="₽",
        min_length=1,
        max_length=8,
        description="Currency symbol used for new debts"
    )
    seed_demo_data: bool = Field(
        default=True,
        description="Seed demo people and debts when storage is empty"
    )
    recent_people_window: int = Field(
        default=50,
        ge=1,
        description="How many of the most recently added debts feed recent people"
    )
    due_soon_days: int = Field(
        default=7,
        ge=0,
        description="Default window for the 'due soon' list"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any casing, reject unknown level names."""
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
    def reminders(self) -> ReminderSettings:
        return ReminderSettings()

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

    Returns a dict of {setting_name: is_valid}, plus an
    "<name>_error" entry for every section that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "reminders", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
