"""Application settings and configuration."""

from datetime import date
from pathlib import Path
from typing import Optional

import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".networth"


class Settings(BaseSettings):
    """
    Service configuration.

    Every field can be set through a NETWORTH_-prefixed environment
    variable or a .env file, e.g. NETWORTH_DEFAULT_CURRENCY=CAD.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NETWORTH_",
    )

    app_name: str = "Net Worth Engine"

    # SQLite database lives in data_dir unless database_url is set
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Display currency for users without a stored preference
    default_currency: str = "USD"

    # Decides which calendar day is "today" for the current month
    timezone: str = "UTC"

    # Start of history when callers pass no start date
    history_start_date: date = date(1990, 1, 1)

    @field_validator("default_currency")
    @classmethod
    def _currency_code(cls, value: str) -> str:
        code = value.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"not a 3-letter currency code: {value!r}")
        return code

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        if value not in pytz.all_timezones_set:
            raise ValueError(f"unknown timezone: {value!r}")
        return value

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Explicit database_url, else networth.db inside the data directory."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.get_data_dir() / 'networth.db'}"


# Process-wide settings (tests and jobs swap them via set_settings)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Replace the process-wide settings."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Drop cached settings so the next access reloads the environment."""
    global _settings
    _settings = None
