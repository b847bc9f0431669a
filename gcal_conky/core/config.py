"""
Configuration module - centralized settings for the widget.
Uses pydantic-settings to load values from environment variables and .env file.
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Widget settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    Every variable carries the GCAL_CONKY_ prefix:
        export GCAL_CONKY_WEEKS=10
        export GCAL_CONKY_CREDENTIALS_FILE=~/secrets/client_secret.json
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_prefix="GCAL_CONKY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # GOOGLE OAUTH FILES
    # ---------------------------------------------------------------------------
    # TOKEN_FILE: Where the OAuth token is persisted after the first authorization
    TOKEN_FILE: Path = Path("~/.config/gcal-conky/token.json")

    # CREDENTIALS_FILE: OAuth client secret downloaded from Google Cloud Console
    # (OAuth client of type "Desktop app")
    CREDENTIALS_FILE: Path = Path("~/.config/gcal-conky/credentials.json")

    # ---------------------------------------------------------------------------
    # CALENDAR SETTINGS
    # ---------------------------------------------------------------------------
    CALENDAR_ID: str = "primary"

    # MAX_RESULTS: Number of upcoming events listed in the right panel
    MAX_RESULTS: int = Field(default=10, ge=1, le=2500)

    # REQUEST_TIMEOUT: Seconds before a Google API call is abandoned
    REQUEST_TIMEOUT: float = 30.0

    # ---------------------------------------------------------------------------
    # DISPLAY SETTINGS
    # ---------------------------------------------------------------------------
    # WEEKS: Number of week rows in the calendar grid
    WEEKS: int = Field(default=14, ge=1)

    # HIGHLIGHT_COLOR: conky color slot used for ${colorN} highlights
    HIGHLIGHT_COLOR: int = Field(default=1, ge=0, le=9)

    # PLAIN: Emit text without conky markup (for terminals)
    PLAIN: bool = False

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("TOKEN_FILE", "CREDENTIALS_FILE", mode="after")
    @classmethod
    def _expand_path(cls, value: Path) -> Path:
        return Path(os.path.expandvars(os.path.expanduser(str(value))))

