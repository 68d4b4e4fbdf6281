"""
Application settings management.

Settings come from defaults, ``VERSE_KEEPER_*`` environment variables or a
``.env`` file, and an optional JSON config file that the app writes when
preferences change.

Author: Kasim Lyee <lyee@codewithlyee.com>
Company: Softlite Inc.
License: MIT
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.logger import get_logger

logger = get_logger(__name__)

APP_DIR = Path.home() / ".verse_keeper"

DEFAULT_TRANSLATION = "web"

AVAILABLE_TRANSLATIONS: Dict[str, str] = {
    "web": "World English Bible",
    "kjv": "King James Version",
    "bbe": "Bible in Basic English",
    "oeb-us": "Open English Bible, US Ed.",
}


class Settings(BaseSettings):
    """
    Application settings.

    Attributes:
        selected_translation: Translation used for every lookup
        api_base_url: bible-api.com service root
        request_timeout: Per-request timeout in seconds
        max_retries: Attempts per request on network failure
        cache_directory: Path to the on-disk verse cache
        cache_ttl_hours: Validity window of reference lookups
        log_directory: Path to log files
        log_level: Logging level name
        show_verse_numbers: Prefix verse numbers when printing passages
        font_size: Display font size preference
        config_file: JSON file preferences are saved to
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="VERSE_KEEPER_",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # API Configuration
    selected_translation: str = Field(default=DEFAULT_TRANSLATION, description="Translation ID")
    api_base_url: str = Field(default="https://bible-api.com", description="API root")
    request_timeout: float = Field(default=15.0, gt=0, description="Request timeout (s)")
    max_retries: int = Field(default=3, ge=1, description="Attempts on network failure")

    # Cache Settings
    cache_directory: Path = Field(default=APP_DIR / "cache", description="Cache storage path")
    cache_ttl_hours: int = Field(default=24, ge=1, description="Reference cache TTL in hours")

    # Logging
    log_directory: Path = Field(default=APP_DIR / "logs", description="Log file path")
    log_level: str = Field(default="INFO", description="Logging level")

    # Display
    show_verse_numbers: bool = Field(default=True, description="Show verse numbers")
    font_size: float = Field(default=20.0, gt=0, description="Font size")

    config_file: Path = Field(default=APP_DIR / "config.json", description="Preferences file")

    def __init__(self, **kwargs):
        """Initialize settings and apply the config file if it exists."""
        super().__init__(**kwargs)
        self.load_from_file()

    @field_validator("selected_translation")
    @classmethod
    def validate_translation(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in AVAILABLE_TRANSLATIONS:
            raise ValueError(
                f"Unsupported translation: {v}. "
                f"Choose one of: {', '.join(AVAILABLE_TRANSLATIONS)}"
            )
        return v

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        for directory in [self.cache_directory, self.log_directory, self.config_file.parent]:
            directory.mkdir(parents=True, exist_ok=True)

    def _preferences(self) -> Dict[str, Any]:
        data = self.model_dump(exclude={"config_file"})
        for key, value in data.items():
            if isinstance(value, Path):
                data[key] = str(value)
        return data

    def save_to_file(self) -> None:
        """Save settings to the config file."""
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(self._preferences(), f, indent=2)
            logger.info(f"Settings saved to {self.config_file}")
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")

    def load_from_file(self) -> None:
        """Load settings from the config file, keeping current values on error."""
        if not self.config_file.exists():
            logger.debug("No config file found, using defaults")
            return

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("Config file must hold a JSON object")

            # Apply to a copy first so one bad value leaves self untouched
            staged = self.model_copy()
            for key, value in data.items():
                if key in type(self).model_fields and key != "config_file":
                    setattr(staged, key, value)

            for key in data:
                if key in type(self).model_fields and key != "config_file":
                    setattr(self, key, getattr(staged, key))

            logger.info("Settings loaded from file")

        except (OSError, ValueError) as e:
            logger.error(f"Failed to load settings: {e}")

    def update_translation(self, translation: str) -> None:
        """
        Update and save the selected translation.

        Raises:
            ValueError: If the translation is not available
        """
        self.selected_translation = translation
        self.save_to_file()
        logger.info(f"Translation set to {self.selected_translation}")

    def reset_to_defaults(self) -> None:
        """Reset preferences to default values and save."""
        defaults = type(self).model_construct()
        for key in ("selected_translation", "show_verse_numbers", "font_size"):
            setattr(self, key, getattr(defaults, key))
        self.save_to_file()
        logger.info("Settings reset to defaults")

    @property
    def translation_name(self) -> str:
        """Display name of the selected translation."""
        return AVAILABLE_TRANSLATIONS[self.selected_translation]
