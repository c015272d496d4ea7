"""
Runtime settings for the schedule service.

All environment variables are read here so the router and CLI agree on
defaults.
"""
import os
from functools import lru_cache


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # YAML config; empty means the packaged schedule_config.yaml
        self.CONFIG_PATH: str = os.environ.get("CHEESEBOARD_CONFIG", "")

        # Preferences file (.json, or .db/.sqlite for SQLite)
        self.PREFS_PATH: str = os.environ.get("CHEESEBOARD_PREFS_PATH", "data/preferences.json")

        # Saved schedule page; when set, used instead of the web-read service
        self.SOURCE_FILE: str = os.environ.get("CHEESEBOARD_SOURCE_FILE", "")

        # Overrides source.web_read_endpoint from the config
        self.WEB_READ_URL: str = os.environ.get("CHEESEBOARD_WEB_READ_URL", "")

        # CORS - comma-separated list of allowed origins
        self.ALLOWED_ORIGINS: list = os.environ.get(
            "CHEESEBOARD_ALLOWED_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173"
        ).split(",")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
