"""
Configuration settings for the StudyBuddy terminal app.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Advice API
    # ========================================
    advice_base_url: str = Field(
        default="https://api.adviceslip.com/",
        description="Base URL of the advice slip API",
    )
    advice_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for a single advice request",
    )

    # ========================================
    # Preferences
    # ========================================
    prefs_db_path: Path = Field(
        default=Path.home() / ".studybuddy" / "prefs.db",
        description="SQLite file holding login state and weekly goal",
    )
    default_weekly_goal: int = Field(
        default=300,
        description="Weekly goal in minutes when none is stored",
    )

    # ========================================
    # Focus Timer
    # ========================================
    timer_default_minutes: int = Field(
        default=25,
        description="Timer length used when the input is not a number",
    )
    timer_min_minutes: int = Field(
        default=1,
        description="Shortest allowed timer length",
    )
    timer_max_minutes: int = Field(
        default=180,
        description="Longest allowed timer length",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Helper Methods
    # ========================================
    def get_timer_config(self) -> dict[str, int]:
        """Get focus timer bounds as a dictionary."""
        return {
            "default_minutes": self.timer_default_minutes,
            "min_minutes": self.timer_min_minutes,
            "max_minutes": self.timer_max_minutes,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
