"""
Configuration management for ScreenLog.

Loads settings from environment variables and an optional JSON settings file.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any


@dataclass
class Config:
    """Application configuration."""

    # Database
    database_path: str = "data/screenlog.db"

    # Telegram
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None

    # Timezone used to decide what "today" is
    timezone: str = "UTC"

    # Display preferences (from settings JSON)
    recent_entries_limit: int = 5
    default_goal_limit: int = 120
    week_starts_on: int = 0  # 0 = Monday
    chart_min_scale_minutes: int = 60

    # Settings file the preferences were read from, if any
    settings_path: Optional[str] = None

    @classmethod
    def _load_json(cls, json_path: Path) -> Dict[str, Any]:
        """Load JSON configuration file."""
        if not json_path.exists():
            raise FileNotFoundError(f"Config file not found: {json_path}")

        with open(json_path, 'r') as f:
            return json.load(f)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables + optional settings JSON."""
        settings_path = os.getenv("SCREENLOG_SETTINGS")
        settings: Dict[str, Any] = {}
        if settings_path:
            settings = cls._load_json(Path(settings_path))

        display = settings.get("display", {})
        goals = settings.get("goals", {})

        config = cls(
            database_path=os.getenv("SCREENLOG_DB_PATH", "data/screenlog.db"),
            telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN"),
            telegram_chat_id=os.getenv("TELEGRAM_CHAT_ID"),

            timezone=os.getenv("TIMEZONE", "UTC"),

            # From settings JSON
            recent_entries_limit=display.get("recent_entries_limit", 5),
            week_starts_on=display.get("week_starts_on", 0),
            chart_min_scale_minutes=display.get("chart_min_scale_minutes", 60),
            default_goal_limit=goals.get("default_limit_minutes", 120),

            settings_path=settings_path,
        )

        return config

    def get_settings_summary(self) -> str:
        """Get a summary of current settings."""
        return f"""Database: {self.database_path}
Timezone: {self.timezone}
Settings file: {self.settings_path or "(defaults)"}

Display:
  Recent entries shown: {self.recent_entries_limit}
  Week starts on: {"Monday" if self.week_starts_on == 0 else "Sunday" if self.week_starts_on == 6 else self.week_starts_on}
  Chart minimum scale: {self.chart_min_scale_minutes} min

Goals:
  Default limit: {self.default_goal_limit} min

Telegram: {"configured" if self.telegram_bot_token and self.telegram_chat_id else "not configured"}
"""
