"""
Tests for configuration loading.
"""

import json
import pytest
import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from screenlog.core.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SCREENLOG_DB_PATH", "SCREENLOG_SETTINGS", "TIMEZONE",
                 "TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID"):
        monkeypatch.delenv(name, raising=False)


class TestFromEnv:
    """Test Config.from_env."""

    def test_defaults(self):
        config = Config.from_env()

        assert config.database_path == "data/screenlog.db"
        assert config.timezone == "UTC"
        assert config.recent_entries_limit == 5
        assert config.default_goal_limit == 120
        assert config.week_starts_on == 0

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("SCREENLOG_DB_PATH", "/tmp/x.db")
        monkeypatch.setenv("TIMEZONE", "Asia/Jakarta")
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "t")
        monkeypatch.setenv("TELEGRAM_CHAT_ID", "c")

        config = Config.from_env()

        assert config.database_path == "/tmp/x.db"
        assert config.timezone == "Asia/Jakarta"
        assert "Telegram: configured" in config.get_settings_summary()

    def test_settings_file(self, monkeypatch, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({
            "display": {"recent_entries_limit": 10, "week_starts_on": 6},
            "goals": {"default_limit_minutes": 90},
        }))
        monkeypatch.setenv("SCREENLOG_SETTINGS", str(settings))

        config = Config.from_env()

        assert config.recent_entries_limit == 10
        assert config.week_starts_on == 6
        assert config.default_goal_limit == 90
        assert config.chart_min_scale_minutes == 60
        assert "Week starts on: Sunday" in config.get_settings_summary()

    def test_missing_settings_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SCREENLOG_SETTINGS", str(tmp_path / "nope.json"))
        with pytest.raises(FileNotFoundError):
            Config.from_env()
