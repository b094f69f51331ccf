"""
Tests for Telegram notifications. No network: requests.post is mocked.
"""

import sys
from pathlib import Path
from unittest.mock import patch, MagicMock

import requests

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from screenlog.core.config import Config
from screenlog.core.models import Goal
from screenlog.guardrails.goals import GuardrailWarning
from screenlog.notify.telegram import TelegramNotifier


def configured() -> Config:
    return Config(telegram_bot_token="123:abc", telegram_chat_id="42")


class TestSendMessage:
    """Test message delivery."""

    @patch("screenlog.notify.telegram.requests.post")
    def test_not_configured(self, mock_post):
        assert TelegramNotifier(Config()).send_message("hi") is False
        mock_post.assert_not_called()

    @patch("screenlog.notify.telegram.requests.post")
    def test_sends(self, mock_post):
        mock_post.return_value = MagicMock()

        assert TelegramNotifier(configured()).send_message("hi") is True

        url = mock_post.call_args.args[0]
        payload = mock_post.call_args.kwargs["json"]
        assert url == "https://api.telegram.org/bot123:abc/sendMessage"
        assert payload["chat_id"] == "42"
        assert payload["text"] == "hi"

    @patch("screenlog.notify.telegram.requests.post")
    def test_failure_returns_false(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("down")
        assert TelegramNotifier(configured()).send_message("hi") is False

    @patch("screenlog.notify.telegram.requests.post")
    def test_http_error_returns_false(self, mock_post):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("400")
        mock_post.return_value = response
        assert TelegramNotifier(configured()).send_message("hi") is False


class TestGoalWarnings:
    """Test goal warning messages."""

    @patch("screenlog.notify.telegram.requests.post")
    def test_nothing_to_send(self, mock_post):
        assert TelegramNotifier(configured()).send_goal_warnings([]) is False
        mock_post.assert_not_called()

    @patch("screenlog.notify.telegram.requests.post")
    def test_lists_warnings_escaped(self, mock_post):
        goal = Goal(id="g", type="app", target="<Tube>", limit=30)
        warning = GuardrailWarning("GOAL_REACHED", f"{goal.label}: 0h 45m used", goal=goal)

        assert TelegramNotifier(configured()).send_goal_warnings([warning]) is True

        text = mock_post.call_args.kwargs["json"]["text"]
        assert "Daily limit reached:" in text
        assert "&lt;Tube&gt; (app)" in text

    @patch("screenlog.notify.telegram.requests.post")
    def test_review_is_preformatted(self, mock_post):
        TelegramNotifier(configured()).send_review("Mon  1h 0m  ##")
        text = mock_post.call_args.kwargs["json"]["text"]
        assert text == "<pre>Mon  1h 0m  ##</pre>"
