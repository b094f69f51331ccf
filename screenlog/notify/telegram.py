"""
Telegram notification module.

Sends the weekly review and goal-limit warnings to a Telegram chat.
"""

import html
import logging
from typing import List

import requests

from screenlog.core.config import Config
from screenlog.guardrails.goals import GuardrailWarning

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """
    Sends messages to a Telegram bot chat.

    Delivery failures are logged and reported as False, never raised.
    """

    def __init__(self, config: Config):
        self.config = config
        self.bot_token = config.telegram_bot_token
        self.chat_id = config.telegram_chat_id

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    def send_message(self, text: str) -> bool:
        """
        Send arbitrary message to Telegram.

        Useful for weekly review summaries. Supports HTML formatting.
        """
        if not self.is_configured:
            logger.warning("Telegram not configured, skipping notification")
            return False

        url = f"https://api.telegram.org/bot{self.bot_token}/sendMessage"

        try:
            response = requests.post(
                url,
                json={
                    "chat_id": self.chat_id,
                    "text": text,
                    "parse_mode": "HTML",
                    "disable_web_page_preview": True,
                },
                timeout=10,
            )
            response.raise_for_status()

            logger.info("Telegram message sent")
            return True

        except requests.RequestException as e:
            logger.error(f"Telegram message failed: {e}")
            return False

    def send_review(self, review_text: str) -> bool:
        """Send a plain-text report, preformatted so the bars line up."""
        return self.send_message(f"<pre>{html.escape(review_text)}</pre>")

    def send_goal_warnings(self, warnings: List[GuardrailWarning]) -> bool:
        """
        Send one message listing every goal whose limit was reached.

        Nothing is sent when there are no warnings.
        """
        if not warnings:
            logger.info("No goal limits reached, nothing to send")
            return False

        lines = ["<b>ScreenLog</b>", "", "Daily limit reached:"]
        for warning in warnings:
            lines.append(f"- {html.escape(warning.message)}")

        return self.send_message("\n".join(lines))
