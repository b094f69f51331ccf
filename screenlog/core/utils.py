"""
Utility functions for ScreenLog.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from screenlog.core.models import DATE_FORMAT


def format_duration(minutes: int) -> str:
    """
    Convert minutes to the "Xh Ym" form used everywhere in the UI.

    Examples:
        0 -> "0h 0m"
        45 -> "0h 45m"
        135 -> "2h 15m"
    """
    return f"{minutes // 60}h {minutes % 60}m"


def today_in(timezone: str) -> date:
    """Current calendar date in the given IANA timezone."""
    return datetime.now(ZoneInfo(timezone)).date()


def today_str(timezone: str) -> str:
    """Current date as YYYY-MM-DD in the given timezone."""
    return today_in(timezone).strftime(DATE_FORMAT)


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string."""
    return datetime.strptime(value, DATE_FORMAT).date()


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)
