"""
Usage breakdown module.

Shows where one day's screen time went, by category, app or device.
"""

import logging
from typing import Optional

from screenlog.core.store import ScreenTimeStore
from screenlog.core.utils import format_duration
from screenlog.review.usage import group_usage, total_minutes

logger = logging.getLogger(__name__)

BAR_WIDTH = 30


def format_breakdown(
    store: ScreenTimeStore,
    date: Optional[str] = None,
    view: str = "category",
) -> str:
    """
    Format a day's usage breakdown as plain text.
    """
    date = date or store.today
    entries = store.usage_by_date(date)
    slices = group_usage(entries, view)

    lines = [
        f"Usage Breakdown - {date} (by {view})",
        "",
    ]

    if not slices:
        lines.append("No screen time logged for this date.")
        return "\n".join(lines)

    lines.append(f"Total: {format_duration(total_minutes(entries))}")
    lines.append("")

    name_width = max(len(s.name) for s in slices)
    for s in slices:
        # App names are shown as typed
        name = s.name if view == "app" else s.name.capitalize()
        bar = "#" * round(s.percentage / 100 * BAR_WIDTH)
        lines.append(
            f"{name:<{name_width}}  {format_duration(s.duration):>8}  "
            f"{s.percentage:>3}%  {bar}"
        )

    return "\n".join(lines)


def print_breakdown(
    store: ScreenTimeStore,
    date: Optional[str] = None,
    view: str = "category",
) -> None:
    """
    Print usage breakdown to stdout.
    """
    print(format_breakdown(store, date, view))
