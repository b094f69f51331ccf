"""
Weekly review module.

Summarizes the current week for reflection: daily totals, the
category split, and where each goal stands today.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from screenlog.core.store import ScreenTimeStore
from screenlog.core.utils import format_duration
from screenlog.guardrails.goals import check_goal_limits, format_goal_status
from screenlog.review.usage import (
    chart_scale,
    weekly_category_breakdown,
    weekly_daily_totals,
)

logger = logging.getLogger(__name__)

BAR_WIDTH = 30


def get_weekly_stats(store: ScreenTimeStore, today: Optional[str] = None) -> dict:
    """
    Calculate usage statistics for the week containing today.
    """
    today = today or store.today
    week_starts_on = store.config.week_starts_on

    days = weekly_daily_totals(store.entries, today, week_starts_on)
    categories = weekly_category_breakdown(store.entries, today, week_starts_on)
    total = sum(day.minutes for day in days)
    active_days = [day for day in days if day.minutes > 0]

    return {
        "today": today,
        "days": days,
        "scale": chart_scale(days, store.config.chart_min_scale_minutes),
        "total_minutes": total,
        "daily_average": total // len(active_days) if active_days else 0,
        "busiest_day": max(active_days, key=lambda d: d.minutes) if active_days else None,
        "categories": categories,
        "goal_warnings": check_goal_limits(store.goals, store.entries, today),
    }


def format_weekly_review(store: ScreenTimeStore, today: Optional[str] = None) -> str:
    """
    Format weekly review as plain text.
    """
    stats = get_weekly_stats(store, today)
    days = stats["days"]

    lines = [
        f"ScreenLog - Weekly Review ({days[0].date} to {days[-1].date})",
        "",
    ]

    if stats["total_minutes"] == 0:
        lines.extend([
            "No screen time logged this week.",
            "",
            "Review focus:",
            "- Did you forget to log, or did you stay off screens?",
        ])
        return "\n".join(lines)

    # Daily bars
    lines.append("Daily:")
    for day in days:
        bar = "#" * round(day.minutes / stats["scale"] * BAR_WIDTH)
        lines.append(f"  {day.label}  {format_duration(day.minutes):>8}  {bar}")
    lines.append("")

    lines.extend([
        f"Week total: {format_duration(stats['total_minutes'])}",
        f"Daily average (days logged): {format_duration(stats['daily_average'])}",
    ])
    if stats["busiest_day"]:
        busiest = stats["busiest_day"]
        lines.append(f"Busiest day: {busiest.label} {busiest.date} ({format_duration(busiest.minutes)})")
    lines.append("")

    # Category split
    lines.append("By category:")
    for s in stats["categories"]:
        lines.append(f"  {s.name.capitalize()}: {format_duration(s.duration)} ({s.percentage}%)")
    lines.append("")

    lines.append(format_goal_status(store.goals, store.entries, stats["today"]))
    lines.append("")

    if stats["goal_warnings"]:
        lines.append("ONE CHANGE NEXT WEEK:")
        top = stats["goal_warnings"][0].goal
        lines.append(f"-> Stop before hitting the limit on {top.label}")
        lines.append("")

    return "\n".join(lines)


def print_weekly_review(store: ScreenTimeStore, today: Optional[str] = None) -> None:
    """
    Print weekly review to stdout.
    """
    print(format_weekly_review(store, today))


def export_weekly_review(
    store: ScreenTimeStore,
    today: Optional[str] = None,
    filepath: Optional[str] = None,
) -> str:
    """
    Export weekly review to file.

    Returns file path.
    """
    if not filepath:
        filepath = f"data/weekly_review_{datetime.utcnow().strftime('%Y%m%d')}.txt"

    review = format_weekly_review(store, today)
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w") as f:
        f.write(review)

    logger.info(f"Weekly review exported to {filepath}")
    return filepath
