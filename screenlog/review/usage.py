"""
Usage aggregation.

Pure functions over lists of entries: daily sums, groupings for the
breakdown views, and weekly bucketing for the charts.
Nothing here touches storage.
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Union

from screenlog.core.models import Goal, GoalType, TimeEntry
from screenlog.core.utils import format_date, parse_date

GROUP_KEYS = ("category", "app", "device")


@dataclass
class UsageSlice:
    """One bar of a breakdown: a group name and its share of the total."""
    name: str
    duration: int
    percentage: int


@dataclass
class DayUsage:
    """Total minutes logged on one day of a week."""
    date: str
    label: str
    minutes: int


def percent_of(part: int, whole: int) -> int:
    """Whole-number percentage, halves rounded up. 0 when whole is 0."""
    if whole <= 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)


def _as_date_str(value: Union[str, date]) -> str:
    return value if isinstance(value, str) else format_date(value)


def total_minutes(entries: Iterable[TimeEntry]) -> int:
    """Sum of durations."""
    return sum(entry.duration for entry in entries)


def usage_by_date(entries: Iterable[TimeEntry], day: Union[str, date]) -> List[TimeEntry]:
    """All entries logged for a date."""
    day = _as_date_str(day)
    return [entry for entry in entries if entry.date == day]


def today_usage(
    entries: Iterable[TimeEntry],
    goal_type: Optional[str] = None,
    target: Optional[str] = None,
    today: Union[str, date, None] = None,
) -> int:
    """
    Minutes logged today.

    With goal_type "app" or "category", only entries whose app or category
    equals target are counted. Any other goal_type counts everything.
    """
    if today is None:
        today = date.today()
    todays = usage_by_date(entries, today)

    if goal_type == GoalType.APP:
        todays = [entry for entry in todays if entry.app == target]
    elif goal_type == GoalType.CATEGORY:
        todays = [entry for entry in todays if entry.category.value == target]

    return total_minutes(todays)


def _group_name(entry: TimeEntry, key: str) -> str:
    if key == "app":
        return entry.app
    if key == "device":
        return entry.device.value
    return entry.category.value


def group_usage(entries: Sequence[TimeEntry], key: str = "category") -> List[UsageSlice]:
    """
    Group entries by category, app or device.

    Sorted by duration, largest first; ties keep first-seen order.
    Percentages are rounded shares of the grouped total.
    """
    if key not in GROUP_KEYS:
        raise ValueError(f"Invalid grouping: {key} (expected one of: {', '.join(GROUP_KEYS)})")

    grouped = {}
    for entry in entries:
        name = _group_name(entry, key)
        grouped[name] = grouped.get(name, 0) + entry.duration

    total = sum(grouped.values())
    slices = [
        UsageSlice(
            name=name,
            duration=duration,
            percentage=percent_of(duration, total),
        )
        for name, duration in grouped.items()
    ]
    slices.sort(key=lambda s: s.duration, reverse=True)
    return slices


def week_dates(today: Union[str, date], week_starts_on: int = 0) -> List[date]:
    """
    The seven dates of the week containing today.

    week_starts_on follows date.weekday(): 0 is Monday, 6 is Sunday.
    """
    if isinstance(today, str):
        today = parse_date(today)
    offset = (today.weekday() - week_starts_on) % 7
    start = today - timedelta(days=offset)
    return [start + timedelta(days=i) for i in range(7)]


def weekly_daily_totals(
    entries: Sequence[TimeEntry],
    today: Union[str, date],
    week_starts_on: int = 0,
) -> List[DayUsage]:
    """Per-day totals for the bar chart."""
    days = []
    for day in week_dates(today, week_starts_on):
        days.append(DayUsage(
            date=format_date(day),
            label=day.strftime("%a"),
            minutes=total_minutes(usage_by_date(entries, day)),
        ))
    return days


def chart_scale(days: Sequence[DayUsage], minimum: int = 60) -> int:
    """Height of the bar chart: the busiest day, but never under an hour."""
    return max([day.minutes for day in days] + [minimum])


def weekly_category_breakdown(
    entries: Sequence[TimeEntry],
    today: Union[str, date],
    week_starts_on: int = 0,
) -> List[UsageSlice]:
    """Category split of the current week, for the pie chart."""
    dates = {format_date(day) for day in week_dates(today, week_starts_on)}
    week_entries = [entry for entry in entries if entry.date in dates]
    return group_usage(week_entries, "category")


def recent_entries(entries: Sequence[TimeEntry], limit: int = 5) -> List[TimeEntry]:
    """
    Most recent entries across all dates.

    Entries carry no timestamp, so within a day the later-added one
    (higher list position) counts as more recent.
    """
    indexed = list(enumerate(entries))
    indexed.sort(key=lambda pair: (pair[1].date, pair[0]), reverse=True)
    return [entry for _, entry in indexed[:limit]]


def goal_usage(goal: Goal, entries: Iterable[TimeEntry], today: Union[str, date, None] = None) -> int:
    """Today's minutes that count against a goal."""
    if goal.type == GoalType.TOTAL:
        return today_usage(entries, today=today)
    return today_usage(entries, goal.type, goal.target, today)


def goal_progress(goal: Goal, entries: Iterable[TimeEntry], today: Union[str, date, None] = None) -> int:
    """Percent of a goal's limit used today, capped at 100."""
    usage = goal_usage(goal, entries, today)
    return min(percent_of(usage, goal.limit), 100)
