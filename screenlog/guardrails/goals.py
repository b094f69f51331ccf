"""
Goal guardrails.

Rejects conflicting goal definitions, and reports goals whose daily
limit has been reached. Reaching a limit is a warning, never a block.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence, Union

from screenlog.core.models import Goal, GoalType, TimeEntry, ValidationError
from screenlog.core.utils import format_duration
from screenlog.review.usage import goal_progress, goal_usage

logger = logging.getLogger(__name__)


class GoalConflictError(ValidationError):
    """A goal for the same type and target already exists."""

    def __init__(self, goal_type: GoalType, target: Optional[str]):
        self.goal_type = goal_type
        self.target = target
        if goal_type == GoalType.TOTAL:
            message = "A total screen time goal already exists"
        else:
            message = f"A goal for {goal_type.value} {target!r} already exists"
        super().__init__(message)


class GuardrailWarning:
    """A guardrail warning message."""

    def __init__(self, category: str, message: str, goal: Optional[Goal] = None):
        self.category = category
        self.message = message
        self.goal = goal

    def __str__(self) -> str:
        return f"[{self.category}] {self.message}"


def has_conflict(
    goals: Sequence[Goal],
    goal_type: Union[GoalType, str],
    target: Optional[str],
    exclude_id: Optional[str] = None,
) -> bool:
    """
    Check whether another goal already covers (type, target).

    Only one total goal may exist, whatever its target.
    The goal being edited is skipped via exclude_id.
    """
    goal_type = GoalType(goal_type)

    for goal in goals:
        if exclude_id is not None and goal.id == exclude_id:
            continue
        if goal.type != goal_type:
            continue
        if goal_type == GoalType.TOTAL or goal.target == target:
            return True

    return False


def validate_goal(
    goals: Sequence[Goal],
    goal_type: Union[GoalType, str],
    target: Optional[str],
    limit: int,
    exclude_id: Optional[str] = None,
) -> Goal:
    """
    Validate a new or edited goal.

    Returns the normalized candidate (with a placeholder id).
    Raises ValidationError for bad input, GoalConflictError for duplicates.
    """
    candidate = Goal(id=exclude_id or "", type=goal_type, target=target, limit=limit)

    if has_conflict(goals, candidate.type, candidate.target, exclude_id):
        raise GoalConflictError(candidate.type, candidate.target)

    return candidate


def check_goal_limits(
    goals: Sequence[Goal],
    entries: Sequence[TimeEntry],
    today: Union[str, date, None] = None,
) -> List[GuardrailWarning]:
    """
    Check every goal against today's usage.

    Returns one warning per goal at or over its limit.
    """
    warnings: List[GuardrailWarning] = []

    for goal in goals:
        usage = goal_usage(goal, entries, today)
        if usage >= goal.limit:
            warnings.append(GuardrailWarning(
                "GOAL_REACHED",
                f"{goal.label}: {format_duration(usage)} used of "
                f"{format_duration(goal.limit)} limit.",
                goal=goal,
            ))

    for warning in warnings:
        logger.warning(f"Guardrail: {warning}")

    return warnings


def any_goal_reached(
    goals: Sequence[Goal],
    entries: Sequence[TimeEntry],
    today: Union[str, date, None] = None,
) -> bool:
    """True when at least one goal's limit has been reached today."""
    return any(goal_usage(goal, entries, today) >= goal.limit for goal in goals)


def format_goal_status(
    goals: Sequence[Goal],
    entries: Sequence[TimeEntry],
    today: Union[str, date, None] = None,
) -> str:
    """
    Format each goal with today's progress as plain text.
    """
    if not goals:
        return "No goals set. Add one to start limiting your screen time."

    lines = ["Goals (today):", "-" * 50]
    for goal in goals:
        usage = goal_usage(goal, entries, today)
        progress = goal_progress(goal, entries, today)
        marker = "REACHED" if usage >= goal.limit else f"{progress}%"
        lines.append(
            f"  {goal.label}: {format_duration(usage)} / "
            f"{format_duration(goal.limit)} per day [{marker}]"
        )

    return "\n".join(lines)
