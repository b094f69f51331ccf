"""
Unit tests for goal guardrails.

Tests conflict detection between goal definitions and the
"limit reached" warnings.
"""

import pytest
import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from screenlog.core.models import Goal, GoalType, TimeEntry, ValidationError
from screenlog.guardrails.goals import (
    GoalConflictError,
    any_goal_reached,
    check_goal_limits,
    format_goal_status,
    has_conflict,
    validate_goal,
)

TODAY = "2024-03-06"


@pytest.fixture
def goals():
    return [
        Goal(id="total", type="total", limit=240),
        Goal(id="insta", type="app", target="Instagram", limit=30),
        Goal(id="games", type="category", target="gaming", limit=60),
    ]


class TestHasConflict:
    """Test duplicate goal detection."""

    def test_second_total_goal_conflicts(self, goals):
        """Only one total goal may exist."""
        assert has_conflict(goals, "total", None) is True

    def test_total_target_is_ignored(self, goals):
        assert has_conflict(goals, GoalType.TOTAL, "anything") is True

    def test_same_app_conflicts(self, goals):
        assert has_conflict(goals, "app", "Instagram") is True

    def test_different_app_is_fine(self, goals):
        assert has_conflict(goals, "app", "TikTok") is False

    def test_same_target_different_type_is_fine(self, goals):
        """An app named like a category does not clash with the category goal."""
        assert has_conflict(goals, "app", "gaming") is False

    def test_same_category_conflicts(self, goals):
        assert has_conflict(goals, "category", "gaming") is True

    def test_editing_goal_does_not_conflict_with_itself(self, goals):
        assert has_conflict(goals, "app", "Instagram", exclude_id="insta") is False
        assert has_conflict(goals, "total", None, exclude_id="total") is False

    def test_no_goals(self):
        assert has_conflict([], "total", None) is False


class TestValidateGoal:
    """Test goal form validation."""

    def test_valid_goal_returns_candidate(self, goals):
        candidate = validate_goal(goals, "category", "education", 45)
        assert candidate.type == GoalType.CATEGORY
        assert candidate.target == "education"
        assert candidate.limit == 45

    def test_conflict_raises(self, goals):
        with pytest.raises(GoalConflictError, match="total screen time goal already exists"):
            validate_goal(goals, "total", None, 120)

    def test_conflict_is_a_validation_error(self, goals):
        with pytest.raises(ValidationError):
            validate_goal(goals, "app", "Instagram", 10)

    def test_limit_must_be_at_least_one(self):
        with pytest.raises(ValidationError):
            validate_goal([], "total", None, 0)

    def test_app_goal_needs_target(self):
        with pytest.raises(ValidationError):
            validate_goal([], "app", "", 30)

    def test_category_goal_needs_known_category(self):
        with pytest.raises(ValidationError):
            validate_goal([], "category", "sports", 30)

    def test_unknown_type(self):
        with pytest.raises(ValidationError):
            validate_goal([], "weekly", None, 30)


class TestGoalLimits:
    """Test limit reached warnings."""

    def test_reached_limit_warns(self, goals):
        entries = [
            TimeEntry(id="1", date=TODAY, device="phone", app="Instagram",
                      category="social media", duration=30),
        ]
        warnings = check_goal_limits(goals, entries, TODAY)

        assert len(warnings) == 1
        assert warnings[0].category == "GOAL_REACHED"
        assert warnings[0].goal.id == "insta"
        assert any_goal_reached(goals, entries, TODAY) is True

    def test_under_limit_no_warning(self, goals):
        entries = [
            TimeEntry(id="1", date=TODAY, device="phone", app="Instagram",
                      category="social media", duration=29),
        ]
        assert check_goal_limits(goals, entries, TODAY) == []
        assert any_goal_reached(goals, entries, TODAY) is False

    def test_other_days_do_not_count(self, goals):
        entries = [
            TimeEntry(id="1", date="2024-03-05", device="phone", app="Instagram",
                      category="social media", duration=300),
        ]
        assert check_goal_limits(goals, entries, TODAY) == []

    def test_status_text(self, goals):
        entries = [
            TimeEntry(id="1", date=TODAY, device="tablet", app="Chess",
                      category="gaming", duration=30),
        ]
        text = format_goal_status(goals, entries, TODAY)

        assert "Gaming (category): 0h 30m / 1h 0m per day [50%]" in text
        assert "Instagram (app): 0h 0m / 0h 30m per day [0%]" in text

    def test_status_without_goals(self):
        assert "No goals set" in format_goal_status([], [], TODAY)
