"""
Unit tests for entry and goal records.

Covers validation and the stored JSON shape.
"""

import pytest
import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from screenlog.core.models import (
    Category,
    Device,
    Goal,
    GoalType,
    TimeEntry,
    ValidationError,
    validate_date,
)


class TestTimeEntry:
    """Test time entry records."""

    def test_from_dict_coerces_enums(self):
        entry = TimeEntry.from_dict({
            "id": "a",
            "date": "2024-03-06",
            "device": "laptop",
            "app": "VS Code",
            "category": "productivity",
            "duration": 90,
        })
        assert entry.device == Device.LAPTOP
        assert entry.category == Category.PRODUCTIVITY
        assert entry.notes is None

    def test_notes_omitted_when_absent(self):
        entry = TimeEntry(id="a", date="2024-03-06", device="phone", app="X",
                          category="other", duration=1, notes="")
        assert "notes" not in entry.to_dict()

    def test_whole_float_duration_accepted(self):
        entry = TimeEntry(id="a", date="2024-03-06", device="phone", app="X",
                          category="other", duration=15.0)
        assert entry.duration == 15
        assert isinstance(entry.duration, int)

    @pytest.mark.parametrize("duration", [-5, 1.5, "15", True])
    def test_bad_duration(self, duration):
        with pytest.raises(ValidationError):
            TimeEntry(id="a", date="2024-03-06", device="phone", app="X",
                      category="other", duration=duration)

    def test_blank_app(self):
        with pytest.raises(ValidationError, match="App name is required"):
            TimeEntry(id="a", date="2024-03-06", device="phone", app="  ",
                      category="other", duration=5)

    def test_missing_field(self):
        with pytest.raises(ValidationError, match="duration"):
            TimeEntry.from_dict({"id": "a", "date": "2024-03-06", "device": "phone",
                                 "app": "X", "category": "other"})


class TestGoal:
    """Test goal records."""

    def test_total_goal_with_empty_target_loads(self):
        """Older saves store an empty target on total goals."""
        goal = Goal.from_dict({"id": "g", "type": "total", "target": "", "limit": 120})
        assert goal.target is None
        assert goal.to_dict() == {"id": "g", "type": "total", "limit": 120}

    def test_category_target_normalized_to_value(self):
        goal = Goal(id="g", type="category", target=Category.GAMING, limit=60)
        assert goal.target == "gaming"
        assert goal.type == GoalType.CATEGORY

    def test_labels(self):
        assert Goal(id="g", type="total", limit=1).label == "Total screen time"
        assert Goal(id="g", type="category", target="social media", limit=1).label == \
            "Social media (category)"
        assert Goal(id="g", type="app", target="Slack", limit=1).label == "Slack (app)"

    def test_limit_below_one(self):
        with pytest.raises(ValidationError, match="at least 1"):
            Goal(id="g", type="total", limit=0)


class TestValidateDate:
    """Test date format checks."""

    def test_valid(self):
        assert validate_date("2024-02-29") == "2024-02-29"

    @pytest.mark.parametrize("value", ["2024-2-9", "2023-02-29", "03/06/2024", None, ""])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            validate_date(value)
