"""
Screen time store.

Holds entries and goals in memory and writes the full collection back
to local storage after every change. Callers share one store instance.
"""

import json
import logging
import uuid
from dataclasses import replace
from typing import List, Optional

from screenlog.core.config import Config
from screenlog.core.models import Goal, GoalType, TimeEntry, ValidationError
from screenlog.core.storage import ENTRIES_KEY, GOALS_KEY, LocalStorage
from screenlog.core.utils import today_str
from screenlog.guardrails.goals import validate_goal
from screenlog.review import usage

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class ScreenTimeStore:
    """
    Entries and goals for one user.

    Loaded once on construction; every mutation persists immediately.
    Storage errors are not caught.
    """

    def __init__(self, config: Config, storage: Optional[LocalStorage] = None):
        self.config = config
        self.storage = storage or LocalStorage(config)
        self.entries: List[TimeEntry] = []
        self.goals: List[Goal] = []
        self.load()

    @property
    def today(self) -> str:
        """Today's date (YYYY-MM-DD) in the configured timezone."""
        return today_str(self.config.timezone)

    # --- Persistence ---

    def load(self) -> None:
        """Replace in-memory state with what is in storage."""
        saved_entries = self.storage.get_item(ENTRIES_KEY)
        saved_goals = self.storage.get_item(GOALS_KEY)

        self.entries = [TimeEntry.from_dict(d) for d in json.loads(saved_entries)] if saved_entries else []
        self.goals = [Goal.from_dict(d) for d in json.loads(saved_goals)] if saved_goals else []

        logger.debug(f"Loaded {len(self.entries)} entries and {len(self.goals)} goals")

    def _save_entries(self) -> None:
        self.storage.set_item(ENTRIES_KEY, json.dumps([e.to_dict() for e in self.entries]))

    def _save_goals(self) -> None:
        self.storage.set_item(GOALS_KEY, json.dumps([g.to_dict() for g in self.goals]))

    # --- Entries ---

    def get_entry(self, entry_id: str) -> Optional[TimeEntry]:
        return next((e for e in self.entries if e.id == entry_id), None)

    def add_entry(
        self,
        date: str,
        device: str,
        app: str,
        category: str,
        duration: int,
        notes: Optional[str] = None,
    ) -> TimeEntry:
        """
        Add a new entry with a fresh id.

        Raises ValidationError if any field is invalid.
        """
        entry = TimeEntry(
            id=_new_id(),
            date=date,
            device=device,
            app=app,
            category=category,
            duration=duration,
            notes=notes,
        )
        self.entries.append(entry)
        self._save_entries()

        logger.info(f"Added entry {entry.id}: {entry}")
        return entry

    def update_entry(self, entry_id: str, **fields) -> Optional[TimeEntry]:
        """
        Merge fields into an existing entry.

        The id never changes. Returns None if the entry does not exist.
        """
        fields.pop("id", None)

        for index, entry in enumerate(self.entries):
            if entry.id != entry_id:
                continue

            unknown = set(fields) - set(entry.to_dict()) - {"notes"}
            if unknown:
                raise ValidationError(f"Unknown entry field(s): {', '.join(sorted(unknown))}")

            # replace() re-runs validation in __post_init__
            updated = replace(entry, **fields)
            self.entries[index] = updated
            self._save_entries()

            logger.info(f"Updated entry {entry_id}: {updated}")
            return updated

        logger.warning(f"Entry {entry_id} not found, nothing updated")
        return None

    def delete_entry(self, entry_id: str) -> Optional[TimeEntry]:
        """
        Permanently remove an entry.

        Returns the removed entry so the caller can offer an undo.
        """
        entry = self.get_entry(entry_id)
        if entry is None:
            logger.warning(f"Entry {entry_id} not found, nothing deleted")
            return None

        self.entries = [e for e in self.entries if e.id != entry_id]
        self._save_entries()

        logger.info(f"Deleted entry {entry_id}")
        return entry

    def restore_entry(self, entry: TimeEntry) -> TimeEntry:
        """
        Undo a delete by re-creating the entry.

        The restored entry gets a new id.
        """
        return self.add_entry(
            date=entry.date,
            device=entry.device,
            app=entry.app,
            category=entry.category,
            duration=entry.duration,
            notes=entry.notes,
        )

    # --- Goals ---

    def get_goal(self, goal_id: str) -> Optional[Goal]:
        return next((g for g in self.goals if g.id == goal_id), None)

    def add_goal(self, goal_type: str, target: Optional[str], limit: int) -> Goal:
        """
        Add a new goal.

        Raises GoalConflictError if a goal for the same type/target exists.
        """
        candidate = validate_goal(self.goals, goal_type, target, limit)
        goal = replace(candidate, id=_new_id())
        self.goals.append(goal)
        self._save_goals()

        logger.info(f"Added goal {goal.id}: {goal}")
        return goal

    def update_goal(self, goal_id: str, **fields) -> Optional[Goal]:
        """
        Merge fields into an existing goal, re-checking for conflicts.

        Returns None if the goal does not exist.
        """
        fields.pop("id", None)
        goal = self.get_goal(goal_id)
        if goal is None:
            logger.warning(f"Goal {goal_id} not found, nothing updated")
            return None

        unknown = set(fields) - {"type", "target", "limit"}
        if unknown:
            raise ValidationError(f"Unknown goal field(s): {', '.join(sorted(unknown))}")

        try:
            goal_type = GoalType(fields.get("type", goal.type))
        except ValueError:
            raise ValidationError(f"Invalid goal type: {fields['type']!r}")
        # Switching to a different type drops a target that no longer applies
        target = fields.get("target", goal.target if goal_type == goal.type else None)
        limit = fields.get("limit", goal.limit)

        updated = validate_goal(self.goals, goal_type, target, limit, exclude_id=goal_id)
        self.goals = [updated if g.id == goal_id else g for g in self.goals]
        self._save_goals()

        logger.info(f"Updated goal {goal_id}: {updated}")
        return updated

    def delete_goal(self, goal_id: str) -> Optional[Goal]:
        """Permanently remove a goal."""
        goal = self.get_goal(goal_id)
        if goal is None:
            logger.warning(f"Goal {goal_id} not found, nothing deleted")
            return None

        self.goals = [g for g in self.goals if g.id != goal_id]
        self._save_goals()

        logger.info(f"Deleted goal {goal_id}")
        return goal

    # --- Queries ---

    def today_usage(self, goal_type: Optional[str] = None, target: Optional[str] = None) -> int:
        """Minutes logged today, optionally for one app or category."""
        return usage.today_usage(self.entries, goal_type, target, self.today)

    def usage_by_date(self, date: str) -> List[TimeEntry]:
        """Entries logged on a date."""
        return usage.usage_by_date(self.entries, date)
