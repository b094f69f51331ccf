"""
Data models for ScreenLog.

Storage model: StorageItem (one row per local storage key).
Domain records: TimeEntry, Goal.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


DATE_FORMAT = "%Y-%m-%d"


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class StorageItem(Base):
    """
    A single local storage slot.

    Holds one serialized collection (a JSON array) under a fixed key.
    """

    __tablename__ = "local_storage"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<StorageItem {self.key}: {len(self.value)} chars>"


class ValidationError(ValueError):
    """Raised when form input or a stored record is not valid."""


class Device(str, Enum):
    """Device the time was spent on."""
    PHONE = "phone"
    TABLET = "tablet"
    LAPTOP = "laptop"
    DESKTOP = "desktop"
    OTHER = "other"


class Category(str, Enum):
    """Kind of app usage."""
    SOCIAL_MEDIA = "social media"
    PRODUCTIVITY = "productivity"
    ENTERTAINMENT = "entertainment"
    GAMING = "gaming"
    COMMUNICATION = "communication"
    EDUCATION = "education"
    OTHER = "other"


class GoalType(str, Enum):
    """What a goal limits."""
    APP = "app"
    CATEGORY = "category"
    TOTAL = "total"


def _coerce_enum(enum_cls, value: Any, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label}: {value!r} (expected one of: {choices})")


def _coerce_minutes(value: Any, label: str, minimum: int) -> int:
    # bool is an int subclass; true/false are never durations
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a whole number of minutes")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise ValidationError(f"{label} must be a whole number of minutes")
    if value < minimum:
        raise ValidationError(f"{label} must be at least {minimum} minute(s)")
    return value


def validate_date(value: Any) -> str:
    """
    Check a YYYY-MM-DD date string.

    Returns the value unchanged.
    """
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
    # strptime accepts "2024-1-5"; the stored form is always zero padded
    if parsed.strftime(DATE_FORMAT) != value:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
    return value


@dataclass
class TimeEntry:
    """
    One logged usage record.

    Duration is in whole minutes.
    """

    id: str
    date: str
    device: Device
    app: str
    category: Category
    duration: int
    notes: Optional[str] = None

    def __post_init__(self):
        self.date = validate_date(self.date)
        self.device = _coerce_enum(Device, self.device, "device")
        self.category = _coerce_enum(Category, self.category, "category")
        if not isinstance(self.app, str) or not self.app.strip():
            raise ValidationError("App name is required")
        self.app = self.app.strip()
        self.duration = _coerce_minutes(self.duration, "Duration", 0)
        if self.notes == "":
            self.notes = None

    def fields(self) -> Dict[str, Any]:
        """Everything but the identifier."""
        data = self.to_dict()
        data.pop("id")
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            "id": self.id,
            "date": self.date,
            "device": self.device.value,
            "app": self.app,
            "category": self.category.value,
            "duration": self.duration,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimeEntry":
        """Create from dictionary."""
        try:
            return cls(
                id=data["id"],
                date=data["date"],
                device=data["device"],
                app=data["app"],
                category=data["category"],
                duration=data["duration"],
                notes=data.get("notes"),
            )
        except KeyError as e:
            raise ValidationError(f"Time entry is missing field {e.args[0]!r}")

    def __str__(self) -> str:
        return f"{self.date} {self.app} ({self.category.value}, {self.device.value}) {self.duration}m"


@dataclass
class Goal:
    """
    A daily usage limit.

    Total goals have no target; app and category goals name one.
    """

    id: str
    type: GoalType
    target: Optional[str] = None
    limit: int = field(default=120)

    def __post_init__(self):
        self.type = _coerce_enum(GoalType, self.type, "goal type")
        if self.type == GoalType.TOTAL:
            self.target = None
        elif self.type == GoalType.CATEGORY:
            self.target = _coerce_enum(Category, self.target, "category").value
        elif not isinstance(self.target, str) or not self.target.strip():
            raise ValidationError("App name is required for an app goal")
        else:
            # Must match TimeEntry.app, which is stored stripped
            self.target = self.target.strip()
        self.limit = _coerce_minutes(self.limit, "Limit", 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {"id": self.id, "type": self.type.value}
        if self.target is not None:
            data["target"] = self.target
        data["limit"] = self.limit
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        """Create from dictionary."""
        try:
            return cls(
                id=data["id"],
                type=data["type"],
                target=data.get("target") or None,
                limit=data["limit"],
            )
        except KeyError as e:
            raise ValidationError(f"Goal is missing field {e.args[0]!r}")

    @property
    def label(self) -> str:
        """Human-readable name of what is limited."""
        if self.type == GoalType.TOTAL:
            return "Total screen time"
        if self.type == GoalType.CATEGORY:
            return f"{self.target.capitalize()} (category)"
        return f"{self.target} (app)"

    def __str__(self) -> str:
        return f"{self.label}: {self.limit}m/day"
