"""
Manual entry logging.

The only way usage gets into the system: the user types in an app,
a category, a device and how long.
"""

import logging
from typing import Optional

from screenlog.core.models import Category, Device, TimeEntry, ValidationError, validate_date
from screenlog.core.store import ScreenTimeStore

logger = logging.getLogger(__name__)

MAX_HOURS = 24
MAX_MINUTES = 59


def to_minutes(hours: int, minutes: int) -> int:
    """
    Convert the form's hours/minutes pair to total minutes.

    Raises ValidationError outside 0-24 hours or 0-59 minutes.
    """
    if not 0 <= hours <= MAX_HOURS:
        raise ValidationError(f"Hours must be between 0 and {MAX_HOURS}")
    if not 0 <= minutes <= MAX_MINUTES:
        raise ValidationError(f"Minutes must be between 0 and {MAX_MINUTES}")
    return hours * 60 + minutes


def log_manual_entry(
    store: ScreenTimeStore,
    app: str,
    category: str,
    device: str,
    hours: int = 0,
    minutes: int = 15,
    notes: Optional[str] = None,
    date: Optional[str] = None,
) -> TimeEntry:
    """
    Log usage from the entry form.

    Dated today unless a date is given.
    """
    if not app or not app.strip():
        raise ValidationError("App name is required")

    # Normalize category and device
    try:
        normalized_category = Category(category.lower())
    except ValueError:
        raise ValidationError(f"Invalid category: {category}")
    try:
        normalized_device = Device(device.lower())
    except ValueError:
        raise ValidationError(f"Invalid device: {device}")

    duration = to_minutes(hours, minutes)
    entry_date = validate_date(date) if date else store.today

    entry = store.add_entry(
        date=entry_date,
        device=normalized_device,
        app=app,
        category=normalized_category,
        duration=duration,
        notes=notes.strip() if notes and notes.strip() else None,
    )

    logger.info(f"Manually logged entry: {entry}")
    return entry
