"""
Durable local storage.

A string key/value store kept in SQLite, used the way a browser app
uses localStorage: each collection is saved whole under one key.
"""

import logging
from typing import List, Optional

from screenlog.core.config import Config
from screenlog.core.db import init_db, session_scope
from screenlog.core.models import StorageItem

logger = logging.getLogger(__name__)

ENTRIES_KEY = "screenTimeEntries"
GOALS_KEY = "screenTimeGoals"


class LocalStorage:
    """
    Key/value storage backed by the local_storage table.

    Values are opaque strings; callers serialize.
    """

    def __init__(self, config: Config):
        self.config = config
        init_db(config)

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never set."""
        with session_scope(self.config) as session:
            item = session.get(StorageItem, key)
            return item.value if item else None

    def set_item(self, key: str, value: str) -> None:
        """Create or overwrite a key."""
        with session_scope(self.config) as session:
            item = session.get(StorageItem, key)
            if item:
                item.value = value
            else:
                session.add(StorageItem(key=key, value=value))

        logger.debug(f"Stored {key} ({len(value)} chars)")

    def remove_item(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        with session_scope(self.config) as session:
            item = session.get(StorageItem, key)
            if item:
                session.delete(item)

    def keys(self) -> List[str]:
        """All stored keys."""
        with session_scope(self.config) as session:
            return [key for (key,) in session.query(StorageItem.key).order_by(StorageItem.key)]
