"""Recently opened documents."""

from __future__ import annotations

import json
import logging

from sitestage.config import MAX_RECENT_FILES, RECENT_FILES_KEY
from sitestage.models import FileInfo
from sitestage.protocols import KeyValueStore

logger = logging.getLogger(__name__)


class RecentFiles:
    """Bounded most-recent-first list of document locations, unique by url."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str = RECENT_FILES_KEY,
        limit: int = MAX_RECENT_FILES,
    ):
        self.store = store
        self.key = key
        self.limit = limit

    def list(self) -> list[FileInfo]:
        """Stored entries, without legacy records that have no name."""
        raw = self.store.get_item(self.key)
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable recent files: {e}")
            return []
        if not isinstance(records, list):
            logger.warning(f"Ignoring recent files stored as {type(records).__name__}")
            return []
        return [
            FileInfo.from_dict(record)
            for record in records
            if isinstance(record, dict) and record.get("url") and record.get("name") is not None
        ]

    def remember(self, file_info: FileInfo) -> list[FileInfo]:
        """Move ``file_info`` to the top of the list and persist it."""
        files = [f for f in self.list() if f.url != file_info.url]
        files.insert(0, file_info)
        del files[self.limit:]
        self.store.set_item(self.key, json.dumps([f.to_dict() for f in files]))
        return files

    def clear(self) -> None:
        self.store.remove_item(self.key)
