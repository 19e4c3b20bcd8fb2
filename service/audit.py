"""
Append-only audit trail.

Records:
- who (first/last name, role)
- action (ADD_STUDENT, REMOVE_STUDENT, EXPEL_STUDENT, UPDATE_TOKENS)
- details (free text)
- timestamp (local time, second precision)

Backed by a RecordStore; "append" means append to the in-memory list and
then rewrite the whole file.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Optional

from service.errors import StorageError, ValidationError
from service.models import LogEntry, User
from storage.record_store import RecordStore

logger = logging.getLogger("Audit")


class AuditLogService:
    def __init__(self, store: RecordStore) -> None:
        self._store = store
        self._entries: List[LogEntry] = store.load()
        logger.info("Audit log ready with %d entr(y/ies) from %s", len(self._entries), store.file_path)

    def append(self, action: Optional[str], actor: Optional[User], details: Optional[str] = None) -> LogEntry:
        """
        Record one action on behalf of `actor`. Returns only once the entry is on disk;
        a StorageError leaves the in-memory log as it was before the call.
        """
        if not action or actor is None:
            raise ValidationError("Action and user cannot be null")

        entry = LogEntry(
            timestamp=datetime.now().replace(microsecond=0),
            action=action,
            user_first_name=actor.first_name,
            user_last_name=actor.last_name,
            user_role=actor.role,
            details=details if details is not None else "",
        )
        self._entries.append(entry)
        try:
            self._store.persist(self._entries)
        except StorageError:
            self._entries.pop()
            raise
        logger.info("%s by %s (%s): %s", action, actor.display_name, actor.role.value, entry.details)
        return entry

    def list_all(self) -> List[LogEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
