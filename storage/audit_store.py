"""
Audit log file schema.

    timestamp,action,userFirstName,userLastName,userRole,details
    <yyyy-MM-dd HH:mm:ss>,<ACTION>,<string>,<string>,<TEACHER|STUDENT>,<string>

The details column is bounded: it keeps any commas that follow it.
"""

from __future__ import annotations
from datetime import datetime
from pathlib import Path
from typing import List, Sequence, Union

from service.models import TIMESTAMP_FORMAT, LogEntry, UserRole
from storage.record_store import RecordSchema, RecordStore


def _parse_entry(values: List[str]) -> LogEntry:
    return LogEntry(
        timestamp=datetime.strptime(values[0], TIMESTAMP_FORMAT),
        action=values[1],
        user_first_name=values[2],
        user_last_name=values[3],
        user_role=UserRole.parse(values[4]),
        details=values[5],
    )


def _format_entry(entry: LogEntry) -> Sequence[object]:
    return (
        entry.timestamp.strftime(TIMESTAMP_FORMAT),
        entry.action,
        entry.user_first_name,
        entry.user_last_name,
        entry.user_role.value,
        entry.details,
    )


LOG_ENTRY_SCHEMA = RecordSchema(
    name="audit log",
    fields=("timestamp", "action", "userFirstName", "userLastName", "userRole", "details"),
    parse=_parse_entry,
    format=_format_entry,
    bounded=True,
)


def audit_store(path: Union[str, Path, None]) -> RecordStore:
    return RecordStore(path, LOG_ENTRY_SCHEMA)
