"""
Storage package convenience exports.

Provides:
- RecordStore / RecordSchema (generic tabular file store)
- student_store(), audit_store() factories with the concrete schemas
"""

from __future__ import annotations

from .record_store import DELIMITER, RecordSchema, RecordStore
from .student_store import STUDENT_SCHEMA, student_store
from .audit_store import LOG_ENTRY_SCHEMA, audit_store

__all__ = [
    "DELIMITER",
    "LOG_ENTRY_SCHEMA",
    "RecordSchema",
    "RecordStore",
    "STUDENT_SCHEMA",
    "audit_store",
    "student_store",
]
