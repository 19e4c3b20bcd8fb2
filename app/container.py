"""
Container — creates and holds singletons.

Wires, in dependency order:
- Stores (storage/*): students file, audit log file
- AuditLogService (service/audit.py)
- StudentDirectoryService (service/students.py)

ConfigurationError / StorageError raised while building propagate; the
caller decides whether to stop.
"""

from __future__ import annotations
from dataclasses import dataclass

from app.config import Settings

# Storage layer
from storage.record_store import RecordStore
from storage.student_store import student_store
from storage.audit_store import audit_store

# Services
from service import AuditLogLike, StudentDirectoryLike
from service.audit import AuditLogService
from service.students import StudentDirectoryService


@dataclass
class Container:
    settings: Settings

    def __post_init__(self):
        # ---------- Storage layer ----------
        self.student_store: RecordStore = student_store(self.settings.STUDENTS_CSV_PATH)
        self.audit_store: RecordStore = audit_store(self.settings.AUDIT_LOG_PATH)

        # ---------- Services ----------
        self.audit: AuditLogLike = AuditLogService(self.audit_store)
        self.students: StudentDirectoryLike = StudentDirectoryService(self.student_store, self.audit)
