"""
Student directory.

Owns the in-memory student list (single source of truth between loads) and
enforces the roster rules:
- (first_name, last_name) is unique
- remove / expel / adjust_tokens need an existing student
- add / remove / expel / adjust_tokens are TEACHER-only (service.security)
- every successful mutation is persisted, then audited

If persisting fails the in-memory list is rolled back to its state before
the call and the StorageError propagates.
"""

from __future__ import annotations
import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, List, Optional

from service.audit import AuditLogService
from service.errors import ConflictError, NotFoundError, StorageError, ValidationError
from service.models import AuditAction, Student, User
from service.security import require_teacher
from storage.record_store import RecordStore

logger = logging.getLogger("Runtime")


class StudentDirectoryService:
    def __init__(self, store: RecordStore, audit: AuditLogService) -> None:
        if audit is None:
            raise ValidationError("Audit log service cannot be null")
        self._store = store
        self._audit = audit
        self._students: List[Student] = store.load()
        logger.info("Student directory ready with %d student(s) from %s", len(self._students), store.file_path)

    # -------- queries --------

    # callers get copies

    def list_all(self) -> List[Student]:
        return [replace(s) for s in self._students]

    def find_by_name(self, first_name: str, last_name: str) -> Optional[Student]:
        s = self._find(first_name, last_name)
        return replace(s) if s is not None else None

    def exists(self, first_name: str, last_name: str) -> bool:
        return self._find(first_name, last_name) is not None

    # -------- mutations (TEACHER only) --------

    @require_teacher("add students")
    def add(self, actor: User, student: Student) -> Student:
        if student is None:
            raise ValidationError("Student cannot be null")
        if self.exists(student.first_name, student.last_name):
            raise ConflictError(f"Student already exists: {student.first_name} {student.last_name}")

        record = replace(student)
        with self._persisting():
            self._students.append(record)
        self._audit.append(
            AuditAction.ADD_STUDENT,
            actor,
            f"Added student: {record.first_name} {record.last_name} with {record.tokens} tokens",
        )
        return replace(record)

    @require_teacher("remove students")
    def remove(self, first_name: str, last_name: str, actor: User) -> None:
        self._drop(first_name, last_name)
        self._audit.append(AuditAction.REMOVE_STUDENT, actor, f"Removed student: {first_name} {last_name}")

    @require_teacher("expel students")
    def expel(self, actor: User, first_name: str, last_name: str) -> None:
        self._drop(first_name, last_name)
        self._audit.append(AuditAction.EXPEL_STUDENT, actor, f"Expelled student: {first_name} {last_name}")

    @require_teacher("update tokens")
    def adjust_tokens(self, first_name: str, last_name: str, delta: int, actor: User) -> Student:
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError(f"Token amount must be an integer, got {delta!r}")
        student = self._require(first_name, last_name)

        old_tokens = student.tokens
        try:
            with self._persisting():
                student.tokens = old_tokens + delta
        except StorageError:
            student.tokens = old_tokens
            raise
        self._audit.append(
            AuditAction.UPDATE_TOKENS,
            actor,
            f"Updated tokens for {first_name} {last_name}: {old_tokens} -> {student.tokens}",
        )
        return replace(student)

    # -------- internal helpers --------

    def _find(self, first_name: str, last_name: str) -> Optional[Student]:
        for s in self._students:
            if s.matches(first_name, last_name):
                return s
        return None

    def _require(self, first_name: str, last_name: str) -> Student:
        student = self._find(first_name, last_name)
        if student is None:
            raise NotFoundError(f"Student not found: {first_name} {last_name}")
        return student

    def _drop(self, first_name: str, last_name: str) -> None:
        self._require(first_name, last_name)
        with self._persisting():
            self._students[:] = [s for s in self._students if not s.matches(first_name, last_name)]

    @contextmanager
    def _persisting(self) -> Iterator[None]:
        """
        Apply the in-memory change inside the block, then persist the whole list.
        The list itself (not the records' fields) is restored if the write fails.
        """
        before = list(self._students)
        yield
        try:
            self._store.persist(self._students)
        except StorageError:
            self._students[:] = before
            logger.error("Rolled back in-memory student list after failed save")
            raise
