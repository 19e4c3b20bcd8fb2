"""
Service package exports & protocol types.

Exposes:
- protocol types for DI hints / front ends (StudentDirectoryLike, AuditLogLike)
- the roster error taxonomy and data model
"""

from __future__ import annotations
from typing import List, Optional, Protocol

from .errors import (
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    DomainError,
    NotFoundError,
    RosterError,
    StorageError,
    ValidationError,
)
from .models import AuditAction, LogEntry, Student, User, UserRole

# ---- Protocols (caller-facing contract) ----


class StudentDirectoryLike(Protocol):
    def list_all(self) -> List[Student]: ...
    def find_by_name(self, first_name: str, last_name: str) -> Optional[Student]: ...
    def add(self, actor: User, student: Student) -> Student: ...
    def remove(self, first_name: str, last_name: str, actor: User) -> None: ...
    def expel(self, actor: User, first_name: str, last_name: str) -> None: ...
    def adjust_tokens(self, first_name: str, last_name: str, delta: int, actor: User) -> Student: ...


class AuditLogLike(Protocol):
    def append(self, action: str, actor: User, details: Optional[str] = None) -> LogEntry: ...
    def list_all(self) -> List[LogEntry]: ...
    def __len__(self) -> int: ...


__all__ = [
    "AuditAction",
    "AuditLogLike",
    "AuthorizationError",
    "ConfigurationError",
    "ConflictError",
    "DomainError",
    "LogEntry",
    "NotFoundError",
    "RosterError",
    "StorageError",
    "Student",
    "StudentDirectoryLike",
    "User",
    "UserRole",
    "ValidationError",
]
