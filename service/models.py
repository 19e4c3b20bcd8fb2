"""
Roster data model.

- Student: mutable record, keyed by (first_name, last_name)
- LogEntry: frozen audit record, append-only
- User: caller identity for one session (not persisted)
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class UserRole(str, Enum):
    STUDENT = "STUDENT"
    TEACHER = "TEACHER"

    @classmethod
    def parse(cls, value: str) -> "UserRole":
        """Exact, case-sensitive lookup; raises ValueError on unknown roles."""
        return cls(value)


class AuditAction:
    ADD_STUDENT = "ADD_STUDENT"
    REMOVE_STUDENT = "REMOVE_STUDENT"
    EXPEL_STUDENT = "EXPEL_STUDENT"
    UPDATE_TOKENS = "UPDATE_TOKENS"


@dataclass
class Student:
    first_name: str
    last_name: str
    tokens: int = 0

    def matches(self, first_name: str, last_name: str) -> bool:
        return self.first_name == first_name and self.last_name == last_name

    def to_dict(self) -> Dict[str, Any]:
        return {"firstName": self.first_name, "lastName": self.last_name, "tokens": self.tokens}


@dataclass(frozen=True)
class User:
    first_name: str
    last_name: str
    role: UserRole

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    action: str
    user_first_name: str
    user_last_name: str
    user_role: UserRole
    details: str = ""

    def to_dict(self) -> Dict[str, Any]:
        # same keys as the audit file header
        return {
            "timestamp": self.timestamp.strftime(TIMESTAMP_FORMAT),
            "action": self.action,
            "userFirstName": self.user_first_name,
            "userLastName": self.user_last_name,
            "userRole": self.user_role.value,
            "details": self.details,
        }
