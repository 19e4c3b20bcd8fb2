"""
Student Token Roster — Python Client

Purpose:
- Wrapper around the /api/students and /api/audit endpoints.
- Implements the same caller-facing contract as StudentDirectoryService,
  raising the same roster errors (ConflictError, NotFoundError, ...).

Dependencies:
- requests

Typical usage:
    from sdk.python.client import RosterClient
    c = RosterClient("http://localhost:10000", actor=User("Ann", "Roe", UserRole.TEACHER))
    c.adjust_tokens("Bob", "Lee", 5)
    print(c.list_students())
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from service.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    RosterError,
    StorageError,
    ValidationError,
)
from service.models import TIMESTAMP_FORMAT, LogEntry, Student, User, UserRole

_ERRORS = {
    400: ValidationError,
    404: NotFoundError,
    409: ConflictError,
    500: StorageError,
}


class RosterClient:
    def __init__(
        self,
        base_url: str,
        actor: Optional[User] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        :param base_url: Server root (e.g., http://localhost:10000)
        :param actor: Default acting user sent with mutating calls
        :param timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.actor = actor
        self.timeout = timeout
        self._session = session or requests.Session()

    # -------- Queries --------
    def list_students(self) -> List[Student]:
        data = self._request("GET", "/api/students")
        return [_student(d) for d in data.get("students", [])]

    def find_student(self, first_name: str, last_name: str) -> Optional[Student]:
        try:
            return _student(self._request("GET", _student_path(first_name, last_name)))
        except NotFoundError:
            return None

    def list_audit_log(self) -> List[LogEntry]:
        data = self._request("GET", "/api/audit")
        return [_entry(d) for d in data.get("audit", [])]

    # -------- Mutations --------
    def add_student(self, student: Student, actor: Optional[User] = None) -> Student:
        body = {"firstName": student.first_name, "lastName": student.last_name, "tokens": student.tokens}
        return _student(self._request("POST", "/api/students", json=body, actor=actor))

    def remove_student(self, first_name: str, last_name: str, actor: Optional[User] = None) -> None:
        self._request("DELETE", _student_path(first_name, last_name), actor=actor)

    def expel_student(self, first_name: str, last_name: str, actor: Optional[User] = None) -> None:
        self._request("DELETE", _student_path(first_name, last_name), params={"expel": "1"}, actor=actor)

    def adjust_tokens(self, first_name: str, last_name: str, delta: int, actor: Optional[User] = None) -> Student:
        path = _student_path(first_name, last_name) + "/tokens"
        return _student(self._request("POST", path, json={"delta": delta}, actor=actor))

    # -------- Helpers --------
    def _headers(self, actor: Optional[User]) -> Dict[str, str]:
        h = {"Accept": "application/json"}
        who = actor or self.actor
        if who is not None:
            h["X-User-First-Name"] = who.first_name
            h["X-User-Last-Name"] = who.last_name
            h["X-User-Role"] = who.role.value
        return h

    def _request(self, method: str, path: str, *, actor: Optional[User] = None, **kwargs: Any) -> Dict[str, Any]:
        resp = self._session.request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers(actor),
            timeout=self.timeout,
            **kwargs,
        )
        if resp.status_code >= 400:
            _raise_for(resp)
        if resp.status_code == 204 or not resp.content:
            return {}
        return resp.json()


def _raise_for(resp: requests.Response) -> None:
    try:
        message = (resp.json() or {}).get("message") or resp.reason
    except ValueError:
        message = resp.text or resp.reason
    if resp.status_code == 403:
        raise AuthorizationError(message)
    raise _ERRORS.get(resp.status_code, RosterError)(message)


def _student_path(first_name: str, last_name: str) -> str:
    return f"/api/students/{quote(first_name, safe='')}/{quote(last_name, safe='')}"


def _student(d: Dict[str, Any]) -> Student:
    return Student(d["firstName"], d["lastName"], int(d["tokens"]))


def _entry(d: Dict[str, Any]) -> LogEntry:
    return LogEntry(
        timestamp=datetime.strptime(d["timestamp"], TIMESTAMP_FORMAT),
        action=d["action"],
        user_first_name=d["userFirstName"],
        user_last_name=d["userLastName"],
        user_role=UserRole(d["userRole"]),
        details=d.get("details", ""),
    )
