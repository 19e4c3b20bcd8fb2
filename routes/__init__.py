"""
Route helpers.

Exports:
- get_container(): typed access to app.container
- current_actor(): the User described by the X-User-* request headers
- json_body(schema_name): parsed + schema-validated request JSON
"""

from __future__ import annotations
from typing import Any, Dict

from flask import current_app, request

from service.errors import ValidationError
from service.models import User
from service import validators

FIRST_NAME_HEADER = "X-User-First-Name"
LAST_NAME_HEADER = "X-User-Last-Name"
ROLE_HEADER = "X-User-Role"

# ---- Container access ----

def get_container():
    c = getattr(current_app, "container", None)
    if c is None:
        raise RuntimeError("Container not initialized on app")
    return c

# ---- Caller identity ----

def current_actor() -> User:
    first = (request.headers.get(FIRST_NAME_HEADER) or "").strip()
    last = (request.headers.get(LAST_NAME_HEADER) or "").strip()
    role = validators.parse_role(request.headers.get(ROLE_HEADER, ""))
    if not first or not last:
        raise ValidationError(f"{FIRST_NAME_HEADER} and {LAST_NAME_HEADER} headers are required")
    if role is None:
        raise ValidationError(f"{ROLE_HEADER} must be TEACHER or STUDENT")
    return User(first, last, role)

# ---- Request bodies ----

def json_body(schema_name: str) -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if payload is None:
        raise ValidationError("Request body must be JSON")
    ok, err = validators.validate_json(payload, schema_name=schema_name)
    if not ok:
        raise ValidationError(err or "invalid payload")
    return payload
