"""
Input validators and normalizers.

Responsibilities:
- Person name validation (letters, Latin or Cyrillic, and hyphens)
- Role parsing (case-insensitive TEACHER / STUDENT)
- Integer parsing for token amounts and menu choices
- JSON schema validation wrappers (service/schemas/*.schema.json)

Connects:
- cli/main.py (interactive prompts, one-shot commands)
- routes/* (request body checks, actor headers)
"""

from __future__ import annotations
import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import jsonschema

from service.models import UserRole

SCHEMAS_ROOT = Path(__file__).resolve().parent / "schemas"

# --- Regexes ---
_NAME = re.compile(r"^[A-Za-zА-Яа-яЁё-]+$")
_INT = re.compile(r"^[+-]?\d+$")


# --- Names ---

def is_valid_name(s: str) -> bool:
    return bool(_NAME.match(s or ""))


# --- Roles ---

def parse_role(s: str) -> Optional[UserRole]:
    """
    Returns the role for 'teacher' / 'STUDENT' etc., or None if unrecognised.
    """
    value = (s or "").strip().upper()
    try:
        return UserRole(value)
    except ValueError:
        return None


# --- Integers ---

def parse_int(s: str, *, lo: Optional[int] = None, hi: Optional[int] = None) -> Optional[int]:
    s = (s or "").strip()
    if not _INT.match(s):
        return None
    n = int(s)
    if lo is not None and n < lo:
        return None
    if hi is not None and n > hi:
        return None
    return n


# --- Schema validation ---

class SchemaError(Exception):
    pass


@lru_cache(maxsize=None)
def _load_schema(schema_name: str) -> Dict[str, Any]:
    path = SCHEMAS_ROOT / schema_name
    if not path.exists():
        raise SchemaError(f"Schema not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise SchemaError(f"Invalid schema file: {e}") from e


def validate_json(data: Any, *, schema_name: str) -> Tuple[bool, Optional[str]]:
    """
    Returns (ok, error_message).
    """
    try:
        schema = _load_schema(schema_name)
    except SchemaError as e:
        return False, str(e)

    try:
        jsonschema.validate(instance=data, schema=schema)
        return True, None
    except jsonschema.ValidationError as e:
        return False, e.message
