"""
Configuration loader.

- Reads env vars (.env supported by deploy)
- Provides strongly-typed Settings
- Holds the two store file paths and logging knobs
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional


def _get(name: str, default: Optional[str] = None) -> str:
    v = os.environ.get(name, default)
    if v is None:
        raise RuntimeError(f"Missing required env: {name}")
    return v


@dataclass(frozen=True)
class Settings:
    # Store files
    STUDENTS_CSV_PATH: str
    AUDIT_LOG_PATH: str

    # Logging
    LOG_DIR: str
    LOG_LEVEL: str
    LOG_TO_FILES: bool

    # HTTP front end
    SECRET_KEY: str
    BASE_URL: str


def _to_bool(s: str | None, default: bool = False) -> bool:
    if s is None:
        return default
    return s.strip().lower() in {"1", "true", "yes", "on"}


def load_settings(override: dict | None = None) -> Settings:
    o = override or {}
    return Settings(
        STUDENTS_CSV_PATH=o.get("STUDENTS_CSV_PATH", _get("STUDENTS_CSV_PATH", "data/students.csv")),
        AUDIT_LOG_PATH=o.get("AUDIT_LOG_PATH", _get("AUDIT_LOG_PATH", "data/logs.csv")),

        LOG_DIR=o.get("LOG_DIR", _get("LOG_DIR", "logs")),
        LOG_LEVEL=str(o.get("LOG_LEVEL", _get("LOG_LEVEL", "INFO"))).upper(),
        LOG_TO_FILES=_to_bool(o.get("LOG_TO_FILES", os.environ.get("LOG_TO_FILES")), True),

        SECRET_KEY=o.get("SECRET_KEY", _get("SECRET_KEY", "change-me")),
        BASE_URL=o.get("BASE_URL", os.environ.get("BASE_URL", "http://localhost:10000")),
    )
