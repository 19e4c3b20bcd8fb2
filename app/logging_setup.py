"""
Logging setup.

- Console handler on the root logger
- Rotating file handlers for runtime (Runtime/Storage/Audit/CLI) and errors
- Safe to call more than once (handlers are installed once per process)
"""

from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from app.config import Settings

CHANNELS = ("Runtime", "Storage", "Audit", "CLI")
_MARK = "_roster_handler"


def _mk_handler(path: Path, level: int) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=5_000_000, backupCount=3, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s"))
    setattr(handler, _MARK, True)
    return handler


def _installed(logger: logging.Logger) -> bool:
    return any(getattr(h, _MARK, False) for h in logger.handlers)


def configure_logging(settings: Settings) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
    if _installed(root):
        return

    # Console (dev)
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s"))
    setattr(console, _MARK, True)
    root.addHandler(console)

    if not settings.LOG_TO_FILES:
        return

    # Files
    logs_dir = Path(settings.LOG_DIR)
    runtime = _mk_handler(logs_dir / "roster.log", logging.INFO)
    errors = _mk_handler(logs_dir / "errors.log", logging.ERROR)

    for name in CHANNELS:
        logging.getLogger(name).addHandler(runtime)
    root.addHandler(errors)
