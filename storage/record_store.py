"""
Flat tabular record storage.

Features
- One header line + one comma separated line per record
- Whole-file load into an ordered list; whole-file rewrite on persist
- Atomic writes via temp files + os.replace
- Tolerant loader:
  * missing file -> created with just the header
  * header mismatch -> empty dataset (not an error)
  * malformed line -> skipped with a warning
- Writes use csv minimal quoting, so a delimiter inside a field survives;
  legacy unquoted files still load (a bounded trailing field re-joins
  any extra columns)

Used by:
- storage/student_store.py (students file)
- storage/audit_store.py (audit log file)
- service/* services own the loaded lists and call persist()
"""

from __future__ import annotations

import csv
import io
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, List, Sequence, Tuple, Union

from service.errors import ConfigurationError, StorageError

DELIMITER = ","

logger = logging.getLogger("Storage")


@dataclass(frozen=True)
class RecordSchema:
    name: str
    fields: Tuple[str, ...]
    parse: Callable[[List[str]], Any]
    format: Callable[[Any], Sequence[Any]]
    # last field absorbs extra delimiter-separated columns
    bounded: bool = False

    @property
    def header_line(self) -> str:
        return DELIMITER.join(self.fields)

    def split(self, values: Sequence[str]) -> List[str]:
        """
        Normalize one parsed csv row into trimmed fields.
        Raises ValueError when the row carries fewer fields than the schema.
        """
        values = list(values)
        n = len(self.fields)
        if self.bounded and len(values) > n:
            values = values[: n - 1] + [DELIMITER.join(values[n - 1 :])]
        if len(values) < n:
            raise ValueError(f"expected {n} fields, got {len(values)}")
        return [v.strip() for v in values[:n]]

    def render(self, record: Any) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, delimiter=DELIMITER, lineterminator="\n")
        writer.writerow(["" if v is None else str(v) for v in self.format(record)])
        return buf.getvalue()


def _atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
    os.replace(tmp, path)


@dataclass(frozen=True)
class RecordStore:
    path: Union[str, Path, None]
    schema: RecordSchema

    def __post_init__(self):
        if self.path is None or not str(self.path).strip():
            raise ConfigurationError(f"{self.schema.name} file path cannot be null or empty")

    @property
    def file_path(self) -> Path:
        return Path(self.path).expanduser().resolve()  # type: ignore[arg-type]

    # -------- public API --------

    def load(self) -> List[Any]:
        """
        Ensure the file exists, then read every parseable record in file order.
        """
        path = self.file_path
        try:
            if not path.exists():
                logger.info("Creating %s file at %s", self.schema.name, path)
                _atomic_write_text(path, self.schema.header_line + "\n")
            logger.info("Loading %s from %s", self.schema.name, path)
            with path.open("r", encoding="utf-8", newline="") as f:
                reader = csv.reader(f, delimiter=DELIMITER)
                header = next(reader, None)
                if header != list(self.schema.fields):
                    if header is not None:
                        logger.warning(
                            "Header mismatch in %s (expected %r), treating as empty",
                            path, self.schema.header_line,
                        )
                    return []
                return list(self._parse_rows(reader))
        except (OSError, UnicodeError, csv.Error) as e:
            logger.error("Error loading %s file %s: %s", self.schema.name, path, e)
            raise StorageError(f"Failed to load {self.schema.name} from {path}: {e}") from e

    def persist(self, records: Iterable[Any]) -> None:
        """
        Rewrite the whole file: header, then one line per record in order.
        Raises StorageError on any I/O failure.
        """
        path = self.file_path
        parts = [self.schema.header_line + "\n"]
        parts.extend(self.schema.render(r) for r in records)
        try:
            _atomic_write_text(path, "".join(parts))
        except OSError as e:
            logger.error("Error saving %s file %s: %s", self.schema.name, path, e)
            raise StorageError(f"Failed to save {self.schema.name} to {path}: {e}") from e
        logger.debug("Saved %d %s record(s) to %s", len(parts) - 1, self.schema.name, path)

    # -------- internal helpers --------

    def _parse_rows(self, reader):
        while True:
            try:
                row = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                logger.warning("Skipping malformed %s line %d: %s", self.schema.name, reader.line_num, e)
                continue
            if not any(v.strip() for v in row):
                continue
            try:
                yield self.schema.parse(self.schema.split(row))
            except (ValueError, KeyError) as e:
                # tolerate bad lines
                logger.warning("Skipping malformed %s line %d: %s", self.schema.name, reader.line_num, e)
