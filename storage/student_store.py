"""
Student file schema.

    firstName,lastName,tokens
    <string>,<string>,<integer>

Columns past the third are ignored.
"""

from __future__ import annotations
from pathlib import Path
from typing import List, Sequence, Union

from service.models import Student
from storage.record_store import RecordSchema, RecordStore


def _parse_student(values: List[str]) -> Student:
    return Student(first_name=values[0], last_name=values[1], tokens=int(values[2]))


def _format_student(student: Student) -> Sequence[object]:
    return (student.first_name, student.last_name, student.tokens)


STUDENT_SCHEMA = RecordSchema(
    name="students",
    fields=("firstName", "lastName", "tokens"),
    parse=_parse_student,
    format=_format_student,
)


def student_store(path: Union[str, Path, None]) -> RecordStore:
    return RecordStore(path, STUDENT_SCHEMA)
