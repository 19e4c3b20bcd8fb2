"""
Student directory tests.

Covers:
- the five reference scenarios (empty add, token arithmetic, role rejection,
  missing remove, duplicate add)
- audit completeness for every mutation
- authorization leaves both stores untouched
- persistence across reloads and rollback on failed saves
"""

from __future__ import annotations
import pytest

from app.container import Container
from service.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from service.models import AuditAction, Student
from storage.record_store import RecordStore
from storage.student_store import STUDENT_SCHEMA


# ---- reference scenarios ----

def test_add_to_empty_directory(directory, audit, teacher):
    directory.add(teacher, Student("Alice", "Smith", 0))

    assert directory.list_all() == [Student("Alice", "Smith", 0)]
    entries = audit.list_all()
    assert len(entries) == 1
    assert entries[0].action == AuditAction.ADD_STUDENT
    assert entries[0].details == "Added student: Alice Smith with 0 tokens"


def test_adjust_tokens_arithmetic(directory, teacher):
    directory.add(teacher, Student("Bob", "Lee", 10))

    assert directory.adjust_tokens("Bob", "Lee", 5, teacher).tokens == 15
    assert directory.adjust_tokens("Bob", "Lee", -20, teacher).tokens == -5
    assert directory.find_by_name("Bob", "Lee").tokens == -5


def test_student_role_cannot_add(directory, audit, pupil):
    with pytest.raises(AuthorizationError) as exc:
        directory.add(pupil, Student("Carl", "Young", 0))
    assert str(exc.value) == "Only teachers can add students"
    assert directory.list_all() == []
    assert audit.list_all() == []


def test_remove_missing_student(directory, teacher):
    with pytest.raises(NotFoundError):
        directory.remove("NoSuch", "Body", teacher)


def test_duplicate_add_conflicts(directory, audit, teacher):
    directory.add(teacher, Student("Dana", "Kim", 0))
    with pytest.raises(ConflictError):
        directory.add(teacher, Student("Dana", "Kim", 3))

    assert directory.list_all() == [Student("Dana", "Kim", 0)]
    assert len(audit.list_all()) == 1


# ---- lookup ----

def test_find_by_name_is_exact_and_case_sensitive(directory, teacher):
    directory.add(teacher, Student("Alice", "Smith", 2))

    assert directory.find_by_name("Alice", "Smith") == Student("Alice", "Smith", 2)
    assert directory.find_by_name("alice", "Smith") is None
    assert directory.find_by_name("Alice", "Smit") is None


def test_same_first_name_different_last_name_is_allowed(directory, teacher):
    directory.add(teacher, Student("Alice", "Smith", 0))
    directory.add(teacher, Student("Alice", "Jones", 0))
    assert [s.last_name for s in directory.list_all()] == ["Smith", "Jones"]


def test_list_all_returns_a_copy(directory, teacher):
    directory.add(teacher, Student("Alice", "Smith", 0))
    directory.list_all().clear()
    assert len(directory.list_all()) == 1


def test_added_record_is_owned_by_directory(directory, teacher):
    original = Student("Alice", "Smith", 0)
    directory.add(teacher, original)
    original.tokens = 99
    assert directory.find_by_name("Alice", "Smith").tokens == 0


def test_returned_records_do_not_change_the_directory(directory, teacher, students_path):
    directory.add(teacher, Student("Dana", "Kim", 1))
    directory.add(teacher, Student("Eve", "Kim", 2))

    directory.find_by_name("Eve", "Kim").first_name = "Dana"
    directory.list_all()[0].tokens = 50
    directory.adjust_tokens("Dana", "Kim", 3, teacher).last_name = "Lee"

    assert [(s.first_name, s.last_name, s.tokens) for s in directory.list_all()] == [
        ("Dana", "Kim", 4),
        ("Eve", "Kim", 2),
    ]
    assert "Eve,Kim,2" in students_path.read_text("utf-8")


# ---- mutations + audit ----

def test_remove_and_expel_are_audited_separately(directory, audit, teacher):
    directory.add(teacher, Student("Alice", "Smith", 0))
    directory.add(teacher, Student("Bob", "Lee", 0))

    directory.remove("Alice", "Smith", teacher)
    directory.expel(teacher, "Bob", "Lee")

    assert directory.list_all() == []
    actions = [e.action for e in audit.list_all()]
    assert actions == ["ADD_STUDENT", "ADD_STUDENT", "REMOVE_STUDENT", "EXPEL_STUDENT"]
    assert audit.list_all()[-2].details == "Removed student: Alice Smith"
    assert audit.list_all()[-1].details == "Expelled student: Bob Lee"


def test_update_tokens_entry_records_old_and_new(directory, audit, teacher):
    directory.add(teacher, Student("Bob", "Lee", 10))
    directory.adjust_tokens("Bob", "Lee", -3, teacher)

    last = audit.list_all()[-1]
    assert last.action == AuditAction.UPDATE_TOKENS
    assert last.details == "Updated tokens for Bob Lee: 10 -> 7"
    assert (last.user_first_name, last.user_last_name) == (teacher.first_name, teacher.last_name)
    assert last.user_role is teacher.role


@pytest.mark.parametrize("op", ["adjust", "expel"])
def test_missing_student_is_not_found(directory, audit, teacher, op):
    with pytest.raises(NotFoundError):
        if op == "adjust":
            directory.adjust_tokens("No", "One", 1, teacher)
        else:
            directory.expel(teacher, "No", "One")
    assert audit.list_all() == []


def test_add_requires_a_student(directory, teacher):
    with pytest.raises(ValidationError):
        directory.add(teacher, None)


@pytest.mark.parametrize("delta", ["5", 1.5, True, None])
def test_adjust_requires_integer_delta(directory, teacher, delta):
    directory.add(teacher, Student("Bob", "Lee", 10))
    with pytest.raises(ValidationError):
        directory.adjust_tokens("Bob", "Lee", delta, teacher)
    assert directory.find_by_name("Bob", "Lee").tokens == 10


# ---- authorization invariant ----

def _mutations(pupil):
    return {
        "add": lambda d: d.add(pupil, Student("Eve", "Moss", 0)),
        "remove": lambda d: d.remove("Bob", "Lee", pupil),
        "expel": lambda d: d.expel(pupil, "Bob", "Lee"),
        "adjust": lambda d: d.adjust_tokens("Bob", "Lee", 100, pupil),
        "adjust_kw": lambda d: d.adjust_tokens("Bob", "Lee", delta=100, actor=pupil),
    }


@pytest.mark.parametrize("op", ["add", "remove", "expel", "adjust", "adjust_kw"])
def test_non_teacher_changes_nothing(directory, audit, teacher, pupil, students_path, audit_path, op):
    directory.add(teacher, Student("Bob", "Lee", 10))
    students_before = students_path.read_text("utf-8")
    audit_before = audit_path.read_text("utf-8")

    with pytest.raises(AuthorizationError):
        _mutations(pupil)[op](directory)

    assert directory.list_all() == [Student("Bob", "Lee", 10)]
    assert len(audit.list_all()) == 1
    assert students_path.read_text("utf-8") == students_before
    assert audit_path.read_text("utf-8") == audit_before


def test_rejection_happens_before_existence_check(directory, pupil):
    with pytest.raises(AuthorizationError):
        directory.remove("NoSuch", "Body", pupil)


def test_missing_actor_is_rejected(directory):
    with pytest.raises(AuthorizationError):
        directory.add(None, Student("Eve", "Moss", 0))


# ---- persistence ----

def test_state_survives_reload(settings, directory, teacher):
    directory.add(teacher, Student("Alice", "Smith", 0))
    directory.add(teacher, Student("Bob", "Lee", 10))
    directory.adjust_tokens("Bob", "Lee", -12, teacher)
    directory.remove("Alice", "Smith", teacher)

    fresh = Container(settings)
    assert fresh.students.list_all() == [Student("Bob", "Lee", -2)]
    assert [e.action for e in fresh.audit.list_all()] == [
        "ADD_STUDENT", "ADD_STUDENT", "UPDATE_TOKENS", "REMOVE_STUDENT",
    ]


def test_students_file_layout(directory, teacher, students_path):
    directory.add(teacher, Student("Alice", "Smith", 0))
    directory.add(teacher, Student("Bob", "Lee", 10))
    assert students_path.read_text("utf-8") == "firstName,lastName,tokens\nAlice,Smith,0\nBob,Lee,10\n"


# ---- rollback on failed save ----

@pytest.fixture()
def broken_student_store(monkeypatch):
    real = RecordStore.persist

    def persist(self, records):
        if self.schema is STUDENT_SCHEMA:
            raise StorageError("disk full")
        return real(self, records)

    def install():
        monkeypatch.setattr(RecordStore, "persist", persist)
    return install


def test_failed_add_is_rolled_back(directory, audit, teacher, broken_student_store):
    broken_student_store()
    with pytest.raises(StorageError):
        directory.add(teacher, Student("Alice", "Smith", 0))
    assert directory.list_all() == []
    assert audit.list_all() == []


def test_failed_remove_is_rolled_back(directory, audit, teacher, broken_student_store):
    directory.add(teacher, Student("Alice", "Smith", 0))
    broken_student_store()
    with pytest.raises(StorageError):
        directory.remove("Alice", "Smith", teacher)
    assert directory.list_all() == [Student("Alice", "Smith", 0)]
    assert len(audit.list_all()) == 1


def test_failed_adjust_is_rolled_back(directory, audit, teacher, broken_student_store):
    directory.add(teacher, Student("Bob", "Lee", 10))
    broken_student_store()
    with pytest.raises(StorageError):
        directory.adjust_tokens("Bob", "Lee", 5, teacher)
    assert directory.find_by_name("Bob", "Lee").tokens == 10
    assert len(audit.list_all()) == 1
