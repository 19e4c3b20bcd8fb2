"""
Global test fixtures for the student token roster.

Every test gets its own temp data directory, so store files never leak
between tests and nothing touches ./data or ./logs.
"""

from __future__ import annotations
from pathlib import Path
import pytest

# ---------------------------------------------------------------------------
# Import target app
# ---------------------------------------------------------------------------
import sys
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app import create_app  # type: ignore
from app.config import load_settings  # type: ignore
from app.container import Container  # type: ignore
from service.models import User, UserRole  # type: ignore

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    d = tmp_path / "data"
    d.mkdir()
    return d


@pytest.fixture()
def students_path(data_dir: Path) -> Path:
    return data_dir / "students.csv"


@pytest.fixture()
def audit_path(data_dir: Path) -> Path:
    return data_dir / "logs.csv"


@pytest.fixture()
def settings_override(students_path: Path, audit_path: Path, tmp_path: Path):
    return {
        "STUDENTS_CSV_PATH": str(students_path),
        "AUDIT_LOG_PATH": str(audit_path),
        "LOG_DIR": str(tmp_path / "logs"),
        "LOG_TO_FILES": "0",
        "SECRET_KEY": "test-secret",
    }


@pytest.fixture()
def settings(settings_override):
    return load_settings(settings_override)


@pytest.fixture()
def container(settings):
    return Container(settings)


@pytest.fixture()
def directory(container):
    return container.students


@pytest.fixture()
def audit(container):
    return container.audit


@pytest.fixture()
def teacher() -> User:
    return User("Ann", "Roe", UserRole.TEACHER)


@pytest.fixture()
def pupil() -> User:
    return User("Tim", "Fox", UserRole.STUDENT)


@pytest.fixture()
def app(settings_override):
    flask_app = create_app(settings_override)
    flask_app.config.update(TESTING=True)
    yield flask_app


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


def actor_headers(user: User) -> dict:
    return {
        "X-User-First-Name": user.first_name,
        "X-User-Last-Name": user.last_name,
        "X-User-Role": user.role.value,
    }


@pytest.fixture()
def teacher_headers(teacher):
    return actor_headers(teacher)


@pytest.fixture()
def pupil_headers(pupil):
    return actor_headers(pupil)
