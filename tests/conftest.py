"""
Point the app at a throwaway SQLite file before anything imports
fittrack.settings, and create the schema once for the whole run.
"""
import os
import tempfile
import uuid

import pytest

_DB_FILE = os.path.join(tempfile.gettempdir(), f"fittrack-test-{uuid.uuid4().hex[:8]}.db")
os.environ["DB_URL"] = f"sqlite:///{_DB_FILE}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["TIMEZONE"] = "UTC"

from fittrack import models  # noqa: E402,F401
from fittrack.db import Base, SessionLocal, engine  # noqa: E402
from fittrack.repositories import ExerciseRepository, UserRepository  # noqa: E402

Base.metadata.create_all(engine)


@pytest.fixture(scope="session", autouse=True)
def _drop_test_db():
    yield
    engine.dispose()
    if os.path.exists(_DB_FILE):
        os.remove(_DB_FILE)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    def _make(**overrides):
        tag = uuid.uuid4().hex[:8]
        fields = {"username": f"u_{tag}", "email": f"{tag}@ex.com", "name": "Test", "password_hash": "x"}
        fields.update(overrides)
        return UserRepository(db).create(**fields)
    return _make


@pytest.fixture
def make_exercise(db):
    def _make(name=None, muscle_groups=("Legs",), **extra):
        name = name or f"Ex {uuid.uuid4().hex[:8]}"
        return ExerciseRepository(db).create(name=name, muscle_groups=list(muscle_groups), **extra)
    return _make
