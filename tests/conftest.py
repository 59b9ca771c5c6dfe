# tests/conftest.py

from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Point the app at a throwaway database before anything imports app.config
_TMP_DIR = Path(tempfile.mkdtemp(prefix="pm-api-tests-"))
_DB_FILE = _TMP_DIR / "test.sqlite3"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_FILE}"
os.environ["LOG_FILE"] = str(_TMP_DIR / "error.log")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from app.database import Base
from app.main import app
from app.models import project, tasks, user  # noqa: F401

from .helpers import auth_header, register


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh tables for every test, built with a plain sync engine on the same file."""
    engine = create_engine(f"sqlite:///{_DB_FILE}")
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    engine.dispose()
    yield


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def alice(client) -> dict[str, str]:
    """Headers of a registered user."""
    response = register(client, "alice", "a@x.com")
    assert response.status_code == 201
    return auth_header(response.json()["token"])


@pytest.fixture()
def bob(client) -> dict[str, str]:
    response = register(client, "bob", "b@x.com")
    assert response.status_code == 201
    return auth_header(response.json()["token"])
