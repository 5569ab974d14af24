import pytest
from fastapi.testclient import TestClient

from todo_api.main import app


@pytest.fixture
def db_url(tmp_path, monkeypatch):
    # Each test gets its own empty SQLite file; the todos table does not exist yet
    url = f"sqlite:///{tmp_path / 'todos.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.delenv("INIT_SCHEMA", raising=False)
    return url


@pytest.fixture
def client(db_url):
    """Client against an empty store (no todos table)."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def full_client(db_url, monkeypatch):
    """Client against a store whose full todos table is created at startup."""
    monkeypatch.setenv("INIT_SCHEMA", "true")
    with TestClient(app) as c:
        yield c
