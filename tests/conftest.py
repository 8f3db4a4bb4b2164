"""
Pytest configuration and fixtures.

Every test gets its own SQLite file; settings.DB_PATH is read on each
connection, so patching it is enough to isolate tests.
"""
import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "admin-pass")

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.db.init_db import init_db
from app.db.unit_of_work import UnitOfWork
from app.utils.auth import create_token
from app.utils.helper import utc_now


@pytest.fixture
def db(tmp_path, monkeypatch):
    path = tmp_path / "call_queue_test.db"
    monkeypatch.setattr(settings, "DB_PATH", str(path))
    monkeypatch.setattr(settings, "CLAIM_LEASE_SECONDS", 0)
    init_db()
    return path


@pytest.fixture
def insert_number(db):
    """Insert a pool row directly, bypassing the services."""
    def _insert(phone_number="+15550000", name=None, status=None,
                assigned_to=None, assigned_at=None, created_at=None):
        with UnitOfWork() as uow:
            uow.cursor.execute("""
                INSERT INTO phone_numbers
                (phone_number, name, status, assigned_to, assigned_at, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (
                phone_number,
                name,
                status,
                assigned_to,
                assigned_at or (utc_now() if assigned_to else None),
                created_at or utc_now()
            ))
            return uow.numbers.get_by_id(uow.cursor.lastrowid)
    return _insert


@pytest.fixture
def get_number(db):
    def _get(number_id):
        with UnitOfWork() as uow:
            return uow.numbers.get_by_id(number_id)
    return _get


@pytest.fixture
def make_operator(db):
    """Create an operator profile and return (id, auth headers)."""
    def _make(operator_id, is_admin=False):
        with UnitOfWork() as uow:
            uow.operators.create(operator_id, operator_id, is_admin, utc_now())
        token = create_token(operator_id, is_admin)
        return operator_id, {"Authorization": f"Bearer {token}"}
    return _make


@pytest.fixture
def client(db):
    from app.main import app
    return TestClient(app)


@pytest.fixture
def admin_headers(client):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "admin-pass"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
