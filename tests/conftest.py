from __future__ import annotations

from datetime import datetime
from itertools import count

import pytest

from timekeeper.attendance.memory_repository import InMemorySessionRepository
from timekeeper.attendance.service import AttendanceService


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 8, 45, 0)


@pytest.fixture
def repo() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def service(repo, fixed_now) -> AttendanceService:
    ids = count(1)
    return AttendanceService(repo, clock=lambda: fixed_now, id_factory=lambda: f"rec-{next(ids)}")


@pytest.fixture
def app():
    from timekeeper.main import create_app

    app = create_app("config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def hr_client(client):
    resp = client.post("/api/hr/authenticate", json={"password": "hr-test-password"})
    assert resp.status_code == 200
    return client
