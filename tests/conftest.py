"""Shared test configuration: in-memory SQLite, temp upload dir, account helpers."""

import itertools
import os
import tempfile
from typing import NamedTuple

# Must be set before app modules read settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["REALTIME_ENABLED"] = "true"
os.environ["REALTIME_TARGETED_DELIVERY"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="job-portal-uploads-")
os.environ["CLOUDINARY_CLOUD_NAME"] = ""
os.environ["CLOUDINARY_API_KEY"] = ""
os.environ["CLOUDINARY_API_SECRET"] = ""

import pytest
from fastapi.testclient import TestClient

from app.core.auth import create_token_for, hash_password
from app.db.tables import drop_db
from app.main import app
from app.models.records import UserRecord
from app.services import job_service, user_service

PASSWORD = "password123"
PASSWORD_HASH = hash_password(PASSWORD)

_counter = itertools.count(1)


class Account(NamedTuple):
    user: UserRecord
    token: str

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
def client():
    """App with a fresh schema and a fresh event bus per test."""
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    drop_db()


@pytest.fixture
def bus(client):
    return client.app.state.event_bus


@pytest.fixture
def make_account(client):
    def _make(role: str = "USER") -> Account:
        n = next(_counter)
        user = user_service.create_user(f"{role.title()} {n}", f"{role.lower()}{n}@acme.io", PASSWORD_HASH, role)
        return Account(user, create_token_for(user.id, user.role, user.email))
    return _make


@pytest.fixture
def hr(make_account) -> Account:
    return make_account("HR")


@pytest.fixture
def other_hr(make_account) -> Account:
    return make_account("HR")


@pytest.fixture
def seeker(make_account) -> Account:
    return make_account("USER")


@pytest.fixture
def make_job(client):
    def _make(owner: Account, title: str = "Backend Engineer"):
        return job_service.create_job(title, "Build APIs", "100000", "Remote", posted_by=owner.user.id)
    return _make


def drain(connection) -> list:
    """Everything queued for a bus connection so far."""
    events = []
    while not connection.outbox.empty():
        events.append(connection.outbox.get_nowait())
    return events
