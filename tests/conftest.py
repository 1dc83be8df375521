"""
Shared test fixtures.

MongoDB collections are replaced with mongomock collections and the session service clock
ticks one second per call, so that "newest first" ordering is deterministic.
"""

import itertools
import os
from datetime import datetime, timedelta

os.environ.setdefault("MONGO_CONN_STR", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("WELLNESSHUB_LOG_LEVEL", "WARNING")

import mongomock
import pytest
from dateutil import tz
from fastapi.testclient import TestClient

import wellnesshub  # noqa: F401 (sets up the component logger)
from common.api.security_jwt import issue_token
from common.models.enums import Coll
from wellnesshub import prestart
from wellnesshub.services import sessions as svc_sessions
from wellnesshub.services.db.mongo import sessions as db_sessions, users as db_users

START = datetime(2026, 1, 1, tzinfo=tz.UTC)


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch):
    db = mongomock.MongoClient(tz_aware=True)["wellnesshub-test"]
    monkeypatch.setattr(db_sessions, "COLL_SESSIONS", db[Coll.SESSIONS.value])
    monkeypatch.setattr(db_users, "COLL_USERS", db[Coll.USERS.value])
    monkeypatch.setattr(prestart, "db", db)
    prestart.prepare_db()
    return db


@pytest.fixture(autouse=True)
def clock(monkeypatch):
    ticks = itertools.count()

    def now():
        return START + timedelta(seconds=next(ticks))

    monkeypatch.setattr(svc_sessions, "utc_now", now)
    return now


@pytest.fixture
def app():
    from run import fast_app
    return fast_app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    def _headers(user_id: str, email: str | None = None) -> dict[str, str]:
        return {"Authorization": f"Bearer {issue_token(user_id=user_id, email=email or f'{user_id}@example.com')}"}

    return _headers


@pytest.fixture
def alice(auth_headers):
    return auth_headers("alice")


@pytest.fixture
def bob(auth_headers):
    return auth_headers("bob")
