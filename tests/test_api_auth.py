import pytest

from common.api.security_jwt import decode_token
from common.models.user import User
from common.utils import exceptions as exc
from wellnesshub.services import auth as svc_auth
from wellnesshub.services.db.mongo import users as db_users

REGISTER = "/api/auth/register"
LOGIN = "/api/auth/login"
ME = "/api/auth/me"


@pytest.fixture
def registered(client):
    res = client.post(REGISTER, json={"email": " Alice@Example.com ", "password": "secret123"})
    assert res.status_code == 201
    return res.json()


def test_register_returns_token_and_public_user(registered, mongo_db):
    assert registered["user"]["email"] == "alice@example.com"
    assert "password_hash" not in registered["user"]
    assert decode_token(registered["token"])["sub"] == registered["user"]["_id"]

    stored = mongo_db["users"].find_one({"email": "alice@example.com"})
    assert stored["password_hash"] != "secret123"
    assert svc_auth.verify_password("secret123", stored["password_hash"])


def test_register_duplicate_email_conflicts(client, registered):
    res = client.post(REGISTER, json={"email": "ALICE@example.com", "password": "another123"})

    assert res.status_code == 409
    assert res.json() == {"detail": "User already exists"}


def test_register_validates_input(client):
    res = client.post(REGISTER, json={"email": "not-an-email", "password": "123"})

    assert res.status_code == 400
    assert [e["field"] for e in res.json()["detail"]] == ["email", "password"]


def test_login_and_me(client, registered):
    res = client.post(LOGIN, json={"email": "alice@example.com", "password": "secret123"})
    assert res.status_code == 200
    token = res.json()["token"]

    res = client.get(ME, headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200
    assert res.json()["_id"] == registered["user"]["_id"]
    assert res.json()["email"] == "alice@example.com"


@pytest.mark.parametrize("email, password", [("alice@example.com", "wrong-pass"), ("nobody@example.com", "secret123")])
def test_login_failures_look_the_same(client, registered, email, password):
    res = client.post(LOGIN, json={"email": email, "password": password})

    assert res.status_code == 401
    assert res.json() == {"detail": "Invalid credentials"}


def test_me_for_deleted_user_is_not_found(client, auth_headers):
    res = client.get(ME, headers=auth_headers("ghost"))

    assert res.status_code == 404
    assert res.json() == {"detail": "User not found"}


def test_token_works_for_session_endpoints(client, registered):
    headers = {"Authorization": f"Bearer {registered['token']}"}

    res = client.post("/api/sessions/my-sessions/save-draft", json={"title": "Yoga"}, headers=headers)

    assert res.status_code == 200
    assert res.json()["session"]["user_id"] == registered["user"]["_id"]


def test_duplicate_email_is_rejected_by_the_unique_index():
    db_users.create_user(User(email="alice@example.com", password_hash="x"))

    with pytest.raises(exc.DBRecordAlreadyExists):
        db_users.create_user(User(email="alice@example.com", password_hash="y"))
