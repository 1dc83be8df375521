from datetime import timedelta

import jwt

from common.config import CONFIG
from common.models.user import User
from common.models.validation import utc_now
from wellnesshub.services.db.mongo import users as db_users

URL = "https://cdn.example.com/sessions/breathing.json"
SESSIONS = "/api/sessions"
MY_SESSIONS = "/api/sessions/my-sessions"


def test_public_listing_needs_no_auth(client, alice):
    db_users.create_user(User(id="alice", email="alice@example.com", password_hash="x"))
    client.post(f"{MY_SESSIONS}/save-draft", json={"title": "Draft"}, headers=alice)
    client.post(f"{MY_SESSIONS}/publish", json={"title": "Yoga", "json_file_url": URL}, headers=alice)

    res = client.get(SESSIONS)

    assert res.status_code == 200
    data = res.json()
    assert [s["title"] for s in data] == ["Yoga"]
    assert data[0]["author"] == {"_id": "alice", "email": "alice@example.com"}


def test_private_routes_require_token(client):
    assert client.get(MY_SESSIONS).status_code == 401
    assert client.post(SESSIONS, json={"title": "Yoga"}).status_code == 401
    assert client.get(f"{SESSIONS}/abc").status_code == 401
    assert client.post(f"{MY_SESSIONS}/save-draft", json={"title": "Yoga"}).status_code == 401

    res = client.get(MY_SESSIONS, headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401
    assert res.json() == {"detail": "Invalid auth token"}


def test_expired_token_is_rejected(client):
    token = jwt.encode(
        {"sub": "alice", "exp": utc_now() - timedelta(minutes=1)},
        CONFIG.JWT_SECRET.get_secret_value(),
        algorithm=CONFIG.JWT_ALGORITHM,
    )

    res = client.get(MY_SESSIONS, headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401
    assert res.json() == {"detail": "Auth token has expired"}


def test_create_get_update_delete(client, alice):
    res = client.post(SESSIONS, json={"title": "Yoga", "content": "Sun salutation"}, headers=alice)
    assert res.status_code == 200
    session = res.json()
    assert session["status"] == "draft"
    assert session["user_id"] == "alice"

    res = client.get(f"{SESSIONS}/{session['_id']}", headers=alice)
    assert res.status_code == 200
    assert res.json()["content"] == "Sun salutation"

    res = client.patch(f"{SESSIONS}/{session['_id']}", json={"title": "Evening yoga"}, headers=alice)
    assert res.status_code == 200
    assert res.json()["title"] == "Evening yoga"
    assert res.json()["content"] == "Sun salutation"

    res = client.delete(f"{SESSIONS}/{session['_id']}", headers=alice)
    assert res.status_code == 200
    assert res.json() == {"message": "Session deleted successfully"}

    assert client.delete(f"{SESSIONS}/{session['_id']}", headers=alice).status_code == 404


def test_create_with_blank_title_is_bad_request(client, alice):
    res = client.post(SESSIONS, json={"title": "   "}, headers=alice)

    assert res.status_code == 400
    assert res.json() == {"detail": [{"field": "title", "message": "Title is required"}]}


def test_patch_with_blank_title_is_bad_request(client, alice):
    session = client.post(SESSIONS, json={"title": "Yoga"}, headers=alice).json()

    res = client.patch(f"{SESSIONS}/{session['_id']}", json={"title": ""}, headers=alice)

    assert res.status_code == 400
    assert res.json()["detail"][0]["field"] == "title"


def test_patch_with_unknown_status_is_bad_request(client, alice):
    session = client.post(SESSIONS, json={"title": "Yoga"}, headers=alice).json()

    res = client.patch(f"{SESSIONS}/{session['_id']}", json={"status": "archived"}, headers=alice)

    assert res.status_code == 400
    assert res.json()["detail"][0]["field"] == "status"


def test_foreign_session_looks_missing(client, alice, bob):
    session = client.post(SESSIONS, json={"title": "Yoga"}, headers=alice).json()
    sid = session["_id"]

    for res in (
        client.get(f"{SESSIONS}/{sid}", headers=bob),
        client.get(f"{MY_SESSIONS}/{sid}", headers=bob),
        client.patch(f"{SESSIONS}/{sid}", json={"title": "Mine"}, headers=bob),
        client.delete(f"{SESSIONS}/{sid}", headers=bob),
        client.delete(f"{MY_SESSIONS}/{sid}", headers=bob),
        client.post(f"{MY_SESSIONS}/save-draft", json={"title": "Mine", "sessionId": sid}, headers=bob),
    ):
        assert res.status_code == 404
        assert res.json() == {"detail": "Session not found"}

    assert client.get(f"{SESSIONS}/does-not-exist", headers=alice).json() == {"detail": "Session not found"}


def test_save_draft_then_update_same_session(client, alice):
    res = client.post(f"{MY_SESSIONS}/save-draft", json={"title": "Yoga", "tags": "a, b ,, c"}, headers=alice)
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Draft saved successfully"
    assert body["session"]["tags"] == ["a", "b", "c"]

    sid = body["session"]["_id"]
    res = client.post(
        f"{MY_SESSIONS}/save-draft",
        json={"title": "Yoga flow", "tags": ["x"], "sessionId": sid},
        headers=alice,
    )
    assert res.json()["session"]["_id"] == sid

    mine = client.get(MY_SESSIONS, headers=alice).json()
    assert [(s["_id"], s["title"], s["tags"]) for s in mine] == [(sid, "Yoga flow", ["x"])]


def test_save_draft_rejects_bad_input(client, alice):
    res = client.post(f"{MY_SESSIONS}/save-draft", json={"title": "Yoga", "tags": 5}, headers=alice)
    assert res.status_code == 400
    assert res.json() == {"detail": [{"field": "tags", "message": "Tags must be a string or array"}]}

    res = client.post(f"{MY_SESSIONS}/save-draft", json={"title": "Yoga", "json_file_url": "nope"}, headers=alice)
    assert res.status_code == 400
    assert res.json() == {"detail": [{"field": "json_file_url", "message": "Must be a valid URL"}]}

    res = client.post(f"{MY_SESSIONS}/save-draft", json={"tags": "a"}, headers=alice)
    assert res.status_code == 400
    assert res.json()["detail"][0]["field"] == "title"


def test_publish_requires_url(client, alice):
    res = client.post(f"{MY_SESSIONS}/publish", json={"title": "Yoga"}, headers=alice)
    assert res.status_code == 400
    assert res.json()["detail"] == [{"field": "json_file_url", "message": "JSON file URL is required and must be valid"}]

    res = client.post(f"{MY_SESSIONS}/publish", json={"title": "Yoga", "json_file_url": URL}, headers=alice)
    assert res.status_code == 200
    assert res.json()["message"] == "Session published successfully"
    assert res.json()["session"]["status"] == "published"


def test_my_sessions_lists_drafts_and_published(client, alice, bob):
    draft = client.post(f"{MY_SESSIONS}/save-draft", json={"title": "Draft"}, headers=alice).json()["session"]
    published = client.post(
        f"{MY_SESSIONS}/publish", json={"title": "Published", "json_file_url": URL}, headers=alice
    ).json()["session"]
    client.post(f"{MY_SESSIONS}/save-draft", json={"title": "Bob's"}, headers=bob)

    mine = client.get(MY_SESSIONS, headers=alice).json()
    assert [s["_id"] for s in mine] == [published["_id"], draft["_id"]]

    drafts = client.get(MY_SESSIONS, params={"status": "draft"}, headers=alice).json()
    assert [s["_id"] for s in drafts] == [draft["_id"]]

    assert client.get(MY_SESSIONS, params={"status": "archived"}, headers=alice).status_code == 400


def test_response_headers_carry_request_context(client):
    res = client.get(SESSIONS, headers={"X-Correlation-Id": "corr-1"})

    assert res.headers["X-Correlation-Id"] == "corr-1"
    assert res.headers["X-Request-Id"]
    assert res.headers["X-Response-Time"].isdigit()


def test_storage_failure_is_a_generic_server_error(client, alice, monkeypatch):
    from wellnesshub.services import sessions as svc

    def broken(*args, **kwargs):
        raise RuntimeError("connection reset by mongo-0.internal")

    monkeypatch.setattr(svc.db_sessions, "list_sessions", broken)

    res = client.get(MY_SESSIONS, headers=alice)

    assert res.status_code == 500
    assert res.json() == {"detail": "Server error"}


def test_invalid_stored_session_is_left_out_of_listings(client, alice, mongo_db):
    mongo_db["sessions"].insert_one({"_id": "legacy", "user_id": "alice", "title": "Old", "status": "published"})
    client.post(f"{MY_SESSIONS}/publish", json={"title": "Yoga", "json_file_url": URL}, headers=alice)

    res = client.get(SESSIONS)
    assert res.status_code == 200
    assert [s["title"] for s in res.json()] == ["Yoga"]

    res = client.get(MY_SESSIONS, headers=alice)
    assert res.status_code == 200
    assert [s["title"] for s in res.json()] == ["Yoga"]


def test_invalid_stored_session_is_a_generic_server_error(client, alice, mongo_db):
    mongo_db["sessions"].insert_one({"_id": "legacy", "user_id": "alice", "title": "Old", "status": "published"})

    res = client.get(f"{MY_SESSIONS}/legacy", headers=alice)

    assert res.status_code == 500
    assert res.json() == {"detail": "Server error"}
