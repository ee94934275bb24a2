import uuid

import jwt
import pytest
from fastapi.testclient import TestClient

from regestra.core.config import settings
from regestra.db.session import get_db
from regestra.main import app


def _auth(user_id: uuid.UUID, email: str | None = None) -> dict[str, str]:
    claims = {"sub": str(user_id), "aud": settings.identity_jwt_audience}
    if email:
        claims["email"] = email
    token = jwt.encode(claims, settings.identity_jwt_secret, algorithm=settings.identity_jwt_algorithm)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(db):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_requests_without_token_or_profile_are_unauthorized(client) -> None:
    assert client.get("/api/v1/feed").status_code == 401
    assert client.get("/api/v1/feed", headers={"Authorization": "Bearer junk"}).status_code == 401
    assert client.get("/api/v1/feed", headers=_auth(uuid.uuid4())).status_code == 401


def test_create_profile_then_read_summary(client) -> None:
    user_id = uuid.uuid4()
    headers = _auth(user_id, email="ada@example.com")

    created = client.post("/api/v1/me", json={"role": "artist", "name": "Ada", "username": "ada_l"}, headers=headers)
    summary = client.get("/api/v1/me", headers=headers)

    assert created.status_code == 201
    assert created.json()["id"] == str(user_id)
    assert summary.status_code == 200
    assert summary.json()["stats"]["followers"] == 0


def test_messaging_flow_over_http(client, make_user) -> None:
    ada = make_user("Ada")
    bob = make_user("Bob")

    started = client.post("/api/v1/conversations", json={"target_user_id": str(bob.id)}, headers=_auth(ada.id))
    conversation_id = started.json()["conversation_id"]
    sent = client.post(
        f"/api/v1/conversations/{conversation_id}/messages",
        json={"text": "hi"},
        headers=_auth(ada.id),
    )
    listed = client.get("/api/v1/conversations", headers=_auth(bob.id)).json()

    assert started.json()["created"] is True
    assert sent.status_code == 200
    assert listed["items"][0]["last_message"] == "hi"
    assert listed["items"][0]["unread_count"] == 1
    assert listed["poll_interval_seconds"] == settings.conversation_poll_interval_seconds

    client.post(f"/api/v1/conversations/{conversation_id}/read", headers=_auth(bob.id))
    listed = client.get("/api/v1/conversations", headers=_auth(bob.id)).json()
    assert listed["items"][0]["unread_count"] == 0


def test_follow_toggle_creates_notification(client, make_user) -> None:
    ada = make_user("Ada")
    bob = make_user("Bob")

    response = client.post(f"/api/v1/social/follows/{bob.id}/toggle", headers=_auth(ada.id))
    notifications = client.get("/api/v1/notifications", headers=_auth(bob.id)).json()["items"]
    unread = client.get("/api/v1/notifications/unread-count", headers=_auth(bob.id)).json()

    assert response.json()["following_ids"] == [str(bob.id)]
    assert [item["type"] for item in notifications] == ["follow"]
    assert unread == {"unread_count": 1}


def test_preference_toggles_are_scoped_to_caller(client, make_user) -> None:
    ada = make_user("Ada")
    bob = make_user("Bob")
    post_id = uuid.uuid4()

    toggled = client.post(f"/api/v1/preferences/hidden-posts/{post_id}/toggle", headers=_auth(ada.id)).json()

    assert toggled == {"target_id": str(post_id), "active": True}
    assert client.get("/api/v1/preferences", headers=_auth(ada.id)).json()["hidden_post_ids"] == [str(post_id)]
    assert client.get("/api/v1/preferences", headers=_auth(bob.id)).json()["hidden_post_ids"] == []


def test_feed_items_are_tagged(client, make_user) -> None:
    ada = make_user("Ada")
    client.post("/api/v1/posts", json={"content": "first"}, headers=_auth(ada.id))

    items = client.get("/api/v1/feed", headers=_auth(ada.id)).json()["items"]

    assert [item["type"] for item in items] == ["post"]
    assert items[0]["data"]["content"] == "first"
