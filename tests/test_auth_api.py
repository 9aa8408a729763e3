from __future__ import annotations

import asyncio

from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.core.security import create_access_token
from app.db.repositories.user_repository import UserRepository


def _load_user(session_factory, username: str):
    async def load():
        async with session_factory() as session:
            return await UserRepository(session).get_by_username(username)

    return asyncio.run(load())


def test_register_returns_identity_without_hash(client: TestClient, session_factory) -> None:
    response = client.post("/register", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 200
    payload = response.json()
    assert set(payload) == {"id", "username"}
    assert payload["username"] == "alice"

    stored = _load_user(session_factory, "alice")
    assert stored is not None
    assert str(stored.id) == payload["id"]
    assert stored.password_hash != "secret123"
    assert stored.authenticate("secret123")


def test_register_twice_fails(client: TestClient) -> None:
    first = client.post("/register", json={"username": "alice", "password": "secret123"})
    second = client.post("/register", json={"username": "alice", "password": "other"})

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json() == {"error": "username_taken", "detail": "Username already taken"}


def test_register_invalid_payload_returns_400(client: TestClient) -> None:
    response = client.post("/register", json={"username": "alice"})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_login_sets_token_accepted_by_profile(client: TestClient) -> None:
    registered = client.post("/register", json={"username": "alice", "password": "secret123"}).json()

    response = client.post("/login", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 200
    assert response.json() == registered
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("token=")
    assert "httponly" in set_cookie.lower()

    profile = client.get("/profile")
    assert profile.status_code == 200
    assert profile.json()["username"] == "alice"
    assert profile.json()["id"] == registered["id"]


def test_login_wrong_password_issues_no_token(client: TestClient) -> None:
    client.post("/register", json={"username": "alice", "password": "secret123"})

    response = client.post("/login", json={"username": "alice", "password": "nope"})

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_credentials"
    assert "set-cookie" not in response.headers
    assert client.get("/profile").status_code == 401


def test_login_unknown_user_issues_no_token(client: TestClient) -> None:
    response = client.post("/login", json={"username": "ghost", "password": "secret123"})

    assert response.status_code == 400
    assert response.json()["error"] == "user_not_found"
    assert "set-cookie" not in response.headers


def test_profile_without_token_is_unauthorized(client: TestClient) -> None:
    response = client.get("/profile")

    assert response.status_code == 401
    assert response.json()["error"] == "no_token"


def test_profile_with_forged_token_is_unauthorized(make_client, login_as) -> None:
    _, identity = login_as("alice")
    forged_token = create_access_token(identity, "not-the-server-secret")

    forged = make_client()
    forged.cookies.set("token", forged_token)
    response = forged.get("/profile")

    assert response.status_code == 401
    assert response.json()["error"] == "invalid_token"


def test_logout_clears_cookie(login_as) -> None:
    user_client, _ = login_as("alice")
    assert user_client.get("/profile").status_code == 200

    response = user_client.post("/logout")

    assert response.status_code == 200
    assert response.json() == "ok"
    assert user_client.get("/profile").status_code == 401


def test_expiring_tokens_when_configured(app, settings, make_client) -> None:
    expiring = settings.model_copy(update={"jwt_expire_minutes": 30})
    app.dependency_overrides[get_settings] = lambda: expiring
    client = make_client()
    client.post("/register", json={"username": "alice", "password": "secret123"})
    client.post("/login", json={"username": "alice", "password": "secret123"})

    profile = client.get("/profile").json()

    assert profile["exp"] - profile["iat"] == 30 * 60
