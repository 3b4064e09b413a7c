"""Signup, login, logout and the session cookie over HTTP."""
import pytest

from rewards.core.config import get_settings
from rewards.routers import deps

from conftest import signup


@pytest.mark.asyncio
async def test_signup_returns_user_and_sets_cookie(client):
    resp = await signup(client, "alice")

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Registration successful"
    user = body["user"]
    assert user["username"] == "alice"
    assert user["email"] == "alice@example.com"
    assert user["points"] == 500
    assert user["walletConnected"] is False
    assert len(user["referralCode"]) == 10
    assert "passwordHash" not in user and "password_hash" not in user

    cookie = resp.headers["set-cookie"]
    assert cookie.startswith("sessionId=")
    assert "httponly" in cookie.lower()
    assert "samesite=lax" in cookie.lower()
    assert "max-age=604800" in cookie.lower()  # 7 days
    assert "; secure" not in cookie.lower()


@pytest.mark.asyncio
async def test_session_cookie_is_secure_in_production(client, monkeypatch):
    production = get_settings().model_copy(update={"environment": "production"})
    monkeypatch.setattr(deps, "settings", production)

    resp = await signup(client, "alice")

    assert resp.status_code == 200
    assert "; secure" in resp.headers["set-cookie"].lower()


@pytest.mark.asyncio
async def test_me_requires_session(client):
    resp = await client.get("/api/auth/me")

    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized"}


@pytest.mark.asyncio
async def test_me_after_signup(client):
    await signup(client, "alice")

    resp = await client.get("/api/auth/me")

    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "alice"


@pytest.mark.asyncio
async def test_login_with_valid_credentials(client, make_client):
    await signup(client, "alice", password="hunter22")
    other = make_client()

    resp = await other.post(
        "/api/auth/login", json={"email": "ALICE@example.com", "password": "hunter22"}
    )

    assert resp.status_code == 200
    assert resp.json()["message"] == "Login successful"
    assert (await other.get("/api/auth/me")).json()["user"]["username"] == "alice"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password",
    [("alice@example.com", "wrong-password"), ("nobody@example.com", "hunter22")],
)
async def test_login_rejects_bad_credentials(client, make_client, email, password):
    await signup(client, "alice", password="hunter22")
    other = make_client()

    resp = await other.post("/api/auth/login", json={"email": email, "password": password})

    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid credentials"}
    assert "set-cookie" not in resp.headers


@pytest.mark.asyncio
async def test_logout_invalidates_session(client):
    await signup(client, "alice")
    token = client.cookies.get("sessionId")

    resp = await client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Logout successful"}

    # replaying the old token must not work
    client.cookies.set("sessionId", token)
    assert (await client.get("/api/auth/me")).status_code == 401


@pytest.mark.asyncio
async def test_logout_requires_session(client):
    resp = await client.post("/api/auth/logout")

    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_forged_cookie_rejected(client):
    client.cookies.set("sessionId", "1")

    assert (await client.get("/api/auth/me")).status_code == 401


@pytest.mark.asyncio
async def test_signup_invalid_input(client):
    resp = await client.post(
        "/api/auth/signup",
        json={"username": "al", "email": "not-an-email", "password": "123"},
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid input"
    fields = {e["field"] for e in body["errors"]}
    assert {"username", "email", "password"} <= fields


@pytest.mark.asyncio
async def test_signup_missing_fields(client):
    resp = await client.post("/api/auth/signup", json={})

    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid input"


@pytest.mark.asyncio
async def test_signup_duplicate_email(client, make_client):
    await signup(client, "alice")

    resp = await signup(make_client(), "alice2", email="alice@example.com")

    assert resp.status_code == 400
    assert resp.json() == {"message": "User already exists"}


@pytest.mark.asyncio
async def test_signup_duplicate_username(client, make_client):
    await signup(client, "alice")

    resp = await signup(make_client(), "alice", email="other@example.com")

    assert resp.status_code == 400
    assert resp.json() == {"message": "Username already taken"}


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
