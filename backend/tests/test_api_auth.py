"""API tests for the session login flow, activity feed and health check."""

from httpx import AsyncClient

from edi_dashboard.config import settings
from edi_dashboard.models.user import User


async def test_bootstrap_admin_login_flow(client: AsyncClient) -> None:
    assert (await client.get("/api/v1/auth/status")).json()["authenticated"] is False
    assert (await client.get("/api/v1/auth/me")).status_code == 401

    login = await client.post("/api/v1/auth/login", json={"username": "admin", "password": settings.admin_password})
    assert login.status_code == 200
    assert login.json() == {"username": "admin", "role": "admin"}
    assert settings.session_cookie_name in login.cookies

    me = await client.get("/api/v1/auth/me")
    assert me.json() == {"username": "admin", "role": "admin", "permissions": {"can_view": True, "can_edit": True}}
    status = (await client.get("/api/v1/auth/status")).json()
    assert status["authenticated"] is True
    assert status["login_time"] is not None

    logout = await client.post("/api/v1/auth/logout")
    assert logout.status_code == 200
    assert (await client.get("/api/v1/auth/me")).status_code == 401


async def test_user_login_has_no_edit_permission(client: AsyncClient, regular_user: User) -> None:
    await client.post("/api/v1/auth/login", json={"username": "operator", "password": "operator-pass"})

    me = (await client.get("/api/v1/auth/me")).json()

    assert me["role"] == "user"
    assert me["permissions"] == {"can_view": True, "can_edit": False}
    assert (await client.delete("/api/v1/forecasts")).status_code == 403


async def test_failed_login(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/login", json={"username": "admin", "password": "wrong"})

    assert response.status_code == 401
    assert (await client.get("/api/v1/auth/status")).json()["authenticated"] is False


async def test_logins_appear_in_activity_feed(client: AsyncClient, regular_user: User) -> None:
    await client.post("/api/v1/auth/login", json={"username": "operator", "password": "bad"})
    await client.post("/api/v1/auth/login", json={"username": "operator", "password": "operator-pass"})

    feed = (await client.get("/api/v1/activity")).json()

    assert feed["total"] == 2
    assert [a["action"] for a in feed["activities"]] == ["LOGIN_SUCCESS", "LOGIN_FAILED"]
    assert feed["activities"][0]["username"] == "operator"
    assert feed["activities"][1]["description"] == "Failed login attempt"


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "connected"
