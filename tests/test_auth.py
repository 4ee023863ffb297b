"""Tests for login, logout, /auth/me and bearer-token handling."""

import pytest
from conftest import SUPERADMIN, login


@pytest.mark.asyncio
async def test_login_returns_user_and_token(client, superadmin_headers):
    r = await client.post("/api/auth/login", json={"username": f"  {SUPERADMIN.upper()} "})
    assert r.status_code == 200
    data = r.json()
    assert data["tokenType"] == "bearer"
    assert data["token"]
    assert data["user"]["role"] == "superadmin"
    assert data["user"]["username"] == SUPERADMIN


@pytest.mark.asyncio
async def test_login_unknown_username(client):
    r = await client.post("/api/auth/login", json={"username": "nobody@example.org"})
    assert r.status_code == 401
    error = r.json()["error"]
    assert error["code"] == "AUTHENTICATION_ERROR"
    assert error["traceId"] == r.headers["X-Trace-Id"]


@pytest.mark.asyncio
async def test_login_blank_username_is_rejected(client):
    r = await client.post("/api/auth/login", json={"username": "   "})
    assert r.status_code == 401

    r = await client.post("/api/auth/login", json={})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_me_requires_token(client):
    r = await client.get("/api/auth/me")
    assert r.status_code == 401

    r = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401
    assert r.json()["error"]["message"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_me_returns_current_user(client, superadmin_headers):
    r = await client.get("/api/auth/me", headers=superadmin_headers)
    assert r.status_code == 200
    assert r.json()["user"]["username"] == SUPERADMIN


@pytest.mark.asyncio
async def test_logout_revokes_token(client, superadmin_headers):
    r = await client.post("/api/auth/logout", headers=superadmin_headers)
    assert r.status_code == 204

    r = await client.get("/api/auth/me", headers=superadmin_headers)
    assert r.status_code == 401

    # A fresh login still works
    headers = await login(client, SUPERADMIN)
    assert (await client.get("/api/auth/me", headers=headers)).status_code == 200


@pytest.mark.asyncio
async def test_inactive_user_cannot_log_in_or_use_token(client, test_org):
    org_id, helper_id = test_org["org_id"], test_org["helper_id"]
    r = await client.patch(
        f"/api/orgs/{org_id}/users/{helper_id}",
        json={"isActive": False},
        headers=test_org["orgadmin"],
    )
    assert r.status_code == 200
    assert r.json()["isActive"] is False

    assert (await client.get("/api/auth/me", headers=test_org["helper"])).status_code == 401
    r = await client.post("/api/auth/login", json={"username": "sarah@testorg.org"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_non_ascii_username_login_and_uniqueness(client, test_org):
    org_id = test_org["org_id"]
    r = await client.post(
        f"/api/orgs/{org_id}/users",
        json={"username": "ZOË@testorg.org", "role": "serviceprovider", "displayName": "Zoë"},
        headers=test_org["orgadmin"],
    )
    assert r.status_code == 201
    assert r.json()["username"] == "ZOË@testorg.org"

    for typed in ("ZOË@testorg.org", "zoë@testorg.org", " Zoë@TestOrg.org "):
        r = await client.post("/api/auth/login", json={"username": typed})
        assert r.status_code == 200, typed

    r = await client.post(
        f"/api/orgs/{org_id}/users",
        json={"username": "zoë@testorg.org", "role": "serviceprovider", "displayName": "Zoë Again"},
        headers=test_org["orgadmin"],
    )
    assert r.status_code == 409
