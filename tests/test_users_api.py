"""Tests for org membership, helper memberships and profiles."""

import pytest
from conftest import login


@pytest.mark.asyncio
async def test_duplicate_username_conflicts(client, test_org):
    r = await client.post(
        f"/api/orgs/{test_org['org_id']}/users",
        json={"username": "SARAH@testorg.org", "role": "serviceprovider", "displayName": "Sarah Again"},
        headers=test_org["orgadmin"],
    )
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
async def test_cannot_create_superadmin_through_org(client, test_org):
    r = await client.post(
        f"/api/orgs/{test_org['org_id']}/users",
        json={"username": "boss@testorg.org", "role": "superadmin", "displayName": "Boss"},
        headers=test_org["orgadmin"],
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_list_org_users(client, test_org):
    r = await client.get(f"/api/orgs/{test_org['org_id']}/users", headers=test_org["orgadmin"])
    assert r.status_code == 200
    users = r.json()
    assert [u["displayName"] for u in users] == ["Org Admin", "Sarah Martinez"]
    assert all(u["orgNames"] == ["TestOrg"] for u in users)


@pytest.mark.asyncio
async def test_secondary_membership(client, test_org, tenant, superadmin_headers):
    other_id = await tenant.create_org("OtherOrg")
    helper_id = test_org["helper_id"]

    r = await client.post(f"/api/orgs/{other_id}/helpers/{helper_id}/membership", headers=test_org["orgadmin"])
    assert r.status_code == 403

    r = await client.post(f"/api/orgs/{other_id}/helpers/{helper_id}/membership", headers=superadmin_headers)
    assert r.status_code == 200
    assert r.json()["orgIds"] == [other_id]
    assert r.json()["orgNames"] == ["TestOrg", "OtherOrg"]

    # Idempotent
    r = await client.post(f"/api/orgs/{other_id}/helpers/{helper_id}/membership", headers=superadmin_headers)
    assert r.json()["orgIds"] == [other_id]

    r = await client.get(f"/api/orgs/{other_id}/users", headers=superadmin_headers)
    assert [u["userId"] for u in r.json()] == [helper_id]


@pytest.mark.asyncio
async def test_profile_get_and_update(client, test_org):
    headers = test_org["helper"]
    r = await client.get("/api/users/me", headers=headers)
    assert r.status_code == 200
    assert r.json()["displayName"] == "Sarah Martinez"

    r = await client.patch(
        "/api/users/me",
        json={"bio": "Job coach", "needs": ["Employment", "  "]},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["bio"] == "Job coach"
    assert r.json()["needs"] == ["Employment"]
    assert r.json()["displayName"] == "Sarah Martinez"


@pytest.mark.asyncio
async def test_orgadmin_cannot_edit_users_elsewhere(client, test_org, tenant):
    other_id = await tenant.create_org("OtherOrg")
    stranger = await tenant.add_user(other_id, "stranger@other.org", "serviceprovider", "Stranger")

    r = await client.patch(
        f"/api/orgs/{test_org['org_id']}/users/{stranger}",
        json={"isActive": False},
        headers=test_org["orgadmin"],
    )
    assert r.status_code == 404

    r = await client.patch(
        f"/api/orgs/{other_id}/users/{stranger}",
        json={"isActive": False},
        headers=test_org["orgadmin"],
    )
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_secondary_org_admin_cannot_edit_shared_helper(client, test_org, tenant):
    other_id = await tenant.create_org("OtherOrg")
    helper_id = test_org["helper_id"]
    await client.post(f"/api/orgs/{other_id}/helpers/{helper_id}/membership", headers=tenant.admin_headers)
    await tenant.add_user(other_id, "admin@other.org", "orgadmin", "Other Admin")
    other_admin = await login(client, "admin@other.org")

    r = await client.patch(
        f"/api/orgs/{other_id}/users/{helper_id}",
        json={"isActive": False, "displayName": "Renamed by OtherOrg"},
        headers=other_admin,
    )
    assert r.status_code == 403

    me = (await client.get("/api/users/me", headers=test_org["helper"])).json()
    assert me["displayName"] == "Sarah Martinez"
    assert me["isActive"] is True

    # Staff of the primary org and superadmins still can
    r = await client.patch(
        f"/api/orgs/{other_id}/users/{helper_id}",
        json={"bio": "Updated by platform"},
        headers=tenant.admin_headers,
    )
    assert r.status_code == 200
    r = await client.patch(
        f"/api/orgs/{test_org['org_id']}/users/{helper_id}",
        json={"bio": "Updated by TestOrg"},
        headers=test_org["orgadmin"],
    )
    assert r.status_code == 200
