"""Tests for internal helper ratings."""

import pytest


@pytest.mark.asyncio
async def test_rating_defaults_to_nulls(client, test_org):
    url = f"/api/orgs/{test_org['org_id']}/helpers/{test_org['helper_id']}/rating"
    r = await client.get(url, headers=test_org["orgadmin"])
    assert r.status_code == 200
    assert r.json() == {"stars": None, "notes": None}


@pytest.mark.asyncio
async def test_set_and_overwrite_rating(client, test_org):
    url = f"/api/orgs/{test_org['org_id']}/helpers/{test_org['helper_id']}/rating"
    r = await client.put(url, json={"stars": 4, "notes": "  Reliable  "}, headers=test_org["orgadmin"])
    assert r.status_code == 200
    assert r.json() == {"stars": 4, "notes": "Reliable"}

    r = await client.put(url, json={"stars": 5}, headers=test_org["orgadmin"])
    assert r.json() == {"stars": 5, "notes": None}
    assert (await client.get(url, headers=test_org["orgadmin"])).json()["stars"] == 5


@pytest.mark.asyncio
async def test_rating_bounds(client, test_org):
    url = f"/api/orgs/{test_org['org_id']}/helpers/{test_org['helper_id']}/rating"
    for stars in (0, 6):
        r = await client.put(url, json={"stars": stars}, headers=test_org["orgadmin"])
        assert r.status_code == 400


@pytest.mark.asyncio
async def test_helpers_never_see_ratings(client, test_org):
    url = f"/api/orgs/{test_org['org_id']}/helpers/{test_org['helper_id']}/rating"
    assert (await client.get(url, headers=test_org["helper"])).status_code == 403
    assert (await client.put(url, json={"stars": 5}, headers=test_org["helper"])).status_code == 403


@pytest.mark.asyncio
async def test_rating_unknown_helper(client, test_org, tenant):
    other_id = await tenant.create_org("OtherOrg")
    stranger = await tenant.add_user(other_id, "stranger@other.org", "serviceprovider", "Stranger")
    url = f"/api/orgs/{test_org['org_id']}/helpers/{stranger}/rating"
    assert (await client.get(url, headers=test_org["orgadmin"])).status_code == 404
