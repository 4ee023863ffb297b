"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.engine import create_all, create_db_engine, create_session_factory
from caselink.db.models.user import UserRow
from caselink.models.enums import UserRole
from caselink.services.id_generator import generate_id

SUPERADMIN = "root@platform.org"


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_db_engine("sqlite+aiosqlite:///:memory:")
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    async with create_session_factory(db_engine)() as session:
        yield session


@pytest.fixture
def app(db_engine):
    """Create a test application instance with in-memory DB (no demo seed)."""
    from caselink.main import create_app

    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = create_session_factory(db_engine)
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def login(client: AsyncClient, username: str) -> dict:
    """Log in and return Authorization headers for the user."""
    r = await client.post("/api/auth/login", json={"username": username})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
async def superadmin_headers(client, db_session: AsyncSession) -> dict:
    """Insert the platform superadmin directly and log in as them."""
    db_session.add(
        UserRow(
            user_id=generate_id("usr_"),
            username=SUPERADMIN,
            role=UserRole.SUPERADMIN,
            org_id=None,
            display_name="Platform Admin",
        )
    )
    await db_session.commit()
    return await login(client, SUPERADMIN)


class Tenant:
    """One org with an orgadmin, a helper and a client, built through the API."""

    def __init__(self, client: AsyncClient, admin_headers: dict):
        self.client = client
        self.admin_headers = admin_headers

    async def create_org(self, name: str) -> str:
        r = await self.client.post(
            "/api/orgs",
            json={"name": name, "mainContactName": f"{name} Contact", "mainContactEmail": "contact@example.org"},
            headers=self.admin_headers,
        )
        assert r.status_code == 201, r.text
        return r.json()["orgId"]

    async def add_user(self, org_id: str, username: str, role: str, display_name: str, needs=None, headers=None) -> str:
        r = await self.client.post(
            f"/api/orgs/{org_id}/users",
            json={"username": username, "role": role, "displayName": display_name, "needs": needs or []},
            headers=headers or self.admin_headers,
        )
        assert r.status_code == 201, r.text
        return r.json()["userId"]

    async def add_client(self, org_id: str, name: str, needs=None, headers=None) -> str:
        r = await self.client.post(
            f"/api/orgs/{org_id}/clients",
            json={"name": name, "needs": needs or []},
            headers=headers or self.admin_headers,
        )
        assert r.status_code == 201, r.text
        return r.json()["clientId"]

    async def connect(self, org_id: str, client_id: str, helper_id: str, headers=None) -> str:
        r = await self.client.post(
            f"/api/orgs/{org_id}/connections",
            json={"clientId": client_id, "helperId": helper_id},
            headers=headers or self.admin_headers,
        )
        assert r.status_code == 201, r.text
        return r.json()["connectionId"]


@pytest.fixture
async def tenant(client, superadmin_headers):
    return Tenant(client, superadmin_headers)


@pytest.fixture
async def test_org(tenant, client):
    """TestOrg with orgadmin, helper Sarah Martinez and client Margaret Thompson."""
    org_id = await tenant.create_org("TestOrg")
    await tenant.add_user(org_id, "orgadmin@testorg.org", "orgadmin", "Org Admin")
    helper_id = await tenant.add_user(
        org_id, "sarah@testorg.org", "serviceprovider", "Sarah Martinez",
        needs=["Employment", "Housing", "Life skills"],
    )
    client_id = await tenant.add_client(org_id, "Margaret Thompson", needs=["Employment", "Housing"])
    return {
        "org_id": org_id,
        "helper_id": helper_id,
        "client_id": client_id,
        "orgadmin": await login(client, "orgadmin@testorg.org"),
        "helper": await login(client, "sarah@testorg.org"),
    }
