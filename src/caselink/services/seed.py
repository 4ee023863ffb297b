"""Demo tenant seeded on startup so the UI has something to show."""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from caselink.models.enums import ConnectionAction, ConnectionStatus, UserRole
from caselink.repositories.client_repo import ClientRepository
from caselink.repositories.connection_repo import ConnectionHistoryRepository, ConnectionRepository
from caselink.repositories.org_repo import OrgRepository
from caselink.repositories.user_repo import UserRepository
from caselink.services.id_generator import generate_id

logger = logging.getLogger(__name__)

SUPERADMIN_USERNAME = "superadmin@mmi.org"
ORGADMIN_USERNAME = "orgadmin@testorg.org"

_CLIENTS = [
    (
        "Margaret Thompson",
        "34 years old",
        "Seeking a mentor for employment readiness, housing, and accountability.",
        ["Employment", "Housing", "Life skills"],
    ),
    (
        "Robert Chen",
        "28 years old",
        "Looking for a mentor to support job readiness and stable housing.",
        ["Employment", "Housing"],
    ),
    (
        "Patricia Davis",
        "41 years old",
        "Seeking mentorship for life skills and planning.",
        ["Life skills", "Accountability"],
    ),
]


async def seed_demo_data(session: AsyncSession) -> bool:
    """Create the demo tenant. Skipped (returns False) when any user exists."""
    users = UserRepository(session)
    if await users.count() > 0:
        return False

    orgs = OrgRepository(session)
    clients = ClientRepository(session)
    connections = ConnectionRepository(session)
    history = ConnectionHistoryRepository(session)

    await users.create(
        user_id=generate_id("usr_"),
        username=SUPERADMIN_USERNAME,
        role=UserRole.SUPERADMIN,
        org_id=None,
        display_name="MMI Admin",
    )

    test_org = await orgs.create(
        org_id=generate_id("org_"),
        name="TestOrg",
        main_contact_name="Jane Doe",
        main_contact_email="jane@testorg.org",
    )
    other_org = await orgs.create(
        org_id=generate_id("org_"),
        name="OtherOrg",
        main_contact_name="Other Contact",
        main_contact_email="other@example.org",
    )

    orgadmin = await users.create(
        user_id=generate_id("usr_"),
        username=ORGADMIN_USERNAME,
        role=UserRole.ORGADMIN,
        org_id=test_org.org_id,
        display_name="Org Admin",
    )

    sarah = await users.create(
        user_id=generate_id("usr_"),
        username="sarah.martinez@example.com",
        role=UserRole.SERVICEPROVIDER,
        org_id=test_org.org_id,
        org_ids=[other_org.org_id],
        display_name="Sarah Martinez",
        bio="Mentors clients on employment, housing, and life skills.",
        needs=["Employment", "Housing", "Life skills"],
    )
    await users.create(
        user_id=generate_id("usr_"),
        username="james.wilson@example.com",
        role=UserRole.SERVICEPROVIDER,
        org_id=test_org.org_id,
        display_name="James Wilson",
        bio="Mentors on job readiness and workplace skills.",
        needs=["Employment", "Life skills"],
    )

    seeded_clients = []
    for name, age, bio, needs in _CLIENTS:
        seeded_clients.append(
            await clients.create(
                client_id=generate_id("cli_"),
                org_id=test_org.org_id,
                name=name,
                age=age,
                bio=bio,
                needs=needs,
            )
        )
    margaret, robert, _ = seeded_clients

    now = datetime.now(timezone.utc)
    active = await connections.create(
        connection_id=generate_id("conn_"),
        org_id=test_org.org_id,
        client_id=margaret.client_id,
        helper_id=sarah.user_id,
        status=ConnectionStatus.ACTIVE,
        created_by_id=orgadmin.user_id,
        accepted_at=now,
    )
    pending = await connections.create(
        connection_id=generate_id("conn_"),
        org_id=test_org.org_id,
        client_id=robert.client_id,
        helper_id=sarah.user_id,
        status=ConnectionStatus.PENDING,
        created_by_id=orgadmin.user_id,
    )

    for conn in (active, pending):
        await history.append(
            connection_id=conn.connection_id,
            action=ConnectionAction.CREATE,
            from_status=None,
            to_status=ConnectionStatus.PENDING,
            actor_id=orgadmin.user_id,
            actor_display_name=orgadmin.display_name,
            occurred_at=now,
        )
    await history.append(
        connection_id=active.connection_id,
        action=ConnectionAction.ACCEPT,
        from_status=ConnectionStatus.PENDING,
        to_status=ConnectionStatus.ACTIVE,
        actor_id=sarah.user_id,
        actor_display_name=sarah.display_name,
        occurred_at=now,
    )

    logger.info("Seeded demo tenant", extra={"org_id": test_org.org_id})
    return True
