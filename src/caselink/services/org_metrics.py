"""Org dashboard metrics."""

from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.models.org import OrgRow
from caselink.models.enums import ConnectionStatus, UserRole
from caselink.models.org import MainContact, OrgDetail, OrgMetrics, OrgResponse
from caselink.repositories.client_repo import ClientRepository
from caselink.repositories.connection_repo import ConnectionRepository
from caselink.repositories.user_repo import UserRepository


async def build_org_detail(org: OrgRow, session: AsyncSession) -> OrgDetail:
    """Org record plus counts and the contacts shown on its dashboard.

    Main contacts are the org's orgadmins; the org's own contact fields are
    the fallback when it has none.
    """
    clients = await ClientRepository(session).list_by_org(org.org_id)
    connections = await ConnectionRepository(session).list_by_org(org.org_id)
    users = await UserRepository(session).list_by_org(org.org_id)

    helpers = [u for u in users if u.role == UserRole.SERVICEPROVIDER]
    org_admins = [u for u in users if u.role == UserRole.ORGADMIN]

    metrics = OrgMetrics(
        clients_count=len(clients),
        helpers_count=len(helpers),
        connections_count=len(connections),
        active_connections=sum(1 for c in connections if c.status == ConnectionStatus.ACTIVE),
        pending_connections=sum(1 for c in connections if c.status == ConnectionStatus.PENDING),
    )

    if org_admins:
        contacts = [MainContact(display_name=a.display_name, email=a.username) for a in org_admins]
    else:
        contacts = [MainContact(display_name=org.main_contact_name, email=org.main_contact_email)]

    return OrgDetail(
        **OrgResponse.model_validate(org).model_dump(),
        metrics=metrics,
        main_contacts=contacts,
    )
