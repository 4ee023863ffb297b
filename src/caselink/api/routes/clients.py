"""Client routes, including helper suggestions for a client."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from caselink.dependencies import CurrentUser, get_db
from caselink.errors.exceptions import NotFoundError
from caselink.models.client import ClientCreate, ClientResponse, ClientUpdate, SuggestionResponse
from caselink.repositories.client_repo import ClientRepository
from caselink.repositories.connection_repo import ConnectionRepository
from caselink.repositories.org_repo import OrgRepository
from caselink.repositories.user_repo import UserRepository
from caselink.services.id_generator import generate_id
from caselink.services.matching import HelperCandidate, merge_with_connected, suggest_helpers
from caselink.services.policy import Action, authorize
from caselink.services.profiles import clean_needs

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Clients"])


async def _get_client(db: AsyncSession, org_id: str, client_id: str):
    client = await ClientRepository(db).get_in_org(org_id, client_id)
    if client is None:
        raise NotFoundError("Client", client_id)
    return client


@router.get("/orgs/{org_id}/clients", response_model=list[ClientResponse])
async def list_clients(org_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    authorize(user, Action.CLIENTS_MANAGE, org_id=org_id)
    return await ClientRepository(db).list_by_org(org_id)


@router.post("/orgs/{org_id}/clients", status_code=201, response_model=ClientResponse)
async def create_client(
    org_id: str,
    body: ClientCreate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    authorize(user, Action.CLIENTS_MANAGE, org_id=org_id)
    if not await OrgRepository(db).get(org_id):
        raise NotFoundError("Org", org_id)

    fields = body.model_dump(exclude={"needs"})
    fields["name"] = fields["name"].strip()
    client = await ClientRepository(db).create(
        client_id=generate_id("cli_"),
        org_id=org_id,
        needs=clean_needs(body.needs),
        **fields,
    )
    await db.commit()
    logger.info("client_created", extra={"client_id": client.client_id, "org_id": org_id})
    return client


@router.get("/orgs/{org_id}/clients/{client_id}", response_model=ClientResponse)
async def get_client(org_id: str, client_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    authorize(user, Action.CLIENTS_MANAGE, org_id=org_id)
    return await _get_client(db, org_id, client_id)


@router.patch("/orgs/{org_id}/clients/{client_id}", response_model=ClientResponse)
async def update_client(
    org_id: str,
    client_id: str,
    body: ClientUpdate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    authorize(user, Action.CLIENTS_MANAGE, org_id=org_id)
    client = await _get_client(db, org_id, client_id)

    update_fields = body.model_dump(exclude_unset=True)
    if update_fields.get("name") is None:
        update_fields.pop("name", None)
    if "needs" in update_fields:
        update_fields["needs"] = clean_needs(update_fields["needs"])
    await ClientRepository(db).update(client, **update_fields)
    await db.commit()
    return client


@router.get("/orgs/{org_id}/clients/{client_id}/suggestions", response_model=list[SuggestionResponse])
async def list_suggestions(org_id: str, client_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    """Connected helpers first, then active helpers ranked by shared need-tags."""
    authorize(user, Action.CLIENTS_MANAGE, org_id=org_id)
    client = await _get_client(db, org_id, client_id)

    users = UserRepository(db)
    helpers = await users.list_helpers(org_id)
    candidates = {
        h.user_id: HelperCandidate(
            helper_id=h.user_id,
            display_name=h.display_name,
            needs=list(h.needs or []),
            is_active=h.is_active,
        )
        for h in helpers
    }

    # Most recent connection per helper wins
    latest_status: dict[str, str] = {}
    for conn in await ConnectionRepository(db).list_by_client(client.client_id):
        latest_status.pop(conn.helper_id, None)
        latest_status[conn.helper_id] = conn.status

    connected = []
    for helper_id, status in latest_status.items():
        candidate = candidates.get(helper_id)
        if candidate is None:
            helper = await users.get(helper_id)
            if helper is None:
                continue
            candidate = HelperCandidate(
                helper_id=helper.user_id,
                display_name=helper.display_name,
                needs=list(helper.needs or []),
                is_active=helper.is_active,
            )
        connected.append((candidate, status))

    fresh = suggest_helpers(client.needs, candidates.values())
    merged = merge_with_connected(client.needs, connected, fresh)
    return [
        SuggestionResponse(
            helper_id=s.helper_id,
            display_name=s.display_name,
            score=s.score,
            matched_tags=s.matched_tags,
            connection_status=s.connection_status,
            already_connected=s.already_connected,
        )
        for s in merged
    ]
