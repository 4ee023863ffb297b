"""Connection lifecycle routes."""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.models.connection import ConnectionRow
from caselink.dependencies import CurrentUser, get_db
from caselink.errors.exceptions import NotFoundError
from caselink.models.connection import (
    ConnectionCreate,
    ConnectionDetail,
    ConnectionResponse,
    ConnectionStatusPatch,
    ConnectionUpdateCreate,
    ConnectionUpdateResponse,
)
from caselink.models.enums import ConnectionAction, ConnectionStatus
from caselink.repositories.connection_repo import ConnectionRepository
from caselink.services import connection_lifecycle, connection_service
from caselink.services.policy import Action, authorize

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Connections"])


async def _get_connection(db: AsyncSession, connection_id: str) -> ConnectionRow:
    conn = await ConnectionRepository(db).get(connection_id)
    if conn is None:
        raise NotFoundError("Connection", connection_id)
    return conn


@router.get("/orgs/{org_id}/connections", response_model=list[ConnectionDetail])
async def list_org_connections(
    org_id: str,
    user: CurrentUser,
    status: ConnectionStatus | None = None,
    db: AsyncSession = Depends(get_db),
):
    authorize(user, Action.CONNECTIONS_MANAGE, org_id=org_id)
    conns = await ConnectionRepository(db).list_by_org(org_id, status=status)
    return [await connection_service.build_detail(db, c) for c in conns]


@router.post("/orgs/{org_id}/connections", status_code=201, response_model=ConnectionDetail)
async def create_connection(
    org_id: str,
    body: ConnectionCreate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    authorize(user, Action.CONNECTIONS_MANAGE, org_id=org_id)
    conn = await connection_service.create_connection(db, org_id, body.client_id, body.helper_id, user)
    await db.commit()
    return await connection_service.build_detail(db, conn, include_updates=False)


@router.get("/connections/me", response_model=list[ConnectionDetail])
async def my_connections(
    user: CurrentUser,
    org_id: str | None = Query(None, alias="orgId"),
    db: AsyncSession = Depends(get_db),
):
    """Connections where the caller is the helper, optionally narrowed to one org."""
    authorize(user, Action.CONNECTIONS_MINE)
    org_filter = org_id.strip() if org_id and org_id.strip() else None
    conns = await ConnectionRepository(db).list_by_helper(user.user_id, org_id=org_filter)
    return [
        await connection_service.build_detail(db, c, include_helper=False, include_updates=False)
        for c in conns
    ]


@router.get("/connections/{connection_id}", response_model=ConnectionDetail)
async def get_connection(connection_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    conn = await _get_connection(db, connection_id)
    authorize(user, Action.CONNECTION_VIEW, connection=conn)
    return await connection_service.build_detail(db, conn, include_history=True)


@router.patch("/connections/{connection_id}/accept", response_model=ConnectionResponse)
async def accept_connection(connection_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    conn = await _get_connection(db, connection_id)
    authorize(user, Action.CONNECTION_RESPOND, connection=conn)
    await connection_service.apply_transition(db, conn, ConnectionAction.ACCEPT, user)
    await db.commit()
    return connection_service.to_response(conn)


@router.patch("/connections/{connection_id}/decline", response_model=ConnectionResponse)
async def decline_connection(connection_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    conn = await _get_connection(db, connection_id)
    authorize(user, Action.CONNECTION_RESPOND, connection=conn)
    await connection_service.apply_transition(db, conn, ConnectionAction.DECLINE, user)
    await db.commit()
    return connection_service.to_response(conn)


@router.patch("/connections/{connection_id}/status", response_model=ConnectionResponse)
async def update_connection_status(
    connection_id: str,
    body: ConnectionStatusPatch,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Pause, resume or complete a connection."""
    conn = await _get_connection(db, connection_id)
    authorize(user, Action.CONNECTION_STATUS, connection=conn)
    action = connection_lifecycle.action_for_target(conn.status, body.status)
    await connection_service.apply_transition(db, conn, action, user)
    await db.commit()
    return connection_service.to_response(conn)


@router.post(
    "/connections/{connection_id}/updates",
    status_code=201,
    response_model=ConnectionUpdateResponse,
)
async def add_connection_update(
    connection_id: str,
    body: ConnectionUpdateCreate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Log a session/engagement update; only the connection's helper may."""
    conn = await _get_connection(db, connection_id)
    authorize(user, Action.CONNECTION_LOG, connection=conn)
    update = await connection_service.add_update(
        db,
        conn,
        user,
        event_name=body.event_name,
        event_time=body.event_time,
        notes=body.notes,
        media=[m.model_dump(mode="json") for m in body.media] if body.media else None,
    )
    await db.commit()
    logger.info("connection_update_added", extra={"connection_id": connection_id, "update_id": update.update_id})
    return (await connection_service.update_responses(db, [update]))[0]
