"""Connection workflow: creation, transitions with audit history, payload assembly."""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.models.connection import ConnectionRow, ConnectionUpdateRow
from caselink.db.models.user import UserRow
from caselink.errors.exceptions import ConflictError, NotFoundError
from caselink.models.client import ClientResponse
from caselink.models.connection import (
    ConnectionDetail,
    ConnectionResponse,
    ConnectionUpdateResponse,
    HistoryEntry,
)
from caselink.models.enums import ConnectionAction, UserRole
from caselink.models.user import UserSummary
from caselink.repositories.client_repo import ClientRepository
from caselink.repositories.connection_repo import (
    ConnectionHistoryRepository,
    ConnectionRepository,
    ConnectionUpdateRepository,
)
from caselink.repositories.user_repo import UserRepository
from caselink.services import connection_lifecycle
from caselink.services.id_generator import generate_id

logger = logging.getLogger(__name__)


async def create_connection(
    session: AsyncSession,
    org_id: str,
    client_id: str,
    helper_id: str,
    actor: UserRow,
) -> ConnectionRow:
    """Create a pending connection between a client and a helper of the same org.

    A client or helper outside ``org_id`` is reported as not found so org
    structure does not leak across tenants.
    """
    client = await ClientRepository(session).get_in_org(org_id, client_id)
    if client is None:
        raise NotFoundError("Client", client_id)

    helper = await UserRepository(session).get(helper_id)
    if helper is None or helper.role != UserRole.SERVICEPROVIDER or not helper.is_member_of(org_id):
        raise NotFoundError("Helper", helper_id)
    if not helper.is_active:
        raise ConflictError(f"Helper '{helper_id}' is inactive and cannot take new connections")

    conn = await ConnectionRepository(session).create(
        connection_id=generate_id("conn_"),
        org_id=org_id,
        client_id=client.client_id,
        helper_id=helper.user_id,
        status=connection_lifecycle.INITIAL_STATUS,
        created_by_id=actor.user_id,
    )
    await ConnectionHistoryRepository(session).append(
        connection_id=conn.connection_id,
        action=ConnectionAction.CREATE,
        from_status=None,
        to_status=conn.status,
        actor_id=actor.user_id,
        actor_display_name=actor.display_name,
    )
    logger.info(
        "connection_created",
        extra={"connection_id": conn.connection_id, "org_id": org_id, "actor": actor.user_id},
    )
    return conn


async def apply_transition(
    session: AsyncSession,
    conn: ConnectionRow,
    action: ConnectionAction,
    actor: UserRow,
) -> ConnectionRow:
    """Move ``conn`` along the lifecycle table and append a history entry.

    Raises InvalidTransitionError when the table does not allow ``action``.
    """
    previous = conn.status
    target = connection_lifecycle.next_status(previous, action)
    now = datetime.now(timezone.utc)

    fields: dict = {"status": target}
    if action == ConnectionAction.ACCEPT:
        fields["accepted_at"] = now
    elif action == ConnectionAction.DECLINE:
        fields["declined_at"] = now
    await ConnectionRepository(session).update(conn, **fields)

    await ConnectionHistoryRepository(session).append(
        connection_id=conn.connection_id,
        action=action,
        from_status=previous,
        to_status=target,
        actor_id=actor.user_id,
        actor_display_name=actor.display_name,
        occurred_at=now,
    )
    logger.info(
        "connection_transition",
        extra={
            "connection_id": conn.connection_id,
            "action": str(action),
            "from_status": previous,
            "to_status": str(target),
            "actor": actor.user_id,
        },
    )
    return conn


async def add_update(
    session: AsyncSession,
    conn: ConnectionRow,
    actor: UserRow,
    event_name: str,
    event_time: datetime,
    notes: str | None,
    media: list[dict] | None,
) -> ConnectionUpdateRow:
    notes = notes.strip() if notes else None
    return await ConnectionUpdateRepository(session).create(
        update_id=generate_id("upd_"),
        connection_id=conn.connection_id,
        event_name=event_name,
        event_time=event_time,
        notes=notes or None,
        media=media or None,
        created_by=actor.user_id,
    )


# ── Payload assembly ───────────────────────────────────────────────────────────

def to_response(conn: ConnectionRow) -> ConnectionResponse:
    return ConnectionResponse.model_validate(conn).model_copy(
        update={"allowed_actions": connection_lifecycle.allowed_actions(conn.status)}
    )


async def update_responses(
    session: AsyncSession, updates: list[ConnectionUpdateRow]
) -> list[ConnectionUpdateResponse]:
    users = UserRepository(session)
    out = []
    for update in updates:
        creator = await users.get(update.created_by)
        out.append(
            ConnectionUpdateResponse(
                update_id=update.update_id,
                connection_id=update.connection_id,
                event_name=update.event_name,
                event_time=update.event_time,
                notes=update.notes,
                media=update.media,
                created_by=update.created_by,
                created_by_display_name=creator.display_name if creator else "Staff",
                created_at=update.created_at,
            )
        )
    return out


async def build_detail(
    session: AsyncSession,
    conn: ConnectionRow,
    *,
    include_helper: bool = True,
    include_updates: bool = True,
    include_history: bool = False,
) -> ConnectionDetail:
    client = await ClientRepository(session).get(conn.client_id)
    detail = ConnectionDetail(
        **to_response(conn).model_dump(),
        client=ClientResponse.model_validate(client) if client else None,
    )

    if include_helper:
        helper = await UserRepository(session).get(conn.helper_id)
        detail.helper = UserSummary.model_validate(helper) if helper else None
    if include_updates:
        rows = await ConnectionUpdateRepository(session).list_by_connection(conn.connection_id)
        detail.updates = await update_responses(session, rows)
    if include_history:
        rows = await ConnectionHistoryRepository(session).list_by_connection(conn.connection_id)
        detail.history = [HistoryEntry.model_validate(r) for r in rows]
    return detail
