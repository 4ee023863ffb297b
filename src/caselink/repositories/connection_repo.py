"""Repositories for connections, their audit history and engagement updates."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.models.connection import ConnectionHistoryRow, ConnectionRow, ConnectionUpdateRow
from caselink.repositories.base import BaseRepository


class ConnectionRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ConnectionRow)

    async def get(self, connection_id: str) -> ConnectionRow | None:
        return await self.get_by_id("connection_id", connection_id)

    async def list_by_org(self, org_id: str, status: str | None = None) -> list[ConnectionRow]:
        stmt = select(ConnectionRow).where(ConnectionRow.org_id == org_id)
        if status:
            stmt = stmt.where(ConnectionRow.status == status)
        stmt = stmt.order_by(ConnectionRow.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_helper(self, helper_id: str, org_id: str | None = None) -> list[ConnectionRow]:
        stmt = select(ConnectionRow).where(ConnectionRow.helper_id == helper_id)
        if org_id:
            stmt = stmt.where(ConnectionRow.org_id == org_id)
        stmt = stmt.order_by(ConnectionRow.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_client(self, client_id: str) -> list[ConnectionRow]:
        return await self.list_by_field("client_id", client_id)


class ConnectionHistoryRepository(BaseRepository):
    """Append-only audit trail of connection transitions."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, ConnectionHistoryRow)

    async def append(self, **kwargs) -> ConnectionHistoryRow:
        return await self.create(**kwargs)

    async def list_by_connection(self, connection_id: str) -> list[ConnectionHistoryRow]:
        stmt = (
            select(ConnectionHistoryRow)
            .where(ConnectionHistoryRow.connection_id == connection_id)
            .order_by(ConnectionHistoryRow.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class ConnectionUpdateRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ConnectionUpdateRow)

    async def list_by_connection(self, connection_id: str) -> list[ConnectionUpdateRow]:
        """Engagement log, most recent event first."""
        stmt = (
            select(ConnectionUpdateRow)
            .where(ConnectionUpdateRow.connection_id == connection_id)
            .order_by(ConnectionUpdateRow.event_time.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
