"""Client repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.models.client import ClientRow
from caselink.repositories.base import BaseRepository


class ClientRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ClientRow)

    async def get(self, client_id: str) -> ClientRow | None:
        return await self.get_by_id("client_id", client_id)

    async def get_in_org(self, org_id: str, client_id: str) -> ClientRow | None:
        """Return the client only when it belongs to ``org_id``."""
        client = await self.get(client_id)
        if client is None or client.org_id != org_id:
            return None
        return client

    async def list_by_org(self, org_id: str) -> list[ClientRow]:
        return await self.list_by_field("org_id", org_id)
