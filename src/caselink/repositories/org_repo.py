"""Organization repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.models.org import OrgRow
from caselink.repositories.base import BaseRepository


class OrgRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, OrgRow)

    async def get(self, org_id: str) -> OrgRow | None:
        return await self.get_by_id("org_id", org_id)

    async def get_many(self, org_ids: list[str]) -> list[OrgRow]:
        """Fetch orgs by id, preserving the order of ``org_ids`` and skipping unknown ids."""
        rows = {}
        for org_id in org_ids:
            org = await self.get(org_id)
            if org:
                rows[org_id] = org
        return [rows[org_id] for org_id in org_ids if org_id in rows]
