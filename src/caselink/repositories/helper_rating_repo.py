"""Helper rating repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.models.helper_rating import HelperRatingRow
from caselink.repositories.base import BaseRepository


class HelperRatingRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, HelperRatingRow)

    async def get(self, org_id: str, helper_id: str) -> HelperRatingRow | None:
        stmt = select(HelperRatingRow).where(
            HelperRatingRow.org_id == org_id,
            HelperRatingRow.helper_id == helper_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, org_id: str, helper_id: str, stars: int, notes: str | None, rated_by: str) -> HelperRatingRow:
        row = await self.get(org_id, helper_id)
        if row:
            return await self.update(row, stars=stars, notes=notes, rated_by=rated_by)
        return await self.create(
            org_id=org_id,
            helper_id=helper_id,
            stars=stars,
            notes=notes,
            rated_by=rated_by,
        )
