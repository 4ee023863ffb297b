"""Repository for User and AuthToken records."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.models.user import AuthTokenRow, UserRow, username_key
from caselink.models.enums import UserRole
from caselink.repositories.base import BaseRepository


class UserRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, UserRow)

    async def get(self, user_id: str) -> UserRow | None:
        return await self.get_by_id("user_id", user_id)

    async def get_by_username(self, username: str) -> UserRow | None:
        """Case-insensitive lookup on the trimmed username."""
        stmt = select(UserRow).where(UserRow.username_key == username_key(username))
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_org(self, org_id: str) -> list[UserRow]:
        """Users whose primary or secondary membership includes the org, oldest first."""
        users = await self.list_all()
        return [u for u in users if u.is_member_of(org_id)]

    async def list_helpers(self, org_id: str) -> list[UserRow]:
        return [u for u in await self.list_by_org(org_id) if u.role == UserRole.SERVICEPROVIDER]

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(UserRow))
        return result.scalar_one()

    async def update_last_login(self, user: UserRow) -> None:
        user.last_login = datetime.now(timezone.utc)
        await self.session.flush()


class AuthTokenRepository(BaseRepository):
    """Opaque bearer tokens mapped to user ids. Tokens never expire."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, AuthTokenRow)

    async def issue(self, user_id: str) -> str:
        token = str(uuid.uuid4())
        await self.create(token=token, user_id=user_id)
        return token

    async def resolve(self, token: str) -> str | None:
        row = await self.get_by_id("token", token)
        return row.user_id if row else None

    async def revoke(self, token: str) -> None:
        await self.session.execute(delete(AuthTokenRow).where(AuthTokenRow.token == token))
        await self.session.flush()
