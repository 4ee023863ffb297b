"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.models.user import UserRow
from caselink.errors.exceptions import AuthenticationError
from caselink.repositories.user_repo import UserRepository


async def get_db(request: Request) -> AsyncGenerator:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


def get_bearer_token(request: Request) -> str | None:
    return getattr(request.state, "token", None)


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> UserRow:
    """Return the authenticated user row or raise 401."""
    user = getattr(request.state, "user", {})
    if "_auth_error" in user:
        raise AuthenticationError(user["_auth_error"])
    if not user or user.get("sub") in ("anonymous", ""):
        raise AuthenticationError("Authentication required")

    row = await UserRepository(db).get(user["sub"])
    if row is None or not row.is_active:
        raise AuthenticationError("Invalid or expired token")
    return row


# Type aliases for dependency injection
CurrentUser = Annotated[UserRow, Depends(get_current_user)]
