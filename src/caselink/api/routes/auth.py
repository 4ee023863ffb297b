"""Authentication routes: username login with opaque bearer tokens."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from caselink.dependencies import CurrentUser, get_bearer_token, get_db
from caselink.errors.exceptions import AuthenticationError
from caselink.models.user import LoginResponse, MeResponse, UserLogin
from caselink.repositories.user_repo import AuthTokenRepository, UserRepository
from caselink.services.profiles import to_user_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/auth/login", response_model=LoginResponse)
async def login(body: UserLogin, db: AsyncSession = Depends(get_db)):
    username = body.username.strip()
    if not username:
        raise AuthenticationError("Username is required")

    repo = UserRepository(db)
    user = await repo.get_by_username(username)
    if not user or not user.is_active:
        raise AuthenticationError("Unknown username")

    await repo.update_last_login(user)
    token = await AuthTokenRepository(db).issue(user.user_id)
    await db.commit()

    logger.info("user_login", extra={"user_id": user.user_id})
    return LoginResponse(user=await to_user_response(db, user), token=token)


@router.post("/auth/logout", status_code=204)
async def logout(
    user: CurrentUser,
    token: str | None = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_db),
) -> None:
    if token:
        await AuthTokenRepository(db).revoke(token)
        await db.commit()
    logger.info("user_logout", extra={"user_id": user.user_id})


@router.get("/auth/me", response_model=MeResponse)
async def me(user: CurrentUser, db: AsyncSession = Depends(get_db)):
    return MeResponse(user=await to_user_response(db, user))
