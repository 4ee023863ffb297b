"""Org membership and profile routes."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from caselink.dependencies import CurrentUser, get_db
from caselink.errors.exceptions import ConflictError, NotFoundError
from caselink.models.enums import UserRole
from caselink.models.user import ProfileUpdate, UserAdminUpdate, UserCreate, UserResponse
from caselink.repositories.org_repo import OrgRepository
from caselink.repositories.user_repo import UserRepository
from caselink.services.id_generator import generate_id
from caselink.services.policy import Action, authorize
from caselink.services.profiles import apply_profile_update, clean_needs, to_user_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.get("/orgs/{org_id}/users", response_model=list[UserResponse])
async def list_users(org_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    authorize(user, Action.USERS_MANAGE, org_id=org_id)
    members = await UserRepository(db).list_by_org(org_id)
    return [await to_user_response(db, m) for m in members]


@router.post("/orgs/{org_id}/users", status_code=201, response_model=UserResponse)
async def add_user(org_id: str, body: UserCreate, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    """Add an orgadmin or serviceprovider account to the org."""
    authorize(user, Action.USERS_MANAGE, org_id=org_id)
    if not await OrgRepository(db).get(org_id):
        raise NotFoundError("Org", org_id)

    repo = UserRepository(db)
    username = body.username.strip()
    if await repo.get_by_username(username):
        raise ConflictError("Username already in use")

    created = await repo.create(
        user_id=generate_id("usr_"),
        username=username,
        role=UserRole(body.role),
        org_id=org_id,
        display_name=body.display_name.strip(),
        bio=body.bio,
        needs=clean_needs(body.needs),
    )
    await db.commit()
    logger.info(
        "user_created",
        extra={"user_id": created.user_id, "org_id": org_id, "role": body.role, "actor": user.user_id},
    )
    return await to_user_response(db, created)


@router.patch("/orgs/{org_id}/users/{user_id}", response_model=UserResponse)
async def update_member(
    org_id: str,
    user_id: str,
    body: UserAdminUpdate,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Staff edit of an org member, including deactivating a helper.

    Account fields are shared by every org the member belongs to, so only
    staff of the member's primary org may change them.
    """
    authorize(user, Action.USERS_MANAGE, org_id=org_id)
    member = await UserRepository(db).get(user_id)
    if member is None or not member.is_member_of(org_id):
        raise NotFoundError("User", user_id)
    authorize(user, Action.USERS_MANAGE, org_id=member.org_id)

    await apply_profile_update(db, member, ProfileUpdate(**body.model_dump(exclude_unset=True, exclude={"is_active"})))
    if body.is_active is not None:
        await UserRepository(db).update(member, is_active=body.is_active)
    await db.commit()
    return await to_user_response(db, member)


@router.post("/orgs/{org_id}/helpers/{helper_id}/membership", response_model=UserResponse)
async def add_helper_membership(
    org_id: str,
    helper_id: str,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Add an existing helper to another org as a secondary membership."""
    authorize(user, Action.MEMBERSHIP_MANAGE, org_id=org_id)
    if not await OrgRepository(db).get(org_id):
        raise NotFoundError("Org", org_id)

    repo = UserRepository(db)
    helper = await repo.get(helper_id)
    if helper is None or helper.role != UserRole.SERVICEPROVIDER:
        raise NotFoundError("Helper", helper_id)

    if not helper.is_member_of(org_id):
        await repo.update(helper, org_ids=[*(helper.org_ids or []), org_id])
        await db.commit()
        logger.info("helper_membership_added", extra={"helper_id": helper_id, "org_id": org_id})
    return await to_user_response(db, helper)


@router.get("/users/me", response_model=UserResponse)
async def get_my_profile(user: CurrentUser, db: AsyncSession = Depends(get_db)):
    authorize(user, Action.PROFILE_MANAGE)
    return await to_user_response(db, user)


@router.patch("/users/me", response_model=UserResponse)
async def update_my_profile(body: ProfileUpdate, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    authorize(user, Action.PROFILE_MANAGE)
    await apply_profile_update(db, user, body)
    await db.commit()
    return await to_user_response(db, user)
