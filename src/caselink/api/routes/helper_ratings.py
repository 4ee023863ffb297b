"""Internal helper ratings (staff only; never exposed to the helper)."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.models.user import UserRow
from caselink.dependencies import CurrentUser, get_db
from caselink.errors.exceptions import NotFoundError
from caselink.models.enums import UserRole
from caselink.models.helper_rating import HelperRatingResponse, HelperRatingSet
from caselink.repositories.helper_rating_repo import HelperRatingRepository
from caselink.repositories.user_repo import UserRepository
from caselink.services.policy import Action, authorize

logger = logging.getLogger(__name__)

router = APIRouter(tags=["HelperRatings"])


async def _get_helper(db: AsyncSession, org_id: str, helper_id: str) -> UserRow:
    helper = await UserRepository(db).get(helper_id)
    if helper is None or helper.role != UserRole.SERVICEPROVIDER or not helper.is_member_of(org_id):
        raise NotFoundError("Helper", helper_id)
    return helper


@router.get("/orgs/{org_id}/helpers/{helper_id}/rating", response_model=HelperRatingResponse)
async def get_rating(org_id: str, helper_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    authorize(user, Action.RATINGS_MANAGE, org_id=org_id)
    await _get_helper(db, org_id, helper_id)
    rating = await HelperRatingRepository(db).get(org_id, helper_id)
    if rating is None:
        return HelperRatingResponse()
    return HelperRatingResponse(stars=rating.stars, notes=rating.notes)


@router.put("/orgs/{org_id}/helpers/{helper_id}/rating", response_model=HelperRatingResponse)
async def set_rating(
    org_id: str,
    helper_id: str,
    body: HelperRatingSet,
    user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    authorize(user, Action.RATINGS_MANAGE, org_id=org_id)
    await _get_helper(db, org_id, helper_id)
    notes = body.notes.strip() if body.notes else None
    rating = await HelperRatingRepository(db).upsert(
        org_id, helper_id, stars=body.stars, notes=notes or None, rated_by=user.user_id
    )
    await db.commit()
    logger.info("helper_rated", extra={"org_id": org_id, "helper_id": helper_id, "actor": user.user_id})
    return HelperRatingResponse(stars=rating.stars, notes=rating.notes)
