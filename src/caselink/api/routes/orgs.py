"""Organization routes."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from caselink.dependencies import CurrentUser, get_db
from caselink.errors.exceptions import NotFoundError
from caselink.models.org import OrgCreate, OrgDetail, OrgResponse, OrgUpdate
from caselink.repositories.org_repo import OrgRepository
from caselink.services.id_generator import generate_id
from caselink.services.org_metrics import build_org_detail
from caselink.services.policy import Action, authorize

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Orgs"])


@router.get("/orgs", response_model=list[OrgResponse])
async def list_orgs(user: CurrentUser, db: AsyncSession = Depends(get_db)):
    authorize(user, Action.ORGS_MANAGE)
    return await OrgRepository(db).list_all()


@router.post("/orgs", status_code=201, response_model=OrgResponse)
async def create_org(body: OrgCreate, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    authorize(user, Action.ORGS_MANAGE)
    org = await OrgRepository(db).create(
        org_id=generate_id("org_"),
        name=body.name.strip(),
        main_contact_name=body.main_contact_name.strip(),
        main_contact_email=str(body.main_contact_email),
    )
    await db.commit()
    logger.info("org_created", extra={"org_id": org.org_id, "actor": user.user_id})
    return org


@router.get("/orgs/{org_id}", response_model=OrgDetail)
async def get_org(org_id: str, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    authorize(user, Action.ORG_VIEW, org_id=org_id)
    org = await OrgRepository(db).get(org_id)
    if not org:
        raise NotFoundError("Org", org_id)
    return await build_org_detail(org, db)


@router.patch("/orgs/{org_id}", response_model=OrgResponse)
async def update_org(org_id: str, body: OrgUpdate, user: CurrentUser, db: AsyncSession = Depends(get_db)):
    authorize(user, Action.ORG_UPDATE, org_id=org_id)
    repo = OrgRepository(db)
    org = await repo.get(org_id)
    if not org:
        raise NotFoundError("Org", org_id)

    update_fields = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    if "main_contact_email" in update_fields:
        update_fields["main_contact_email"] = str(update_fields["main_contact_email"])
    await repo.update(org, **update_fields)
    await db.commit()
    return org
