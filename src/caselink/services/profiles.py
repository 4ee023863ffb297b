"""User payloads and profile edits."""

from sqlalchemy.ext.asyncio import AsyncSession

from caselink.db.models.user import UserRow
from caselink.models.user import ProfileUpdate, UserResponse
from caselink.repositories.org_repo import OrgRepository
from caselink.repositories.user_repo import UserRepository


async def to_user_response(session: AsyncSession, user: UserRow) -> UserResponse:
    """Serialize a user with the names of every org it belongs to."""
    orgs = await OrgRepository(session).get_many(user.membership_org_ids())
    return UserResponse.model_validate(user).model_copy(
        update={"org_names": [o.name for o in orgs]}
    )


def clean_needs(needs: list[str] | None) -> list[str]:
    """Trim need-tags for storage, dropping blanks; display casing is kept."""
    return [n.strip() for n in needs or [] if n and n.strip()]


async def apply_profile_update(session: AsyncSession, user: UserRow, body: ProfileUpdate) -> UserRow:
    fields = body.model_dump(exclude_unset=True)
    if "display_name" in fields and fields["display_name"] is not None:
        fields["display_name"] = fields["display_name"].strip()
    if "display_name" in fields and not fields["display_name"]:
        fields.pop("display_name")
    if "needs" in fields:
        fields["needs"] = clean_needs(fields["needs"])
    return await UserRepository(session).update(user, **fields)
