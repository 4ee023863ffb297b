"""Pydantic models for users and authentication."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from caselink.models.common import CamelModel
from caselink.models.enums import UserRole


# ── Request models ─────────────────────────────────────────────────────────────

class UserLogin(CamelModel):
    username: str = Field(min_length=1, max_length=320)


class UserCreate(CamelModel):
    username: str = Field(min_length=1, max_length=320)
    role: Literal["orgadmin", "serviceprovider"]
    display_name: str = Field(min_length=1, max_length=200)
    bio: str | None = None
    needs: list[str] | None = None


class ProfileUpdate(CamelModel):
    display_name: str | None = Field(None, min_length=1, max_length=200)
    bio: str | None = None
    needs: list[str] | None = None


class UserAdminUpdate(ProfileUpdate):
    """Staff edit of an org member; adds the active flag."""

    is_active: bool | None = None


# ── Response models ────────────────────────────────────────────────────────────

class UserResponse(CamelModel):
    user_id: str
    username: str
    role: UserRole
    org_id: str | None
    org_ids: list[str] = Field(default_factory=list)
    org_names: list[str] | None = None
    display_name: str
    bio: str | None = None
    needs: list[str] = Field(default_factory=list)
    is_active: bool = True
    created_at: datetime


class UserSummary(CamelModel):
    """Helper/creator details embedded in connection payloads."""

    user_id: str
    display_name: str
    bio: str | None = None
    needs: list[str] = Field(default_factory=list)


class LoginResponse(CamelModel):
    user: UserResponse
    token: str
    token_type: Literal["bearer"] = "bearer"


class MeResponse(CamelModel):
    user: UserResponse
