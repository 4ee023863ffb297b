"""Pydantic models for organizations."""

from datetime import datetime

from pydantic import EmailStr, Field

from caselink.models.common import CamelModel


# ── Request models ─────────────────────────────────────────────────────────────

class OrgCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    main_contact_name: str = Field(min_length=1, max_length=200)
    main_contact_email: EmailStr


class OrgUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    main_contact_name: str | None = Field(None, min_length=1, max_length=200)
    main_contact_email: EmailStr | None = None


# ── Response models ────────────────────────────────────────────────────────────

class OrgResponse(CamelModel):
    org_id: str
    name: str
    main_contact_name: str
    main_contact_email: str
    created_at: datetime


class OrgMetrics(CamelModel):
    clients_count: int
    helpers_count: int
    connections_count: int
    active_connections: int
    pending_connections: int


class MainContact(CamelModel):
    display_name: str
    email: str


class OrgDetail(OrgResponse):
    metrics: OrgMetrics
    main_contacts: list[MainContact]
