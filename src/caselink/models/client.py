"""Pydantic models for clients and helper suggestions."""

from datetime import datetime

from pydantic import Field

from caselink.models.common import CamelModel


class ClientCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    age: str | None = Field(None, max_length=50)
    bio: str | None = None
    address: str | None = None
    contact: str | None = Field(None, max_length=320)
    story: str | None = None
    notes: str | None = None
    needs: list[str] | None = None


class ClientUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    age: str | None = Field(None, max_length=50)
    bio: str | None = None
    address: str | None = None
    contact: str | None = Field(None, max_length=320)
    story: str | None = None
    notes: str | None = None
    needs: list[str] | None = None


class ClientResponse(CamelModel):
    client_id: str
    org_id: str
    name: str
    age: str | None = None
    bio: str | None = None
    address: str | None = None
    contact: str | None = None
    story: str | None = None
    notes: str | None = None
    needs: list[str] = Field(default_factory=list)
    created_at: datetime


class SuggestionResponse(CamelModel):
    helper_id: str
    display_name: str
    score: int
    matched_tags: list[str]
    connection_status: str | None = None
    already_connected: bool
