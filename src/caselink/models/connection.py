"""Pydantic models for connections, their history and engagement updates."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import Field, field_validator

from caselink.models.client import ClientResponse
from caselink.models.common import CamelModel
from caselink.models.enums import ConnectionAction, ConnectionStatus, MediaType
from caselink.models.user import UserSummary


# ── Request models ─────────────────────────────────────────────────────────────

class ConnectionCreate(CamelModel):
    client_id: str = Field(min_length=1)
    helper_id: str = Field(min_length=1)


class ConnectionStatusPatch(CamelModel):
    status: Literal["active", "paused", "complete"]


class MediaItem(CamelModel):
    url: str = Field(min_length=1)
    type: MediaType = MediaType.IMAGE

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_unknown_type(cls, value):
        # Unrecognized media kinds are stored as images
        if value not in {m.value for m in MediaType}:
            return MediaType.IMAGE
        return value


class ConnectionUpdateCreate(CamelModel):
    event_name: str = Field(min_length=1, max_length=200)
    event_time: datetime
    notes: str | None = None
    media: list[MediaItem] | None = None

    @field_validator("event_name")
    @classmethod
    def _strip_event_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("eventName must not be blank")
        return value

    @field_validator("event_time")
    @classmethod
    def _event_time_utc(cls, value: datetime) -> datetime:
        # Offset-less times are taken as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


# ── Response models ────────────────────────────────────────────────────────────

class ConnectionUpdateResponse(CamelModel):
    update_id: str
    connection_id: str
    event_name: str
    event_time: datetime
    notes: str | None = None
    media: list[MediaItem] | None = None
    created_by: str
    created_by_display_name: str
    created_at: datetime


class HistoryEntry(CamelModel):
    action: ConnectionAction
    from_status: ConnectionStatus | None = None
    to_status: ConnectionStatus
    actor_id: str
    actor_display_name: str
    occurred_at: datetime


class ConnectionResponse(CamelModel):
    connection_id: str
    org_id: str
    client_id: str
    helper_id: str
    status: ConnectionStatus
    created_by_id: str
    created_at: datetime
    accepted_at: datetime | None = None
    declined_at: datetime | None = None
    allowed_actions: list[ConnectionAction] = Field(default_factory=list)


class ConnectionDetail(ConnectionResponse):
    client: ClientResponse | None = None
    helper: UserSummary | None = None
    updates: list[ConnectionUpdateResponse] | None = None
    history: list[HistoryEntry] | None = None
