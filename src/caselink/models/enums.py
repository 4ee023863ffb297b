"""String enums shared by the ORM rows, API models and services."""

from enum import StrEnum


class UserRole(StrEnum):
    SUPERADMIN = "superadmin"
    ORGADMIN = "orgadmin"
    SERVICEPROVIDER = "serviceprovider"


class ConnectionStatus(StrEnum):
    PENDING = "pending"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETE = "complete"
    DECLINED = "declined"


class ConnectionAction(StrEnum):
    CREATE = "create"
    ACCEPT = "accept"
    DECLINE = "decline"
    PAUSE = "pause"
    RESUME = "resume"
    COMPLETE = "complete"


class MediaType(StrEnum):
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
