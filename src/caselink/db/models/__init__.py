"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from caselink.db.models.org import OrgRow
from caselink.db.models.user import AuthTokenRow, UserRow
from caselink.db.models.client import ClientRow
from caselink.db.models.connection import (
    ConnectionHistoryRow,
    ConnectionRow,
    ConnectionUpdateRow,
)
from caselink.db.models.helper_rating import HelperRatingRow

__all__ = [
    "OrgRow",
    "UserRow",
    "AuthTokenRow",
    "ClientRow",
    "ConnectionRow",
    "ConnectionHistoryRow",
    "ConnectionUpdateRow",
    "HelperRatingRow",
]
