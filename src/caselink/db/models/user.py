"""User and auth token tables."""

from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from caselink.db.base import Base, TimestampMixin, UTCDateTime, utcnow


def username_key(username: str) -> str:
    """Case-insensitive form of a username, Unicode aware."""
    return username.strip().casefold()


class UserRow(Base, TimestampMixin):
    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    username: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    # Casefolded username; lookups and uniqueness go through this column
    username_key: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    org_id: Mapped[str | None] = mapped_column(String(128), ForeignKey("orgs.org_id"), nullable=True, index=True)
    # Secondary memberships (serviceprovider only); the primary org is not repeated here
    org_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    display_name: Mapped[str] = mapped_column(String(200), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    needs: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_login: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    @validates("username")
    def _sync_username_key(self, key, value: str) -> str:
        self.username_key = username_key(value)
        return value

    def membership_org_ids(self) -> list[str]:
        """Primary org followed by secondary memberships, without duplicates."""
        ids = [self.org_id] if self.org_id else []
        for org_id in self.org_ids or []:
            if org_id not in ids:
                ids.append(org_id)
        return ids

    def is_member_of(self, org_id: str) -> bool:
        return org_id in self.membership_org_ids()


class AuthTokenRow(Base):
    __tablename__ = "auth_tokens"

    token: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)
