"""Connection, connection history and engagement update tables."""

from datetime import datetime

from sqlalchemy import ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from caselink.db.base import Base, TimestampMixin, UTCDateTime, utcnow


class ConnectionRow(Base, TimestampMixin):
    __tablename__ = "connections"

    connection_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    org_id: Mapped[str] = mapped_column(String(128), ForeignKey("orgs.org_id"), nullable=False, index=True)
    client_id: Mapped[str] = mapped_column(String(128), ForeignKey("clients.client_id"), nullable=False, index=True)
    helper_id: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    created_by_id: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False)
    accepted_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    declined_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)


class ConnectionHistoryRow(Base):
    """Append-only audit trail of connection transitions."""

    __tablename__ = "connection_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    connection_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("connections.connection_id"), nullable=False, index=True
    )
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    from_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    to_status: Mapped[str] = mapped_column(String(50), nullable=False)
    actor_id: Mapped[str] = mapped_column(String(128), nullable=False)
    actor_display_name: Mapped[str] = mapped_column(String(200), nullable=False)
    occurred_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)


class ConnectionUpdateRow(Base):
    __tablename__ = "connection_updates"

    update_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    connection_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("connections.connection_id"), nullable=False, index=True
    )
    event_name: Mapped[str] = mapped_column(String(200), nullable=False)
    event_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    media: Mapped[list | None] = mapped_column(JSON, nullable=True)
    created_by: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utcnow)
