"""Internal helper ratings (staff only, never shown to the helper)."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from caselink.db.base import Base, TimestampMixin


class HelperRatingRow(Base, TimestampMixin):
    __tablename__ = "helper_ratings"

    org_id: Mapped[str] = mapped_column(String(128), ForeignKey("orgs.org_id"), primary_key=True)
    helper_id: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), primary_key=True)
    stars: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    rated_by: Mapped[str] = mapped_column(String(128), nullable=False)
