"""Organization table for multi-tenancy."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from caselink.db.base import Base, TimestampMixin


class OrgRow(Base, TimestampMixin):
    __tablename__ = "orgs"

    org_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    main_contact_name: Mapped[str] = mapped_column(String(200), nullable=False)
    main_contact_email: Mapped[str] = mapped_column(String(320), nullable=False)
