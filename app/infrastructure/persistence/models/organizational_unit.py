"""OrganizationalUnit ORM model. Isolation boundary for every read and write."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class OrganizationalUnit(CuidMixin, TimestampMixin, Base):
    """Organizational unit. Table: organizational_unit. Unique name and code."""

    __tablename__ = "organizational_unit"

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
