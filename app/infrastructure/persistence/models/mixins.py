"""SQLAlchemy mixins for common model patterns.

Provides: CuidMixin, UnitMixin, TimestampMixin and the combined
UnitScopedModel used by every row owned by an organizational unit.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class UnitMixin:
    """Mixin for unit-scoped models. Provides organizational_unit_id FK (RESTRICT delete)."""

    @declared_attr
    def organizational_unit_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("organizational_unit.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class UnitScopedModel(CuidMixin, UnitMixin, TimestampMixin):
    """Combined mixin: CUID + organizational_unit_id + created_at/updated_at."""

    __abstract__ = True
