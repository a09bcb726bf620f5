"""Task ORM model. Unit-owned work item, mutated only through change requests."""

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import TaskPriority, TaskStatus
from app.domain.task_rules import TITLE_MAX_LENGTH
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import UnitScopedModel


def _in_check(column: str, values: list[str]) -> str:
    return "{} IN ({})".format(column, ", ".join(f"'{v}'" for v in values))


class Task(UnitScopedModel, Base):
    """Task. Table: task. Soft-deleted via is_active."""

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=TaskStatus.PENDING.value,
        server_default=TaskStatus.PENDING.value,
    )
    priority: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=TaskPriority.MEDIUM.value,
        server_default=TaskPriority.MEDIUM.value,
    )
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_by_user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False
    )
    approved_by_user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False
    )
    assigned_to_user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    __table_args__ = (
        CheckConstraint(_in_check("status", TaskStatus.values()), name="task_status_check"),
        CheckConstraint(
            _in_check("priority", TaskPriority.values()), name="task_priority_check"
        ),
        Index("ix_task_unit_active", "organizational_unit_id", "is_active"),
        Index("ix_task_assigned", "organizational_unit_id", "assigned_to_user_id"),
    )
