"""TaskChangeRequest ORM model. Proposed task mutation; kept forever as audit trail."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import ChangeRequestStatus, ChangeType
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, UnitMixin
from app.shared.utils.datetime import utc_now


class TaskChangeRequest(CuidMixin, UnitMixin, Base):
    """Change request. Table: task_change_request.

    task_id is NULL only for a CREATE that has not been approved yet.
    """

    __tablename__ = "task_change_request"

    task_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("task.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    requested_by_user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    change_type: Mapped[str] = mapped_column(String(16), nullable=False)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=ChangeRequestStatus.PENDING.value,
        server_default=ChangeRequestStatus.PENDING.value,
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    payload: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), nullable=False, default=dict
    )
    requested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    reviewed_by_user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=True
    )
    review_comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "change_type IN ({})".format(", ".join(f"'{v}'" for v in ChangeType.values())),
            name="task_change_request_type_check",
        ),
        CheckConstraint(
            "status IN ({})".format(
                ", ".join(f"'{v}'" for v in ChangeRequestStatus.values())
            ),
            name="task_change_request_status_check",
        ),
        CheckConstraint(
            "task_id IS NOT NULL OR change_type = 'CREATE'",
            name="task_change_request_task_required_check",
        ),
        Index("ix_task_change_request_unit_status", "organizational_unit_id", "status"),
    )
