"""Change request repository: insert, locked read, status compare-and-swap and projections."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.application.dtos.change_request import ChangeRequestResult, ChangeRequestView
from app.domain.enums import ChangeRequestStatus
from app.infrastructure.persistence.models.change_request import TaskChangeRequest
from app.infrastructure.persistence.models.organizational_unit import (
    OrganizationalUnit,
)
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_db_errors,
)
from app.shared.utils.datetime import ensure_utc


def _to_result(cr: TaskChangeRequest) -> ChangeRequestResult:
    return ChangeRequestResult(
        id=cr.id,
        organizational_unit_id=cr.organizational_unit_id,
        task_id=cr.task_id,
        requested_by_user_id=cr.requested_by_user_id,
        change_type=cr.change_type,
        status=cr.status,
        reason=cr.reason,
        payload=dict(cr.payload or {}),
        requested_at=ensure_utc(cr.requested_at),
        reviewed_at=ensure_utc(cr.reviewed_at),
        reviewed_by_user_id=cr.reviewed_by_user_id,
        review_comment=cr.review_comment,
    )


class ChangeRequestRepository(BaseRepository[TaskChangeRequest]):
    """Change request repository. Implements IChangeRequestRepository."""

    resource_type = "change_request"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TaskChangeRequest)

    async def create(
        self,
        *,
        unit_id: str,
        requested_by_user_id: str,
        change_type: str,
        payload: dict[str, Any],
        reason: str | None = None,
        task_id: str | None = None,
    ) -> ChangeRequestResult:
        """Insert a PENDING change request."""
        cr = TaskChangeRequest(
            organizational_unit_id=unit_id,
            task_id=task_id,
            requested_by_user_id=requested_by_user_id,
            change_type=change_type,
            status=ChangeRequestStatus.PENDING.value,
            reason=reason,
            payload=payload,
        )
        cr = await self._add(cr)
        return _to_result(cr)

    async def get_by_id(self, change_request_id: str) -> ChangeRequestResult | None:
        cr = await self._get(change_request_id)
        return _to_result(cr) if cr else None

    async def get_for_update(self, change_request_id: str) -> ChangeRequestResult | None:
        """Read the request with a row lock (SELECT ... FOR UPDATE), bypassing the identity map."""
        stmt = (
            select(TaskChangeRequest)
            .where(TaskChangeRequest.id == change_request_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        with translate_db_errors("lock change_request"):
            result = await self.db.execute(stmt)
        cr = result.scalar_one_or_none()
        return _to_result(cr) if cr else None

    async def claim_pending(
        self,
        change_request_id: str,
        *,
        status: ChangeRequestStatus,
        reviewed_by_user_id: str,
        reviewed_at: datetime,
        review_comment: str | None,
    ) -> bool:
        """Stamp a terminal status only if the row is still PENDING.

        Returns False when another decision got there first (zero rows updated).
        """
        stmt = (
            update(TaskChangeRequest)
            .where(
                TaskChangeRequest.id == change_request_id,
                TaskChangeRequest.status == ChangeRequestStatus.PENDING.value,
            )
            .values(
                status=status.value,
                reviewed_at=reviewed_at,
                reviewed_by_user_id=reviewed_by_user_id,
                review_comment=review_comment,
            )
            .execution_options(synchronize_session="evaluate")
        )
        with translate_db_errors("decide change_request"):
            result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def attach_task(self, change_request_id: str, task_id: str) -> None:
        """Link an approved CREATE request to the task it materialized."""
        stmt = (
            update(TaskChangeRequest)
            .where(TaskChangeRequest.id == change_request_id)
            .values(task_id=task_id)
            .execution_options(synchronize_session="evaluate")
        )
        with translate_db_errors("attach task to change_request"):
            await self.db.execute(stmt)

    def _view_query(self) -> tuple[Select[Any], Any]:
        """Base projection query and the requester alias (for role joins)."""
        requester = aliased(User)
        reviewer = aliased(User)
        return (
            select(
                TaskChangeRequest,
                requester.full_name,
                OrganizationalUnit.code,
                OrganizationalUnit.name,
                Task.title,
                reviewer.full_name,
            )
            .join(requester, requester.id == TaskChangeRequest.requested_by_user_id)
            .join(
                OrganizationalUnit,
                OrganizationalUnit.id == TaskChangeRequest.organizational_unit_id,
            )
            .outerjoin(Task, Task.id == TaskChangeRequest.task_id)
            .outerjoin(reviewer, reviewer.id == TaskChangeRequest.reviewed_by_user_id)
        ), requester

    async def _fetch_views(self, stmt: Select[Any], operation: str) -> list[ChangeRequestView]:
        with translate_db_errors(operation):
            result = await self.db.execute(stmt)
        views = []
        for cr, requester_name, unit_code, unit_name, task_title, reviewer_name in result.all():
            payload = dict(cr.payload or {})
            views.append(
                ChangeRequestView(
                    id=cr.id,
                    task_id=cr.task_id,
                    task_title=task_title or payload.get("title"),
                    change_type=cr.change_type,
                    status=cr.status,
                    reason=cr.reason,
                    requested_at=ensure_utc(cr.requested_at),
                    requested_by_user_id=cr.requested_by_user_id,
                    requested_by_name=requester_name,
                    organizational_unit_id=cr.organizational_unit_id,
                    unit_code=unit_code,
                    unit_name=unit_name,
                    reviewed_at=ensure_utc(cr.reviewed_at),
                    reviewed_by_user_id=cr.reviewed_by_user_id,
                    reviewed_by_name=reviewer_name,
                    review_comment=cr.review_comment,
                    payload=payload,
                )
            )
        return views

    async def list_by_requester(
        self,
        unit_id: str,
        user_id: str,
        status: ChangeRequestStatus | None = None,
    ) -> list[ChangeRequestView]:
        """Requests submitted by user_id in unit_id, newest first."""
        stmt, _ = self._view_query()
        stmt = stmt.where(
            TaskChangeRequest.organizational_unit_id == unit_id,
            TaskChangeRequest.requested_by_user_id == user_id,
        )
        if status is not None:
            stmt = stmt.where(TaskChangeRequest.status == status.value)
        stmt = stmt.order_by(TaskChangeRequest.requested_at.desc())
        return await self._fetch_views(stmt, "list own change_requests")

    async def list_pending_by_requester_role(
        self, unit_id: str, role_code: str
    ) -> list[ChangeRequestView]:
        """PENDING requests of unit_id whose requester currently holds role_code, oldest first."""
        stmt, requester = self._view_query()
        stmt = (
            stmt.join(Role, Role.id == requester.role_id)
            .where(
                TaskChangeRequest.organizational_unit_id == unit_id,
                TaskChangeRequest.status == ChangeRequestStatus.PENDING.value,
                Role.code == role_code,
            )
            .order_by(TaskChangeRequest.requested_at.asc())
        )
        return await self._fetch_views(stmt, "list pending change_requests")
