"""Task repository: inserts and field updates applied by approved change requests, plus the unit projection."""

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.application.dtos.task import TaskResult, TaskView
from app.infrastructure.persistence.models.organizational_unit import (
    OrganizationalUnit,
)
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_db_errors,
)
from app.shared.utils.datetime import ensure_utc

# Columns an approved change request may write.
_WRITABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "status",
        "priority",
        "due_date",
        "assigned_to_user_id",
        "completed_at",
        "is_active",
    }
)


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        organizational_unit_id=t.organizational_unit_id,
        title=t.title,
        description=t.description,
        status=t.status,
        priority=t.priority,
        due_date=t.due_date,
        completed_at=ensure_utc(t.completed_at),
        created_by_user_id=t.created_by_user_id,
        approved_by_user_id=t.approved_by_user_id,
        assigned_to_user_id=t.assigned_to_user_id,
        is_active=t.is_active,
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository."""

    resource_type = "task"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def get_by_id(self, task_id: str) -> TaskResult | None:
        task = await self._get(task_id)
        return _to_result(task) if task else None

    async def get_active_by_id(
        self, task_id: str, *, for_update: bool = False
    ) -> TaskResult | None:
        """Return the task only while is_active; optionally row-locked."""
        stmt = select(Task).where(Task.id == task_id, Task.is_active.is_(True))
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        with translate_db_errors("get task"):
            result = await self.db.execute(stmt)
        task = result.scalar_one_or_none()
        return _to_result(task) if task else None

    async def create(
        self,
        *,
        unit_id: str,
        title: str,
        created_by_user_id: str,
        approved_by_user_id: str,
        description: str | None = None,
        status: str,
        priority: str,
        due_date: date | None = None,
        assigned_to_user_id: str | None = None,
    ) -> TaskResult:
        """Insert a task and return the result DTO."""
        task = Task(
            organizational_unit_id=unit_id,
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=due_date,
            created_by_user_id=created_by_user_id,
            approved_by_user_id=approved_by_user_id,
            assigned_to_user_id=assigned_to_user_id,
            is_active=True,
        )
        task = await self._add(task)
        return _to_result(task)

    async def update_fields(self, task_id: str, values: dict[str, Any]) -> TaskResult | None:
        """Write only the given columns onto an active task. None when the task is gone."""
        unknown = set(values) - _WRITABLE_FIELDS
        if unknown:
            raise ValueError(f"Task fields not writable: {sorted(unknown)}")
        with translate_db_errors("get task"):
            result = await self.db.execute(
                select(Task).where(Task.id == task_id, Task.is_active.is_(True))
            )
        task = result.scalar_one_or_none()
        if task is None:
            return None
        for key, value in values.items():
            setattr(task, key, value)
        await self._flush(task, "update task")
        return _to_result(task)

    async def list_visible(
        self, unit_id: str, assigned_to_user_id: str | None = None
    ) -> list[TaskView]:
        """Active tasks of the unit, newest first; optionally only those assigned to one user."""
        creator = aliased(User)
        approver = aliased(User)
        assignee = aliased(User)
        stmt = (
            select(
                Task,
                OrganizationalUnit.code,
                OrganizationalUnit.name,
                creator.full_name,
                approver.full_name,
                assignee.full_name,
            )
            .join(OrganizationalUnit, OrganizationalUnit.id == Task.organizational_unit_id)
            .join(creator, creator.id == Task.created_by_user_id)
            .join(approver, approver.id == Task.approved_by_user_id)
            .outerjoin(assignee, assignee.id == Task.assigned_to_user_id)
            .where(Task.organizational_unit_id == unit_id, Task.is_active.is_(True))
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        if assigned_to_user_id is not None:
            stmt = stmt.where(Task.assigned_to_user_id == assigned_to_user_id)
        with translate_db_errors("list tasks"):
            result = await self.db.execute(stmt)
        return [
            TaskView(
                id=t.id,
                title=t.title,
                description=t.description,
                status=t.status,
                priority=t.priority,
                due_date=t.due_date,
                completed_at=ensure_utc(t.completed_at),
                organizational_unit_id=t.organizational_unit_id,
                unit_code=unit_code,
                unit_name=unit_name,
                created_by_user_id=t.created_by_user_id,
                created_by_name=created_by_name,
                approved_by_user_id=t.approved_by_user_id,
                approved_by_name=approved_by_name,
                assigned_to_user_id=t.assigned_to_user_id,
                assigned_to_name=assigned_to_name,
                created_at=ensure_utc(t.created_at),
                updated_at=ensure_utc(t.updated_at),
            )
            for t, unit_code, unit_name, created_by_name, approved_by_name, assigned_to_name in result.all()
        ]
