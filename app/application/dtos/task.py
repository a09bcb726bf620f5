"""DTOs for tasks (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class TaskResult:
    """Task row as persisted."""

    id: str
    organizational_unit_id: str
    title: str
    description: str | None
    status: str
    priority: str
    due_date: date | None
    completed_at: datetime | None
    created_by_user_id: str
    approved_by_user_id: str
    assigned_to_user_id: str | None
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True)
class TaskView:
    """Task projection row: task plus unit and user display names."""

    id: str
    title: str
    description: str | None
    status: str
    priority: str
    due_date: date | None
    completed_at: datetime | None
    organizational_unit_id: str
    unit_code: str
    unit_name: str
    created_by_user_id: str
    created_by_name: str
    approved_by_user_id: str
    approved_by_name: str
    assigned_to_user_id: str | None
    assigned_to_name: str | None
    created_at: datetime | None
    updated_at: datetime | None
