"""DTOs for change requests and decisions (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ChangeRequestResult:
    """Change request row as persisted."""

    id: str
    organizational_unit_id: str
    task_id: str | None
    requested_by_user_id: str
    change_type: str
    status: str
    reason: str | None
    payload: dict[str, Any]
    requested_at: datetime
    reviewed_at: datetime | None
    reviewed_by_user_id: str | None
    review_comment: str | None


@dataclass(frozen=True)
class ChangeRequestCreated:
    """Outward shape of a submission: id, change type, resulting status, task id."""

    id: str
    change_type: str
    status: str
    requested_at: datetime
    task_id: str | None = None


@dataclass(frozen=True)
class DecisionResult:
    """Outcome of a reviewer decision."""

    change_request_id: str
    status: str
    task_id: str | None


@dataclass(frozen=True)
class ChangeRequestView:
    """Change request projection row with display names and task title."""

    id: str
    task_id: str | None
    task_title: str | None
    change_type: str
    status: str
    reason: str | None
    requested_at: datetime
    requested_by_user_id: str
    requested_by_name: str
    organizational_unit_id: str
    unit_code: str
    unit_name: str
    reviewed_at: datetime | None = None
    reviewed_by_user_id: str | None = None
    reviewed_by_name: str | None = None
    review_comment: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)
