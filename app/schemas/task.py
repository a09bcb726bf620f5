"""Task API schemas.

Request bodies keep field types loose (plain strings) so enum, date and
identifier checks happen in the change request engine and surface as 400
VALIDATION_ERROR rather than a schema error.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TaskCreateRequest(BaseModel):
    """Request body for proposing a new task."""

    title: str | None = None
    description: str | None = None
    priority: str | None = Field(default=None, description="LOW, MEDIUM (default) or HIGH")
    due_date: str | None = Field(default=None, description="ISO date YYYY-MM-DD")
    assigned_to_user_id: str | None = None
    reason: str | None = None


class TaskUpdateRequest(BaseModel):
    """Request body for proposing a partial update.

    Only fields present in the body are proposed; send null to clear
    description, due_date or assigned_to_user_id. Unknown fields are kept
    so the engine can reject them as not editable.
    """

    model_config = ConfigDict(extra="allow")

    title: str | None = None
    description: str | None = None
    status: str | None = Field(default=None, description="PENDING, IN_PROGRESS or COMPLETED")
    priority: str | None = None
    due_date: str | None = None
    assigned_to_user_id: str | None = None
    reason: str | None = None

    def changes(self) -> dict[str, Any]:
        """Fields explicitly sent (reason excluded)."""
        sent = self.model_dump(exclude_unset=True, exclude={"reason"})
        sent.update(self.model_extra or {})
        return sent


class TaskReasonRequest(BaseModel):
    """Optional body for complete/delete proposals."""

    reason: str | None = None


class TaskResponse(BaseModel):
    """Task as listed in the unit projection."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    status: str
    priority: str
    due_date: date | None = None
    completed_at: datetime | None = None
    organizational_unit_id: str
    unit_code: str
    unit_name: str
    created_by_user_id: str
    created_by_name: str
    approved_by_user_id: str
    approved_by_name: str
    assigned_to_user_id: str | None = None
    assigned_to_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UnitUserResponse(BaseModel):
    """Active member of the caller's unit."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str
    role: str
