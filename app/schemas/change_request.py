"""Change request API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChangeRequestCreatedResponse(BaseModel):
    """Response for a submitted change request (status PENDING or APPROVED)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    change_type: str
    status: str
    requested_at: datetime
    task_id: str | None = None


class DecisionRequest(BaseModel):
    """Request body for POST /change-requests/{id}/decision."""

    decision: str = Field(..., description="APPROVED or REJECTED (case-insensitive)")
    comment: str | None = None


class DecisionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    change_request_id: str
    status: str
    task_id: str | None = None


class ChangeRequestResponse(BaseModel):
    """Change request as listed in own-requests and pending-review views."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str | None = None
    task_title: str | None = None
    change_type: str
    status: str
    reason: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
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
