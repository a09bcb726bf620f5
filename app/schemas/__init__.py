"""Pydantic request/response schemas for the API."""

from app.schemas.change_request import (
    ChangeRequestCreatedResponse,
    ChangeRequestResponse,
    DecisionRequest,
    DecisionResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.task import (
    TaskCreateRequest,
    TaskReasonRequest,
    TaskResponse,
    TaskUpdateRequest,
    UnitUserResponse,
)

__all__ = [
    "ChangeRequestCreatedResponse",
    "ChangeRequestResponse",
    "DecisionRequest",
    "DecisionResponse",
    "HealthResponse",
    "TaskCreateRequest",
    "TaskReasonRequest",
    "TaskResponse",
    "TaskUpdateRequest",
    "UnitUserResponse",
]
