"""Application DTOs (no ORM dependency)."""

from app.application.dtos.change_request import (
    ChangeRequestCreated,
    ChangeRequestResult,
    ChangeRequestView,
    DecisionResult,
)
from app.application.dtos.identity import Identity
from app.application.dtos.task import TaskResult, TaskView
from app.application.dtos.user import (
    OrganizationalUnitResult,
    UnitUserResult,
    UserResult,
)

__all__ = [
    "ChangeRequestCreated",
    "ChangeRequestResult",
    "ChangeRequestView",
    "DecisionResult",
    "Identity",
    "OrganizationalUnitResult",
    "TaskResult",
    "TaskView",
    "UnitUserResult",
    "UserResult",
]
