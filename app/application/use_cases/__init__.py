"""Application use cases: one entry point per workflow."""

from app.application.use_cases.change_requests import (
    ChangeRequestService,
    DecisionProcessor,
)
from app.application.use_cases.tasks import TaskQueryService

__all__ = [
    "ChangeRequestService",
    "DecisionProcessor",
    "TaskQueryService",
]
