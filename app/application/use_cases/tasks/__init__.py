"""Task read-side use cases."""

from app.application.use_cases.tasks.task_queries import (
    TaskQueryService,
    parse_status_filter,
)

__all__ = [
    "TaskQueryService",
    "parse_status_filter",
]
