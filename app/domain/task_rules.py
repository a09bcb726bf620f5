"""Task field rules shared by submission and approval.

MUTABLE_TASK_FIELDS is the whitelist an UPDATE may touch; fields in
NON_NULLABLE_TASK_FIELDS may be changed but never cleared.
"""

from datetime import datetime

from app.domain.enums import TaskStatus

MUTABLE_TASK_FIELDS: frozenset[str] = frozenset(
    {
        "title",
        "description",
        "status",
        "priority",
        "due_date",
        "assigned_to_user_id",
    }
)

NON_NULLABLE_TASK_FIELDS: frozenset[str] = frozenset({"title", "status", "priority"})

TITLE_MAX_LENGTH = 500


def completed_at_after(
    status: TaskStatus | str, current: datetime | None, now: datetime
) -> datetime | None:
    """completed_at once status is written: kept or stamped for COMPLETED, cleared otherwise."""
    if TaskStatus(status) is TaskStatus.COMPLETED:
        return current or now
    return None
