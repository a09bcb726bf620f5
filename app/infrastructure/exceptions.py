"""Infrastructure exceptions for storage operations.

Persistence errors extend TaskApprovalException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import TaskApprovalException


class PersistenceException(TaskApprovalException):
    """Database operation failed (connection loss, deadlock, driver error).

    The outcome of the enclosing unit of work is unknown; callers should
    re-query before retrying.
    """

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Persistence failure during {operation}; outcome unknown, re-query before retrying",
            "PERSISTENCE_ERROR",
            {"operation": operation, "reason": reason},
        )
