"""Domain enumerations for task change requests.

Enums represent fixed sets of domain values (task status, priority, change
type, request status, role). Values are the upper-case codes stored in the
database and exchanged with callers.
"""

from enum import Enum


class _CodeEnum(str, Enum):
    """str-valued enum with helpers for validation messages and parsing."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for CHECK constraints or errors)."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, raw: object):
        """Return the member for raw (trimmed, case-insensitive) or raise ValueError."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            raise ValueError(f"{cls.__name__} must be one of {', '.join(cls.values())}")
        try:
            return cls(raw.strip().upper())
        except ValueError:
            raise ValueError(
                f"{cls.__name__} must be one of {', '.join(cls.values())}"
            ) from None


class TaskStatus(_CodeEnum):
    """Work state of a task."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class TaskPriority(_CodeEnum):
    """Task priority. MEDIUM is the default on creation."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ChangeType(_CodeEnum):
    """Kind of mutation proposed by a change request."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    COMPLETE = "COMPLETE"
    DELETE = "DELETE"


class ChangeRequestStatus(_CodeEnum):
    """Change request lifecycle status. APPROVED and REJECTED are terminal."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not ChangeRequestStatus.PENDING


class Decision(_CodeEnum):
    """Reviewer verdict on a pending change request."""

    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Role(_CodeEnum):
    """User role. SUPERVISOR changes resolve immediately; STANDARD changes are queued."""

    STANDARD = "STANDARD"
    SUPERVISOR = "SUPERVISOR"
