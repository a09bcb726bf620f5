"""Domain layer: enums, permission catalog, lifecycle rules, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.change_request_lifecycle import decide
from app.domain.enums import (
    ChangeRequestStatus,
    ChangeType,
    Decision,
    Role,
    TaskPriority,
    TaskStatus,
)
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ChangeRequestConflictException,
    DuplicateResourceException,
    InvalidStateException,
    ResourceNotFoundException,
    TaskApprovalException,
    ValidationException,
)
from app.domain.permissions import (
    DEFAULT_ROLE_PERMISSIONS,
    PermissionCode,
    normalize_role,
)
from app.domain.task_rules import (
    MUTABLE_TASK_FIELDS,
    NON_NULLABLE_TASK_FIELDS,
    TITLE_MAX_LENGTH,
    completed_at_after,
)

__all__ = [
    # Enums
    "ChangeRequestStatus",
    "ChangeType",
    "Decision",
    "Role",
    "TaskPriority",
    "TaskStatus",
    # Permissions
    "DEFAULT_ROLE_PERMISSIONS",
    "PermissionCode",
    "normalize_role",
    # Lifecycle and task rules
    "decide",
    "MUTABLE_TASK_FIELDS",
    "NON_NULLABLE_TASK_FIELDS",
    "TITLE_MAX_LENGTH",
    "completed_at_after",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ChangeRequestConflictException",
    "DuplicateResourceException",
    "InvalidStateException",
    "ResourceNotFoundException",
    "TaskApprovalException",
    "ValidationException",
]
