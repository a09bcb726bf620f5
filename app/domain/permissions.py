"""Permission catalog defaults and role normalization.

The live role -> permission mapping is stored in the role, permission and
role_permission tables; DEFAULT_ROLE_PERMISSIONS is what the initial
migration and CatalogInitializationService seed.
"""

import unicodedata
from enum import Enum

from app.domain.enums import Role
from app.domain.exceptions import ValidationException


class PermissionCode(str, Enum):
    """Permission codes checked by the authorization gate."""

    TASK_CREATE = "TASK_CREATE"
    TASK_EDIT_UNIT = "TASK_EDIT_UNIT"
    TASK_COMPLETE_UNIT = "TASK_COMPLETE_UNIT"
    TASK_DELETE_UNIT = "TASK_DELETE_UNIT"
    TASK_APPROVE_CHANGES = "TASK_APPROVE_CHANGES"
    TASK_VIEW_ALL = "TASK_VIEW_ALL"


PERMISSION_DESCRIPTIONS: dict[PermissionCode, str] = {
    PermissionCode.TASK_CREATE: "Create tasks or propose task creation",
    PermissionCode.TASK_EDIT_UNIT: "Edit tasks of the own unit",
    PermissionCode.TASK_COMPLETE_UNIT: "Complete tasks of the own unit",
    PermissionCode.TASK_DELETE_UNIT: "Delete tasks of the own unit",
    PermissionCode.TASK_APPROVE_CHANGES: "Approve or reject change requests",
    PermissionCode.TASK_VIEW_ALL: "View tasks and change requests of the own unit",
}

_STANDARD_PERMISSIONS = frozenset(
    {
        PermissionCode.TASK_CREATE,
        PermissionCode.TASK_EDIT_UNIT,
        PermissionCode.TASK_COMPLETE_UNIT,
        PermissionCode.TASK_DELETE_UNIT,
        PermissionCode.TASK_VIEW_ALL,
    }
)

DEFAULT_ROLE_PERMISSIONS: dict[Role, frozenset[PermissionCode]] = {
    Role.STANDARD: _STANDARD_PERMISSIONS,
    Role.SUPERVISOR: _STANDARD_PERMISSIONS | {PermissionCode.TASK_APPROVE_CHANGES},
}

ROLE_NAMES: dict[Role, str] = {
    Role.STANDARD: "Standard user",
    Role.SUPERVISOR: "Supervisor",
}

# Accepted spellings after lower-casing and accent stripping.
_ROLE_ALIASES: dict[str, Role] = {
    "standard": Role.STANDARD,
    "standard user": Role.STANDARD,
    "usuario estandar": Role.STANDARD,
    "supervisor": Role.SUPERVISOR,
    "usuario supervisor": Role.SUPERVISOR,
}


def _fold(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_role(value: str | Role) -> Role:
    """Map a role spelling (e.g. 'Usuario estándar', 'SUPERVISOR') to Role.

    Raises:
        ValidationException: If the spelling is not recognized.
    """
    if isinstance(value, Role):
        return value
    role = _ROLE_ALIASES.get(_fold(value or ""))
    if role is None:
        raise ValidationException(
            "Invalid role. Use STANDARD or SUPERVISOR.", field="role"
        )
    return role
