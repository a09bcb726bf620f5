"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.change_request import TaskChangeRequest
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    UnitMixin,
    UnitScopedModel,
)
from app.infrastructure.persistence.models.organizational_unit import (
    OrganizationalUnit,
)
from app.infrastructure.persistence.models.permission import Permission, RolePermission
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.user import User

__all__ = [
    "OrganizationalUnit",
    "Role",
    "Permission",
    "RolePermission",
    "User",
    "Task",
    "TaskChangeRequest",
    "CuidMixin",
    "UnitMixin",
    "TimestampMixin",
    "UnitScopedModel",
]
