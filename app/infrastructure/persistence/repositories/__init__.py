"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_db_errors,
)
from app.infrastructure.persistence.repositories.change_request_repo import (
    ChangeRequestRepository,
)
from app.infrastructure.persistence.repositories.organizational_unit_repo import (
    OrganizationalUnitRepository,
)
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "ChangeRequestRepository",
    "OrganizationalUnitRepository",
    "RoleRepository",
    "TaskRepository",
    "UserRepository",
    "translate_db_errors",
]
