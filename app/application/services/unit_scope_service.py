"""Unit scope resolution: unit names to ids and unit membership facts.

Read-only. Reports facts; callers pick the error kind for a mismatch.
"""

from __future__ import annotations

from app.application.interfaces.repositories import (
    IOrganizationalUnitRepository,
    ITaskRepository,
    IUserRepository,
)
from app.domain.exceptions import InvalidStateException, ResourceNotFoundException


class UnitScopeService:
    def __init__(
        self,
        unit_repo: IOrganizationalUnitRepository,
        task_repo: ITaskRepository,
        user_repo: IUserRepository,
    ) -> None:
        self.unit_repo = unit_repo
        self.task_repo = task_repo
        self.user_repo = user_repo

    async def resolve_unit_id(self, unit_name: str) -> str:
        """Return the id of the unit named unit_name (case-insensitive, trimmed).

        Raises:
            ResourceNotFoundException: If no such unit exists.
        """
        name = (unit_name or "").strip()
        unit = await self.unit_repo.get_by_name(name) if name else None
        if unit is None:
            raise ResourceNotFoundException("organizational_unit", name)
        return unit.id

    async def resolve_requester_unit_id(self, unit_name: str) -> str:
        """resolve_unit_id for the acting identity.

        Raises:
            InvalidStateException: If the identity carries no resolvable unit.
        """
        try:
            return await self.resolve_unit_id(unit_name)
        except ResourceNotFoundException:
            raise InvalidStateException(
                "Requester has no resolvable organizational unit", unit=unit_name
            ) from None

    async def task_belongs_to_unit(self, task_id: str, unit_id: str) -> bool:
        """True when the active task is owned by unit_id.

        Raises:
            ResourceNotFoundException: If the task is missing or inactive.
        """
        task = await self.task_repo.get_active_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task.organizational_unit_id == unit_id

    async def assignee_belongs_to_unit(self, user_id: str, unit_id: str) -> bool:
        """True when user_id is an active member of unit_id."""
        return await self.user_repo.get_active_in_unit(user_id, unit_id) is not None
