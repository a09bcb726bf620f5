"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Protocol

from app.domain.enums import ChangeRequestStatus

if TYPE_CHECKING:
    from app.application.dtos.change_request import (
        ChangeRequestResult,
        ChangeRequestView,
    )
    from app.application.dtos.task import TaskResult, TaskView
    from app.application.dtos.user import (
        OrganizationalUnitResult,
        UnitUserResult,
        UserResult,
    )


# Organizational unit repository interface
class IOrganizationalUnitRepository(Protocol):
    """Protocol for organizational unit lookups."""

    async def get_by_name(self, name: str) -> OrganizationalUnitResult | None:
        """Return unit by name (case-insensitive, trimmed)."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user lookups scoped to a unit."""

    async def get_active_in_unit(self, user_id: str, unit_id: str) -> UserResult | None:
        """Return the user when active and a member of unit_id."""

    async def list_active_by_unit(self, unit_id: str) -> list[UnitUserResult]:
        """Return active members of unit_id ordered by name."""


# Task repository interface
class ITaskRepository(Protocol):
    """Protocol for task persistence. Tasks are only written by approved change requests."""

    async def get_active_by_id(
        self, task_id: str, *, for_update: bool = False
    ) -> TaskResult | None:
        """Return task while active; None when missing or soft-deleted."""

    async def create(
        self,
        *,
        unit_id: str,
        title: str,
        created_by_user_id: str,
        approved_by_user_id: str,
        description: str | None = None,
        status: str,
        priority: str,
        due_date: date | None = None,
        assigned_to_user_id: str | None = None,
    ) -> TaskResult:
        """Insert a task."""

    async def update_fields(self, task_id: str, values: dict[str, Any]) -> TaskResult | None:
        """Write the given columns onto an active task; None when the task is gone."""

    async def list_visible(
        self, unit_id: str, assigned_to_user_id: str | None = None
    ) -> list[TaskView]:
        """Active tasks of the unit, newest first."""


# Change request repository interface
class IChangeRequestRepository(Protocol):
    """Protocol for change request persistence and projections."""

    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Nested transaction; an exception inside rolls back only the block."""

    async def create(
        self,
        *,
        unit_id: str,
        requested_by_user_id: str,
        change_type: str,
        payload: dict[str, Any],
        reason: str | None = None,
        task_id: str | None = None,
    ) -> ChangeRequestResult:
        """Insert a PENDING change request."""

    async def get_for_update(self, change_request_id: str) -> ChangeRequestResult | None:
        """Read the request under a row lock."""

    async def claim_pending(
        self,
        change_request_id: str,
        *,
        status: ChangeRequestStatus,
        reviewed_by_user_id: str,
        reviewed_at: datetime,
        review_comment: str | None,
    ) -> bool:
        """Compare-and-swap PENDING -> status. False when no row was PENDING."""

    async def attach_task(self, change_request_id: str, task_id: str) -> None:
        """Set task_id on an approved CREATE request."""

    async def list_by_requester(
        self,
        unit_id: str,
        user_id: str,
        status: ChangeRequestStatus | None = None,
    ) -> list[ChangeRequestView]:
        """Requests submitted by user_id, newest first."""

    async def list_pending_by_requester_role(
        self, unit_id: str, role_code: str
    ) -> list[ChangeRequestView]:
        """PENDING requests whose requester currently holds role_code, oldest first."""
