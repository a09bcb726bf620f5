"""Task projection: read-side queries scoped to the caller's unit."""

from __future__ import annotations

from app.application.dtos.change_request import ChangeRequestView
from app.application.dtos.identity import Identity
from app.application.dtos.task import TaskView
from app.application.dtos.user import UnitUserResult
from app.application.interfaces.repositories import (
    IChangeRequestRepository,
    ITaskRepository,
    IUserRepository,
)
from app.application.services.authorization_service import AuthorizationService
from app.application.services.unit_scope_service import UnitScopeService
from app.domain.enums import ChangeRequestStatus, Role
from app.domain.exceptions import ValidationException
from app.domain.permissions import PermissionCode


def parse_status_filter(raw: str | None) -> ChangeRequestStatus | None:
    """None/blank means no filter; otherwise PENDING/APPROVED/REJECTED (case-insensitive)."""
    if raw is None or not raw.strip():
        return None
    try:
        return ChangeRequestStatus.parse(raw)
    except ValueError:
        raise ValidationException(
            "Status must be PENDING, APPROVED or REJECTED", field="status"
        ) from None


class TaskQueryService:
    """Lists tasks, own requests, pending reviews and unit members. No mutation."""

    def __init__(
        self,
        authorization: AuthorizationService,
        unit_scope: UnitScopeService,
        task_repo: ITaskRepository,
        change_request_repo: IChangeRequestRepository,
        user_repo: IUserRepository,
    ) -> None:
        self.authorization = authorization
        self.unit_scope = unit_scope
        self.task_repo = task_repo
        self.change_request_repo = change_request_repo
        self.user_repo = user_repo

    async def _unit_for(self, identity: Identity | None, code: PermissionCode) -> str:
        await self.authorization.require_permission(identity, code)
        assert identity is not None
        return await self.unit_scope.resolve_requester_unit_id(identity.unit_name)

    async def list_tasks(self, identity: Identity | None) -> list[TaskView]:
        """Active tasks of the unit, newest first.

        Reviewers (current grant of TASK_APPROVE_CHANGES) see the whole unit;
        everyone else sees only their assignments.
        """
        unit_id = await self._unit_for(identity, PermissionCode.TASK_VIEW_ALL)
        assert identity is not None
        reviewer = await self.authorization.has_permission(
            identity.user_id, PermissionCode.TASK_APPROVE_CHANGES
        )
        assignee = None if reviewer else identity.user_id
        return await self.task_repo.list_visible(unit_id, assigned_to_user_id=assignee)

    async def list_own_requests(
        self, identity: Identity | None, status: str | None = None
    ) -> list[ChangeRequestView]:
        """The caller's change requests in their unit, newest first."""
        status_filter = parse_status_filter(status)
        unit_id = await self._unit_for(identity, PermissionCode.TASK_VIEW_ALL)
        assert identity is not None
        return await self.change_request_repo.list_by_requester(
            unit_id, identity.user_id, status_filter
        )

    async def list_pending_reviews(self, identity: Identity | None) -> list[ChangeRequestView]:
        """PENDING requests from STANDARD members of the unit, oldest first."""
        unit_id = await self._unit_for(identity, PermissionCode.TASK_APPROVE_CHANGES)
        return await self.change_request_repo.list_pending_by_requester_role(
            unit_id, Role.STANDARD.value
        )

    async def list_unit_users(self, identity: Identity | None) -> list[UnitUserResult]:
        """Active members of the caller's unit, for assignee selection."""
        unit_id = await self._unit_for(identity, PermissionCode.TASK_VIEW_ALL)
        return await self.user_repo.list_active_by_unit(unit_id)
