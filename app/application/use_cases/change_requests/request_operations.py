"""Change request submissions: create, update, complete and delete proposals.

Every task mutation goes through a change request. A STANDARD member's
request is stored PENDING for review. A requester whose current role grants
TASK_APPROVE_CHANGES (a SUPERVISOR) has the request stored and approved in the
same savepoint, so it is never observed PENDING.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from app.application.dtos.change_request import ChangeRequestCreated
from app.application.dtos.identity import Identity
from app.application.interfaces.repositories import IChangeRequestRepository
from app.application.services.authorization_service import AuthorizationService
from app.application.services.unit_scope_service import UnitScopeService
from app.application.use_cases.change_requests.decision_processor import (
    DecisionProcessor,
)
from app.application.use_cases.change_requests.payloads import (
    build_create_payload,
    build_update_payload,
    normalize_reason,
    require_id,
)
from app.domain.enums import ChangeRequestStatus, ChangeType, Decision
from app.domain.exceptions import AuthorizationException, ValidationException
from app.domain.permissions import PermissionCode

logger = logging.getLogger(__name__)

AUTO_APPROVAL_COMMENT = "Auto-approved: submitted by a supervisor."


class ChangeRequestService:
    """Validates and submits change requests; auto-approves for supervisors."""

    def __init__(
        self,
        authorization: AuthorizationService,
        unit_scope: UnitScopeService,
        change_request_repo: IChangeRequestRepository,
        decision_processor: DecisionProcessor,
    ) -> None:
        self.authorization = authorization
        self.unit_scope = unit_scope
        self.change_request_repo = change_request_repo
        self.decision_processor = decision_processor

    async def request_create(
        self,
        identity: Identity | None,
        *,
        title: object,
        description: object = None,
        priority: object = None,
        due_date: object = None,
        assigned_to_user_id: object = None,
        reason: object = None,
    ) -> ChangeRequestCreated:
        """Propose a new task. Requires TASK_CREATE."""
        await self.authorization.require_permission(identity, PermissionCode.TASK_CREATE)
        assert identity is not None
        payload = build_create_payload(
            title=title,
            description=description,
            priority=priority,
            due_date=due_date,
            assigned_to_user_id=assigned_to_user_id,
        )
        reason_text = normalize_reason(reason)
        unit_id = await self.unit_scope.resolve_requester_unit_id(identity.unit_name)
        await self._check_assignee(payload, unit_id)
        return await self._submit(identity, unit_id, ChangeType.CREATE, payload, reason_text)

    async def request_update(
        self,
        identity: Identity | None,
        task_id: str,
        changes: Mapping[str, Any],
        reason: object = None,
    ) -> ChangeRequestCreated:
        """Propose a partial update. Only the keys present in changes are carried.

        Requires TASK_EDIT_UNIT.
        """
        await self.authorization.require_permission(identity, PermissionCode.TASK_EDIT_UNIT)
        assert identity is not None
        task_id = require_id(task_id, "task_id")
        payload = build_update_payload(changes)
        reason_text = normalize_reason(reason)
        unit_id = await self.unit_scope.resolve_requester_unit_id(identity.unit_name)
        await self._check_target(task_id, unit_id)
        await self._check_assignee(payload, unit_id)
        return await self._submit(
            identity, unit_id, ChangeType.UPDATE, payload, reason_text, task_id
        )

    async def request_completion(
        self, identity: Identity | None, task_id: str, reason: object = None
    ) -> ChangeRequestCreated:
        """Propose marking a task COMPLETED. Requires TASK_COMPLETE_UNIT."""
        return await self._submit_without_payload(
            identity, task_id, reason, ChangeType.COMPLETE, PermissionCode.TASK_COMPLETE_UNIT
        )

    async def request_deletion(
        self, identity: Identity | None, task_id: str, reason: object = None
    ) -> ChangeRequestCreated:
        """Propose soft-deleting a task. Requires TASK_DELETE_UNIT."""
        return await self._submit_without_payload(
            identity, task_id, reason, ChangeType.DELETE, PermissionCode.TASK_DELETE_UNIT
        )

    async def _submit_without_payload(
        self,
        identity: Identity | None,
        task_id: str,
        reason: object,
        change_type: ChangeType,
        permission: PermissionCode,
    ) -> ChangeRequestCreated:
        await self.authorization.require_permission(identity, permission)
        assert identity is not None
        task_id = require_id(task_id, "task_id")
        reason_text = normalize_reason(reason)
        unit_id = await self.unit_scope.resolve_requester_unit_id(identity.unit_name)
        await self._check_target(task_id, unit_id)
        return await self._submit(identity, unit_id, change_type, {}, reason_text, task_id)

    async def _check_target(self, task_id: str, unit_id: str) -> None:
        # NotFound (missing/inactive) propagates from the resolver.
        if not await self.unit_scope.task_belongs_to_unit(task_id, unit_id):
            raise AuthorizationException(
                message="Task belongs to another organizational unit", task_id=task_id
            )

    async def _check_assignee(self, payload: dict[str, Any], unit_id: str) -> None:
        assignee = payload.get("assigned_to_user_id")
        if assignee and not await self.unit_scope.assignee_belongs_to_unit(assignee, unit_id):
            raise ValidationException(
                "Assignee must be an active user of the organizational unit",
                field="assigned_to_user_id",
            )

    async def _submit(
        self,
        identity: Identity,
        unit_id: str,
        change_type: ChangeType,
        payload: dict[str, Any],
        reason: str | None,
        task_id: str | None = None,
    ) -> ChangeRequestCreated:
        # Current grants from the role catalog, not the token's role claim.
        auto_approve = await self.authorization.has_permission(
            identity.user_id, PermissionCode.TASK_APPROVE_CHANGES
        )
        async with self.change_request_repo.savepoint():
            created = await self.change_request_repo.create(
                unit_id=unit_id,
                requested_by_user_id=identity.user_id,
                change_type=change_type.value,
                payload=payload,
                reason=reason,
                task_id=task_id,
            )
            logger.info(
                "Change request %s (%s) submitted by %s for task %s",
                created.id,
                change_type.value,
                identity.user_id,
                task_id,
            )
            if not auto_approve:
                return ChangeRequestCreated(
                    id=created.id,
                    change_type=created.change_type,
                    status=ChangeRequestStatus.PENDING.value,
                    requested_at=created.requested_at,
                    task_id=created.task_id,
                )
            result = await self.decision_processor.resolve(
                created.id,
                reviewer_id=identity.user_id,
                unit_id=unit_id,
                decision=Decision.APPROVED,
                comment=AUTO_APPROVAL_COMMENT,
            )
        logger.info(
            "Change request %s auto-approved for reviewer %s",
            created.id,
            identity.user_id,
        )
        return ChangeRequestCreated(
            id=created.id,
            change_type=created.change_type,
            status=result.status,
            requested_at=created.requested_at,
            task_id=result.task_id,
        )
