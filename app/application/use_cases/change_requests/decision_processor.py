"""Decision processor: applies a reviewer's verdict to a pending change request.

Reading the request, claiming it (PENDING -> terminal) and mutating the task
run inside one savepoint. The claim is a compare-and-swap on status, so of two
concurrent decisions on the same request exactly one succeeds; the other sees
ChangeRequestConflictException and the task is mutated at most once.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from app.application.dtos.change_request import ChangeRequestResult, DecisionResult
from app.application.dtos.identity import Identity
from app.application.dtos.task import TaskResult
from app.application.interfaces.repositories import (
    IChangeRequestRepository,
    ITaskRepository,
)
from app.application.services.authorization_service import AuthorizationService
from app.application.services.unit_scope_service import UnitScopeService
from app.application.use_cases.change_requests.payloads import require_id
from app.domain.change_request_lifecycle import decide
from app.domain.enums import ChangeRequestStatus, ChangeType, Decision, TaskStatus
from app.domain.exceptions import (
    AuthorizationException,
    ChangeRequestConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.permissions import PermissionCode
from app.domain.task_rules import MUTABLE_TASK_FIELDS, completed_at_after
from app.shared.utils.datetime import parse_iso_date, utc_now
from app.shared.utils.sanitization import normalize_text

logger = logging.getLogger(__name__)


def parse_decision(raw: object) -> Decision:
    """APPROVED or REJECTED (trimmed, case-insensitive); anything else is InvalidInput."""
    try:
        return Decision.parse(raw)
    except ValueError:
        raise ValidationException(
            "Decision must be APPROVED or REJECTED", field="decision"
        ) from None


class DecisionProcessor:
    """Approves or rejects change requests and applies approved changes to tasks."""

    def __init__(
        self,
        authorization: AuthorizationService,
        unit_scope: UnitScopeService,
        change_request_repo: IChangeRequestRepository,
        task_repo: ITaskRepository,
    ) -> None:
        self.authorization = authorization
        self.unit_scope = unit_scope
        self.change_request_repo = change_request_repo
        self.task_repo = task_repo
        self._appliers: dict[
            ChangeType, Callable[[ChangeRequestResult, str], Awaitable[str]]
        ] = {
            ChangeType.CREATE: self._apply_create,
            ChangeType.UPDATE: self._apply_update,
            ChangeType.COMPLETE: self._apply_complete,
            ChangeType.DELETE: self._apply_delete,
        }

    async def apply_decision(
        self,
        identity: Identity | None,
        change_request_id: str,
        decision: str | Decision,
        comment: str | None = None,
    ) -> DecisionResult:
        """Reviewer entry point. Requires TASK_APPROVE_CHANGES.

        Raises:
            AuthenticationException: No identity.
            AuthorizationException: Missing permission or request of another unit.
            ValidationException: Decision not APPROVED/REJECTED.
            ResourceNotFoundException: Unknown request, or target task gone.
            ChangeRequestConflictException: Request already decided.
        """
        await self.authorization.require_permission(
            identity, PermissionCode.TASK_APPROVE_CHANGES
        )
        assert identity is not None
        verdict = parse_decision(decision)
        change_request_id = require_id(change_request_id, "change_request_id")
        unit_id = await self.unit_scope.resolve_requester_unit_id(identity.unit_name)
        return await self.resolve(
            change_request_id,
            reviewer_id=identity.user_id,
            unit_id=unit_id,
            decision=verdict,
            comment=normalize_text(comment),
        )

    async def resolve(
        self,
        change_request_id: str,
        *,
        reviewer_id: str,
        unit_id: str,
        decision: Decision,
        comment: str | None = None,
    ) -> DecisionResult:
        """Decide without the permission gate (used for supervisor auto-approval).

        Any failure rolls back the savepoint: the request stays PENDING and
        the task is untouched.
        """
        async with self.change_request_repo.savepoint():
            request = await self.change_request_repo.get_for_update(change_request_id)
            if request is None:
                raise ResourceNotFoundException("change_request", change_request_id)
            if request.organizational_unit_id != unit_id:
                raise AuthorizationException(
                    message="Change request belongs to another organizational unit",
                    change_request_id=change_request_id,
                )
            try:
                new_status = decide(
                    ChangeRequestStatus(request.status), decision, request.id
                )
                claimed = await self.change_request_repo.claim_pending(
                    request.id,
                    status=new_status,
                    reviewed_by_user_id=reviewer_id,
                    reviewed_at=utc_now(),
                    review_comment=comment,
                )
                if not claimed:
                    raise ChangeRequestConflictException(request.id)
            except ChangeRequestConflictException:
                logger.warning(
                    "Change request %s already decided (status %s); %s by %s refused",
                    request.id,
                    request.status,
                    decision.value,
                    reviewer_id,
                )
                raise

            task_id = request.task_id
            if new_status is ChangeRequestStatus.APPROVED:
                applier = self._appliers[ChangeType(request.change_type)]
                task_id = await applier(request, reviewer_id)

        logger.info(
            "Change request %s (%s) %s by %s; task %s",
            request.id,
            request.change_type,
            new_status.value,
            reviewer_id,
            task_id,
        )
        return DecisionResult(
            change_request_id=request.id, status=new_status.value, task_id=task_id
        )

    async def _require_assignee(self, request: ChangeRequestResult, user_id: str) -> None:
        if not await self.unit_scope.assignee_belongs_to_unit(
            user_id, request.organizational_unit_id
        ):
            raise ValidationException(
                "Assignee must be an active user of the organizational unit",
                field="assigned_to_user_id",
            )

    async def _target_task(self, request: ChangeRequestResult) -> TaskResult:
        task = (
            await self.task_repo.get_active_by_id(request.task_id, for_update=True)
            if request.task_id
            else None
        )
        if task is None:
            raise ResourceNotFoundException("task", request.task_id or "")
        if task.organizational_unit_id != request.organizational_unit_id:
            raise AuthorizationException(
                message="Task belongs to another organizational unit",
                task_id=task.id,
            )
        return task

    async def _write(self, task_id: str, values: dict[str, Any]) -> str:
        updated = await self.task_repo.update_fields(task_id, values)
        if updated is None:
            raise ResourceNotFoundException("task", task_id)
        return updated.id

    async def _apply_create(self, request: ChangeRequestResult, reviewer_id: str) -> str:
        payload = request.payload
        assignee = payload.get("assigned_to_user_id")
        if assignee:
            await self._require_assignee(request, assignee)
        task = await self.task_repo.create(
            unit_id=request.organizational_unit_id,
            title=payload["title"],
            description=payload.get("description"),
            status=TaskStatus.PENDING.value,
            priority=payload["priority"],
            due_date=parse_iso_date(payload.get("due_date")),
            created_by_user_id=request.requested_by_user_id,
            approved_by_user_id=reviewer_id,
            assigned_to_user_id=assignee,
        )
        await self.change_request_repo.attach_task(request.id, task.id)
        return task.id

    async def _apply_update(self, request: ChangeRequestResult, reviewer_id: str) -> str:
        task = await self._target_task(request)
        values = {k: v for k, v in request.payload.items() if k in MUTABLE_TASK_FIELDS}
        if values.get("assigned_to_user_id"):
            await self._require_assignee(request, values["assigned_to_user_id"])
        if "due_date" in values:
            values["due_date"] = parse_iso_date(values["due_date"])
        if "status" in values:
            values["completed_at"] = completed_at_after(
                values["status"], task.completed_at, utc_now()
            )
        return await self._write(task.id, values)

    async def _apply_complete(self, request: ChangeRequestResult, reviewer_id: str) -> str:
        task = await self._target_task(request)
        return await self._write(
            task.id,
            {"status": TaskStatus.COMPLETED.value, "completed_at": utc_now()},
        )

    async def _apply_delete(self, request: ChangeRequestResult, reviewer_id: str) -> str:
        task = await self._target_task(request)
        return await self._write(task.id, {"is_active": False})
