"""Task API: thin routes delegating to TaskQueryService and ChangeRequestService."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Request

from app.api.v1.dependencies import (
    get_change_request_service,
    get_current_identity,
    get_task_query_service,
)
from app.application.dtos.identity import Identity
from app.application.use_cases.change_requests import ChangeRequestService
from app.application.use_cases.tasks import TaskQueryService
from app.core.limiter import limit_writes
from app.schemas.change_request import ChangeRequestCreatedResponse
from app.schemas.task import (
    TaskCreateRequest,
    TaskReasonRequest,
    TaskResponse,
    TaskUpdateRequest,
    UnitUserResponse,
)

router = APIRouter()


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    identity: Annotated[Identity, Depends(get_current_identity)],
    query_svc: Annotated[TaskQueryService, Depends(get_task_query_service)],
):
    """Active tasks of the caller's unit (STANDARD callers: only their assignments)."""
    tasks = await query_svc.list_tasks(identity)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/unit-users", response_model=list[UnitUserResponse])
async def list_unit_users(
    identity: Annotated[Identity, Depends(get_current_identity)],
    query_svc: Annotated[TaskQueryService, Depends(get_task_query_service)],
):
    """Active members of the caller's unit (assignee picker)."""
    users = await query_svc.list_unit_users(identity)
    return [UnitUserResponse.model_validate(u) for u in users]


@router.post(
    "/requests/create", response_model=ChangeRequestCreatedResponse, status_code=201
)
@limit_writes
async def request_task_creation(
    request: Request,
    body: TaskCreateRequest,
    identity: Annotated[Identity, Depends(get_current_identity)],
    change_svc: Annotated[ChangeRequestService, Depends(get_change_request_service)],
):
    """Propose a new task. Supervisors' proposals are approved immediately."""
    created = await change_svc.request_create(
        identity,
        title=body.title,
        description=body.description,
        priority=body.priority,
        due_date=body.due_date,
        assigned_to_user_id=body.assigned_to_user_id,
        reason=body.reason,
    )
    return ChangeRequestCreatedResponse.model_validate(created)


@router.post(
    "/{task_id}/requests/update",
    response_model=ChangeRequestCreatedResponse,
    status_code=201,
)
@limit_writes
async def request_task_update(
    request: Request,
    task_id: str,
    body: TaskUpdateRequest,
    identity: Annotated[Identity, Depends(get_current_identity)],
    change_svc: Annotated[ChangeRequestService, Depends(get_change_request_service)],
):
    """Propose a partial update; only fields present in the body are changed."""
    created = await change_svc.request_update(
        identity, task_id, body.changes(), reason=body.reason
    )
    return ChangeRequestCreatedResponse.model_validate(created)


@router.post(
    "/{task_id}/requests/complete",
    response_model=ChangeRequestCreatedResponse,
    status_code=201,
)
@limit_writes
async def request_task_completion(
    request: Request,
    task_id: str,
    identity: Annotated[Identity, Depends(get_current_identity)],
    change_svc: Annotated[ChangeRequestService, Depends(get_change_request_service)],
    body: Annotated[TaskReasonRequest | None, Body()] = None,
):
    """Propose marking the task COMPLETED."""
    created = await change_svc.request_completion(
        identity, task_id, reason=body.reason if body else None
    )
    return ChangeRequestCreatedResponse.model_validate(created)


@router.post(
    "/{task_id}/requests/delete",
    response_model=ChangeRequestCreatedResponse,
    status_code=201,
)
@limit_writes
async def request_task_deletion(
    request: Request,
    task_id: str,
    identity: Annotated[Identity, Depends(get_current_identity)],
    change_svc: Annotated[ChangeRequestService, Depends(get_change_request_service)],
    body: Annotated[TaskReasonRequest | None, Body()] = None,
):
    """Propose soft-deleting the task."""
    created = await change_svc.request_deletion(
        identity, task_id, reason=body.reason if body else None
    )
    return ChangeRequestCreatedResponse.model_validate(created)
