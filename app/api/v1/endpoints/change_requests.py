"""Change request API: own requests, pending reviews and reviewer decisions."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    get_current_identity,
    get_decision_processor,
    get_task_query_service,
)
from app.application.dtos.identity import Identity
from app.application.use_cases.change_requests import DecisionProcessor
from app.application.use_cases.tasks import TaskQueryService
from app.core.limiter import limit_decisions
from app.schemas.change_request import (
    ChangeRequestResponse,
    DecisionRequest,
    DecisionResponse,
)

router = APIRouter()


@router.get("/mine", response_model=list[ChangeRequestResponse])
async def list_my_change_requests(
    identity: Annotated[Identity, Depends(get_current_identity)],
    query_svc: Annotated[TaskQueryService, Depends(get_task_query_service)],
    status: Annotated[str | None, Query(description="PENDING, APPROVED or REJECTED")] = None,
):
    """The caller's change requests, newest first."""
    rows = await query_svc.list_own_requests(identity, status=status)
    return [ChangeRequestResponse.model_validate(r) for r in rows]


@router.get("/pending", response_model=list[ChangeRequestResponse])
async def list_pending_reviews(
    identity: Annotated[Identity, Depends(get_current_identity)],
    query_svc: Annotated[TaskQueryService, Depends(get_task_query_service)],
):
    """PENDING requests from standard members of the unit, oldest first. Supervisors only."""
    rows = await query_svc.list_pending_reviews(identity)
    return [ChangeRequestResponse.model_validate(r) for r in rows]


@router.post("/{request_id}/decision", response_model=DecisionResponse)
@limit_decisions
async def decide_change_request(
    request: Request,
    request_id: str,
    body: DecisionRequest,
    identity: Annotated[Identity, Depends(get_current_identity)],
    processor: Annotated[DecisionProcessor, Depends(get_decision_processor)],
):
    """Approve or reject a pending change request."""
    result = await processor.apply_decision(
        identity, request_id, body.decision, comment=body.comment
    )
    return DecisionResponse.model_validate(result)
