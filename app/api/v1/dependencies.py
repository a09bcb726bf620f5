"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the caller identity and
application services. Services are built from infrastructure implementations
here; routes depend only on these dependencies, not on infra directly.

Write services share one request-scoped transaction (get_db_transactional);
read services use get_db.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.identity import Identity
from app.application.services.authorization_service import AuthorizationService
from app.application.services.unit_scope_service import UnitScopeService
from app.application.use_cases.change_requests import (
    ChangeRequestService,
    DecisionProcessor,
)
from app.application.use_cases.tasks import TaskQueryService
from app.domain.exceptions import AuthenticationException, ValidationException
from app.domain.permissions import normalize_role
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    ChangeRequestRepository,
    OrganizationalUnitRepository,
    TaskRepository,
    UserRepository,
)
from app.infrastructure.security.jwt import verify_token
from app.infrastructure.services import PermissionResolver

logger = logging.getLogger(__name__)


# ---- Auth (identity from bearer token) ----

_http_bearer = HTTPBearer(auto_error=False)


def get_current_identity_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> Identity | None:
    """Return the identity carried by the bearer token; None if absent or invalid."""
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
        return Identity(
            user_id=str(payload["sub"]),
            role=normalize_role(str(payload["role"])),
            unit_name=str(payload["unit"]),
        )
    except (ValueError, KeyError, ValidationException) as exc:
        logger.debug("Rejected bearer token: %s", exc)
        return None


def get_current_identity(
    identity: Annotated[Identity | None, Depends(get_current_identity_optional)],
) -> Identity:
    """Return the identity; raise AuthenticationException (401) if missing or invalid."""
    if identity is None:
        raise AuthenticationException()
    return identity


# ---- Shared builders ----


def _unit_scope(db: AsyncSession) -> UnitScopeService:
    return UnitScopeService(
        unit_repo=OrganizationalUnitRepository(db),
        task_repo=TaskRepository(db),
        user_repo=UserRepository(db),
    )


def _decision_processor(db: AsyncSession) -> DecisionProcessor:
    return DecisionProcessor(
        authorization=AuthorizationService(PermissionResolver(db)),
        unit_scope=_unit_scope(db),
        change_request_repo=ChangeRequestRepository(db),
        task_repo=TaskRepository(db),
    )


# ---- Read services (get_db for reads) ----


async def get_task_query_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskQueryService:
    """Task projection (composition root)."""
    return TaskQueryService(
        authorization=AuthorizationService(PermissionResolver(db)),
        unit_scope=_unit_scope(db),
        task_repo=TaskRepository(db),
        change_request_repo=ChangeRequestRepository(db),
        user_repo=UserRepository(db),
    )


# ---- Write services (get_db_transactional for writes) ----


async def get_change_request_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ChangeRequestService:
    """Change request engine; auto-approval shares the request transaction."""
    return ChangeRequestService(
        authorization=AuthorizationService(PermissionResolver(db)),
        unit_scope=_unit_scope(db),
        change_request_repo=ChangeRequestRepository(db),
        decision_processor=_decision_processor(db),
    )


async def get_decision_processor(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> DecisionProcessor:
    """Decision processor for reviewer decisions (composition root)."""
    return _decision_processor(db)
