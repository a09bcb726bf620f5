"""Bearer token identity extraction and the permission gate."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from app.api.v1.dependencies import get_current_identity, get_current_identity_optional
from app.application.dtos.identity import Identity
from app.application.services.authorization_service import AuthorizationService
from app.domain.enums import Role
from app.domain.exceptions import AuthenticationException, AuthorizationException
from app.domain.permissions import PermissionCode
from app.infrastructure.security.jwt import create_access_token, verify_token
from app.middleware.request_id import resolve_request_id


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestTokens:
    def test_round_trip_claims(self) -> None:
        payload = verify_token(create_access_token("u1", "SUPERVISOR", "Finance"))
        assert payload["sub"] == "u1"
        assert payload["role"] == "SUPERVISOR"
        assert payload["unit"] == "Finance"

    def test_expired_token_is_rejected(self) -> None:
        token = create_access_token("u1", "STANDARD", "Finance", timedelta(seconds=-5))
        with pytest.raises(ValueError, match="Invalid token"):
            verify_token(token)

    def test_missing_unit_claim_is_rejected(self) -> None:
        token = create_access_token("u1", "STANDARD", "")
        with pytest.raises(ValueError, match="unit"):
            verify_token(token)

    def test_garbage_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            verify_token("not-a-jwt")


class TestIdentityDependency:
    def test_role_spelling_is_normalized(self) -> None:
        token = create_access_token("u1", "Usuario estándar", "Finance")
        identity = get_current_identity_optional(_credentials(token))
        assert identity == Identity("u1", Role.STANDARD, "Finance")

    def test_no_credentials_is_none(self) -> None:
        assert get_current_identity_optional(None) is None

    def test_unknown_role_is_none(self) -> None:
        token = create_access_token("u1", "admin", "Finance")
        assert get_current_identity_optional(_credentials(token)) is None

    def test_required_identity_raises_401_error(self) -> None:
        with pytest.raises(AuthenticationException):
            get_current_identity(None)


class TestAuthorizationService:
    @pytest.fixture
    def service(self) -> AuthorizationService:
        resolver = AsyncMock()
        resolver.get_user_permissions = AsyncMock(return_value={"TASK_CREATE", "TASK_VIEW_ALL"})
        return AuthorizationService(resolver)

    async def test_has_permission(self, service: AuthorizationService) -> None:
        assert await service.has_permission("u1", PermissionCode.TASK_CREATE)
        assert await service.has_permission("u1", "TASK_VIEW_ALL")
        assert not await service.has_permission("u1", PermissionCode.TASK_APPROVE_CHANGES)

    async def test_require_permission_without_identity(self, service: AuthorizationService) -> None:
        with pytest.raises(AuthenticationException):
            await service.require_permission(None, PermissionCode.TASK_CREATE)

    async def test_require_permission_denied(self, service: AuthorizationService) -> None:
        identity = Identity("u1", Role.SUPERVISOR, "Finance")
        with pytest.raises(AuthorizationException) as exc_info:
            await service.require_permission(identity, PermissionCode.TASK_DELETE_UNIT)
        assert exc_info.value.details == {"permission": "TASK_DELETE_UNIT"}

    async def test_permissions_are_resolved_on_every_call(self, service: AuthorizationService) -> None:
        await service.has_permission("u1", PermissionCode.TASK_CREATE)
        await service.has_permission("u1", PermissionCode.TASK_CREATE)
        assert service.permission_resolver.get_user_permissions.await_count == 2


class TestRequestId:
    def test_safe_client_value_is_kept(self) -> None:
        assert resolve_request_id("abc-123") == "abc-123"

    @pytest.mark.parametrize("raw", [None, "bad value\nInjected", ""])
    def test_unsafe_value_is_replaced(self, raw: str | None) -> None:
        generated = resolve_request_id(raw)
        assert generated != raw
        assert len(generated) == 36
