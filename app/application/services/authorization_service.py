"""Authorization service: permission checks resolved fresh from the role catalog."""

from __future__ import annotations

from app.application.dtos.identity import Identity
from app.application.interfaces.services import IPermissionResolver
from app.domain.exceptions import AuthenticationException, AuthorizationException
from app.domain.permissions import PermissionCode


class AuthorizationService:
    """Centralized permission checking.

    No caching: role or grant changes take effect on the very next call.
    """

    def __init__(self, permission_resolver: IPermissionResolver) -> None:
        self.permission_resolver = permission_resolver

    async def permissions_for(self, user_id: str) -> set[str]:
        """Return the permission codes granted by the user's current role."""
        return await self.permission_resolver.get_user_permissions(user_id)

    async def has_permission(self, user_id: str, code: PermissionCode | str) -> bool:
        value = code.value if isinstance(code, PermissionCode) else code
        return value in await self.permissions_for(user_id)

    async def require_permission(
        self, identity: Identity | None, code: PermissionCode | str
    ) -> None:
        """Raise unless an identity is attached and holds code."""
        if identity is None:
            raise AuthenticationException()
        if not await self.has_permission(identity.user_id, code):
            value = code.value if isinstance(code, PermissionCode) else code
            raise AuthorizationException(permission=value)
