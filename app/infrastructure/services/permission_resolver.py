"""Resolves user permissions from DB (implements IPermissionResolver)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.permission import Permission, RolePermission
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import translate_db_errors


class PermissionResolver:
    """Resolves user permissions through user -> role -> role_permission -> permission."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_user_permissions(self, user_id: str) -> set[str]:
        """Return set of permission codes for an active user (empty for inactive or unknown)."""
        query = (
            select(Permission.code)
            .select_from(User)
            .join(RolePermission, RolePermission.role_id == User.role_id)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(User.id == user_id, User.is_active.is_(True))
        )
        with translate_db_errors("resolve permissions"):
            result = await self.db.execute(query)
        return {row[0] for row in result.fetchall()}
