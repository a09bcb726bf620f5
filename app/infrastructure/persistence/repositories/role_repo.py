"""Role repository (lookup by code)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_db_errors,
)


class RoleRepository(BaseRepository[Role]):
    """Role repository."""

    resource_type = "role"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    async def get_id_by_code(self, code: str) -> str | None:
        with translate_db_errors("get role by code"):
            result = await self.db.execute(select(Role.id).where(Role.code == code))
        return result.scalar_one_or_none()
