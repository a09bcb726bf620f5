"""Role/permission catalog initialization (implements ICatalogInitializationService)."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.enums import Role as RoleCode
from app.domain.permissions import (
    DEFAULT_ROLE_PERMISSIONS,
    PERMISSION_DESCRIPTIONS,
    ROLE_NAMES,
    PermissionCode,
)
from app.infrastructure.persistence.models.permission import Permission, RolePermission
from app.infrastructure.persistence.models.role import Role
from app.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)


class CatalogInitializationService:
    """Seeds roles, permissions and role-permission grants. Idempotent.

    Missing rows are added; existing rows and grants are left as they are, so
    grants changed by an operator survive a re-run.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def initialize_catalog(self) -> dict[str, str]:
        """Ensure every default role and permission exists. Returns {role_code: role_id}."""
        permission_map = await self._ensure_permissions()
        role_map = await self._ensure_roles()
        await self._ensure_grants(role_map, permission_map)
        return role_map

    async def _ensure_permissions(self) -> dict[str, str]:
        result = await self.db.execute(select(Permission.code, Permission.id))
        existing = {code: pid for code, pid in result.all()}
        for code in PermissionCode:
            if code.value in existing:
                continue
            perm_id = generate_cuid()
            self.db.add(
                Permission(
                    id=perm_id,
                    code=code.value,
                    description=PERMISSION_DESCRIPTIONS[code],
                )
            )
            existing[code.value] = perm_id
            logger.info("Catalog: added permission %s", code.value)
        await self.db.flush()
        return existing

    async def _ensure_roles(self) -> dict[str, str]:
        result = await self.db.execute(select(Role.code, Role.id))
        existing = {code: rid for code, rid in result.all()}
        for role in RoleCode:
            if role.value in existing:
                continue
            role_id = generate_cuid()
            self.db.add(Role(id=role_id, code=role.value, name=ROLE_NAMES[role]))
            existing[role.value] = role_id
            logger.info("Catalog: added role %s", role.value)
        await self.db.flush()
        return existing

    async def _ensure_grants(
        self, role_map: dict[str, str], permission_map: dict[str, str]
    ) -> None:
        result = await self.db.execute(
            select(RolePermission.role_id, RolePermission.permission_id)
        )
        granted = {(role_id, perm_id) for role_id, perm_id in result.all()}
        for role, codes in DEFAULT_ROLE_PERMISSIONS.items():
            role_id = role_map[role.value]
            for code in sorted(codes, key=lambda c: c.value):
                perm_id = permission_map[code.value]
                if (role_id, perm_id) in granted:
                    continue
                self.db.add(
                    RolePermission(
                        id=generate_cuid(), role_id=role_id, permission_id=perm_id
                    )
                )
        await self.db.flush()
