"""Organizational unit repository (unit name/code lookups)."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import OrganizationalUnitResult
from app.infrastructure.persistence.models.organizational_unit import (
    OrganizationalUnit,
)
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_db_errors,
)


def _to_result(u: OrganizationalUnit) -> OrganizationalUnitResult:
    return OrganizationalUnitResult(id=u.id, name=u.name, code=u.code)


class OrganizationalUnitRepository(BaseRepository[OrganizationalUnit]):
    """Organizational unit repository. Implements IOrganizationalUnitRepository."""

    resource_type = "organizational_unit"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, OrganizationalUnit)

    async def get_by_id(self, unit_id: str) -> OrganizationalUnitResult | None:
        unit = await self._get(unit_id)
        return _to_result(unit) if unit else None

    async def get_by_name(self, name: str) -> OrganizationalUnitResult | None:
        """Return unit whose name matches case-insensitively (surrounding whitespace ignored)."""
        with translate_db_errors("get organizational_unit by name"):
            result = await self.db.execute(
                select(OrganizationalUnit).where(
                    func.lower(OrganizationalUnit.name) == name.strip().lower()
                )
            )
        unit = result.scalar_one_or_none()
        return _to_result(unit) if unit else None

    async def get_by_code(self, code: str) -> OrganizationalUnitResult | None:
        with translate_db_errors("get organizational_unit by code"):
            result = await self.db.execute(
                select(OrganizationalUnit).where(OrganizationalUnit.code == code)
            )
        unit = result.scalar_one_or_none()
        return _to_result(unit) if unit else None

    async def create(self, name: str, code: str) -> OrganizationalUnitResult:
        unit = await self._add(OrganizationalUnit(name=name.strip(), code=code))
        return _to_result(unit)
