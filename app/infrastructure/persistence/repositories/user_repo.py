"""User repository: unit membership lookups. Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UnitUserResult, UserResult
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_db_errors,
)


def _user_to_result(u: User) -> UserResult:
    return UserResult(
        id=u.id,
        organizational_unit_id=u.organizational_unit_id,
        username=u.username,
        full_name=u.full_name,
        email=u.email,
        role_id=u.role_id,
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Implements IUserRepository."""

    resource_type = "user"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await self._get(user_id)
        return _user_to_result(user) if user else None

    async def get_by_username(self, username: str) -> UserResult | None:
        with translate_db_errors("get user by username"):
            result = await self.db.execute(select(User).where(User.username == username))
        user = result.scalar_one_or_none()
        return _user_to_result(user) if user else None

    async def get_active_in_unit(self, user_id: str, unit_id: str) -> UserResult | None:
        """Return the user only if active and a member of unit_id."""
        with translate_db_errors("get user in unit"):
            result = await self.db.execute(
                select(User).where(
                    User.id == user_id,
                    User.organizational_unit_id == unit_id,
                    User.is_active.is_(True),
                )
            )
        user = result.scalar_one_or_none()
        return _user_to_result(user) if user else None

    async def list_active_by_unit(self, unit_id: str) -> list[UnitUserResult]:
        """Active members of unit_id ordered by full name."""
        with translate_db_errors("list unit users"):
            result = await self.db.execute(
                select(User.id, User.full_name, User.email, Role.code)
                .join(Role, Role.id == User.role_id)
                .where(
                    User.organizational_unit_id == unit_id,
                    User.is_active.is_(True),
                )
                .order_by(User.full_name.asc())
            )
        return [
            UnitUserResult(id=row.id, full_name=row.full_name, email=row.email, role=row.code)
            for row in result.all()
        ]

    async def create_user(
        self,
        *,
        username: str,
        full_name: str,
        email: str,
        role_id: str,
        unit_id: str,
        is_active: bool = True,
    ) -> UserResult:
        user = await self._add(
            User(
                username=username,
                full_name=full_name,
                email=email,
                role_id=role_id,
                organizational_unit_id=unit_id,
                is_active=is_active,
            )
        )
        return _user_to_result(user)

    async def set_active(self, user_id: str, is_active: bool) -> UserResult | None:
        user = await self._get(user_id)
        if user is None:
            return None
        user.is_active = is_active
        await self._flush(user, "update user")
        return _user_to_result(user)

    async def set_role(self, user_id: str, role_id: str) -> UserResult | None:
        user = await self._get(user_id)
        if user is None:
            return None
        user.role_id = role_id
        await self._flush(user, "update user")
        return _user_to_result(user)
