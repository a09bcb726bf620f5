"""Seed development data: catalog, two units and a supervisor plus a standard user in each.

Usage:
    uv run python -m scripts.seed_dev_data
Existing units (by code) and users (by username) are reused, so re-running is safe.
"""

from __future__ import annotations

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.enums import Role
from app.infrastructure.persistence.database import dispose_engine, get_session_factory
from app.infrastructure.persistence.repositories import (
    OrganizationalUnitRepository,
    UserRepository,
)
from app.infrastructure.services import CatalogInitializationService

UNITS: list[tuple[str, str]] = [
    ("Finance", "FIN"),
    ("Operations", "OPS"),
]

USERS: list[tuple[str, str, str, Role]] = [
    ("FIN", "fin.supervisor", "Fiona Supervisor", Role.SUPERVISOR),
    ("FIN", "fin.standard", "Frank Standard", Role.STANDARD),
    ("OPS", "ops.supervisor", "Olivia Supervisor", Role.SUPERVISOR),
    ("OPS", "ops.standard", "Oscar Standard", Role.STANDARD),
]


async def seed(session: AsyncSession) -> None:
    role_map = await CatalogInitializationService(session).initialize_catalog()
    unit_repo = OrganizationalUnitRepository(session)
    user_repo = UserRepository(session)

    unit_ids: dict[str, str] = {}
    for name, code in UNITS:
        unit = await unit_repo.get_by_code(code) or await unit_repo.create(name, code)
        unit_ids[code] = unit.id

    for unit_code, username, full_name, role in USERS:
        if await user_repo.get_by_username(username) is not None:
            print(f"  user {username}: exists")
            continue
        await user_repo.create_user(
            username=username,
            full_name=full_name,
            email=f"{username}@example.com",
            role_id=role_map[role.value],
            unit_id=unit_ids[unit_code],
        )
        print(f"  user {username}: created ({role.value}, {unit_code})")


async def main() -> None:
    async with get_session_factory()() as session:
        async with session.begin():
            await seed(session)
    await dispose_engine()
    print("Dev data seeded. Issue a token with: uv run python -m scripts.issue_token fin.standard")


if __name__ == "__main__":
    asyncio.run(main())
