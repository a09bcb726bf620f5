"""Seed the role/permission catalog (STANDARD, SUPERVISOR and their grants).

Usage:
    uv run python -m scripts.seed_rbac
Idempotent: missing roles, permissions and grants are added; existing rows are
left as they are. The initial migration seeds the same catalog.
"""

import asyncio

from app.infrastructure.persistence.database import dispose_engine, get_session_factory
from app.infrastructure.services import CatalogInitializationService


async def main() -> None:
    """Seed the catalog."""
    async with get_session_factory()() as session:
        async with session.begin():
            role_map = await CatalogInitializationService(session).initialize_catalog()
    await dispose_engine()
    for code, role_id in sorted(role_map.items()):
        print(f"{code}: {role_id}")


if __name__ == "__main__":
    asyncio.run(main())
