"""Issue a bearer token for local development (tokens are normally issued elsewhere).

Usage:
    uv run python -m scripts.issue_token <username>
Looks the user up to fill the sub, role and unit claims.
"""

import asyncio
import sys

from sqlalchemy import select

from app.infrastructure.persistence.database import dispose_engine, get_session_factory
from app.infrastructure.persistence.models import OrganizationalUnit, Role, User
from app.infrastructure.security.jwt import create_access_token


async def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: uv run python -m scripts.issue_token <username>", file=sys.stderr)
        sys.exit(1)
    username = sys.argv[1]

    async with get_session_factory()() as session:
        result = await session.execute(
            select(User.id, Role.code, OrganizationalUnit.name)
            .join(Role, Role.id == User.role_id)
            .join(OrganizationalUnit, OrganizationalUnit.id == User.organizational_unit_id)
            .where(User.username == username, User.is_active.is_(True))
        )
        row = result.first()
    await dispose_engine()
    if row is None:
        print(f"Active user not found: {username}", file=sys.stderr)
        sys.exit(1)
    user_id, role_code, unit_name = row
    print(create_access_token(user_id, role_code, unit_name))


if __name__ == "__main__":
    asyncio.run(main())
