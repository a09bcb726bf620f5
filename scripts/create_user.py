"""Create a user in an existing organizational unit.

Usage:
    uv run python -m scripts.create_user <unit_code> <username> <full_name> <email> <STANDARD|SUPERVISOR>
Role spellings are normalized (e.g. 'Usuario estándar' -> STANDARD).
"""

import asyncio
import sys

from app.domain.exceptions import TaskApprovalException
from app.domain.permissions import normalize_role
from app.infrastructure.persistence.database import dispose_engine, get_session_factory
from app.infrastructure.persistence.repositories import (
    OrganizationalUnitRepository,
    RoleRepository,
    UserRepository,
)

USAGE = (
    "Usage: uv run python -m scripts.create_user "
    "<unit_code> <username> <full_name> <email> <STANDARD|SUPERVISOR>"
)


async def main() -> None:
    """Create the user; unit identified by code."""
    if len(sys.argv) < 6:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    unit_code, username, full_name, email, role_arg = sys.argv[1:6]

    try:
        role = normalize_role(role_arg)
        async with get_session_factory()() as session:
            async with session.begin():
                unit = await OrganizationalUnitRepository(session).get_by_code(unit_code)
                if unit is None:
                    print(f"Unit not found: {unit_code}", file=sys.stderr)
                    sys.exit(1)
                role_id = await RoleRepository(session).get_id_by_code(role.value)
                if role_id is None:
                    print("Role catalog missing; run scripts.seed_rbac", file=sys.stderr)
                    sys.exit(1)
                user = await UserRepository(session).create_user(
                    username=username,
                    full_name=full_name,
                    email=email,
                    role_id=role_id,
                    unit_id=unit.id,
                )
    except TaskApprovalException as exc:
        print(f"{exc.error_code}: {exc.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await dispose_engine()
    print(f"Created {role.value} user {user.username} ({user.id}) in {unit.name}")


if __name__ == "__main__":
    asyncio.run(main())
