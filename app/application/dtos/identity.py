"""Identity DTO: the authenticated caller every operation receives."""

from dataclasses import dataclass

from app.domain.enums import Role


@dataclass(frozen=True)
class Identity:
    """Resolved (user_id, role, unit) tuple, already authenticated upstream."""

    user_id: str
    role: Role
    unit_name: str
