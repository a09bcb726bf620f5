"""DTOs for users and organizational units (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """User read-model. No password material is stored."""

    id: str
    organizational_unit_id: str
    username: str
    full_name: str
    email: str
    role_id: str
    is_active: bool


@dataclass(frozen=True)
class UnitUserResult:
    """Active unit member as shown in the assignee picker."""

    id: str
    full_name: str
    email: str
    role: str


@dataclass(frozen=True)
class OrganizationalUnitResult:
    id: str
    name: str
    code: str
