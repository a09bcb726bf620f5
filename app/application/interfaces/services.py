"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import Protocol


# Permission resolver interface
class IPermissionResolver(Protocol):
    """Protocol for resolving a user's permission codes from the role catalog."""

    async def get_user_permissions(self, user_id: str) -> set[str]:
        """Return permission codes granted by the user's current role."""


# Catalog initialization interface
class ICatalogInitializationService(Protocol):
    """Protocol for seeding roles, permissions and default grants."""

    async def initialize_catalog(self) -> dict[str, str]:
        """Ensure default roles/permissions exist; return {role_code: role_id}."""
