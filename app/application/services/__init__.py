"""Application services: authorization gate and unit scope resolution."""

from app.application.services.authorization_service import AuthorizationService
from app.application.services.unit_scope_service import UnitScopeService

__all__ = [
    "AuthorizationService",
    "UnitScopeService",
]
