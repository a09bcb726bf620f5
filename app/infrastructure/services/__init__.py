"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.catalog_initialization_service import (
    CatalogInitializationService,
)
from app.infrastructure.services.permission_resolver import PermissionResolver

__all__ = [
    "CatalogInitializationService",
    "PermissionResolver",
]
