"""Application interfaces (ports): repository and service protocols."""

from app.application.interfaces.repositories import (
    IChangeRequestRepository,
    IOrganizationalUnitRepository,
    ITaskRepository,
    IUserRepository,
)
from app.application.interfaces.services import (
    ICatalogInitializationService,
    IPermissionResolver,
)

__all__ = [
    "ICatalogInitializationService",
    "IChangeRequestRepository",
    "IOrganizationalUnitRepository",
    "IPermissionResolver",
    "ITaskRepository",
    "IUserRepository",
]
