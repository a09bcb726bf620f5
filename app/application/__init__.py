"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, permission resolver).
"""

from app.application.interfaces import (
    ICatalogInitializationService,
    IChangeRequestRepository,
    IOrganizationalUnitRepository,
    IPermissionResolver,
    ITaskRepository,
    IUserRepository,
)
from app.application.services.authorization_service import AuthorizationService
from app.application.services.unit_scope_service import UnitScopeService
from app.application.use_cases.change_requests import (
    ChangeRequestService,
    DecisionProcessor,
)
from app.application.use_cases.tasks import TaskQueryService

__all__ = [
    "AuthorizationService",
    "ChangeRequestService",
    "DecisionProcessor",
    "ICatalogInitializationService",
    "IChangeRequestRepository",
    "IOrganizationalUnitRepository",
    "IPermissionResolver",
    "ITaskRepository",
    "IUserRepository",
    "TaskQueryService",
    "UnitScopeService",
]
