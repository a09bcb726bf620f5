"""Domain exceptions for the task approval service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class TaskApprovalException(Exception):
    """Base exception for all application errors.

    All custom exceptions inherit from this class so callers can handle
    domain failures uniformly. Presentation layer maps these to HTTP
    responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskApprovalException):
    """Raised when input validation fails (missing field, bad format, out-of-domain value)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidStateException(TaskApprovalException):
    """Raised when the caller's context cannot support the operation (e.g. no resolvable unit)."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, "INVALID_STATE", details)


class AuthenticationException(TaskApprovalException):
    """Raised when no authenticated identity is attached to the call."""

    def __init__(self, message: str = "Authentication required") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(TaskApprovalException):
    """Raised when the identity lacks a permission or reaches across units."""

    def __init__(
        self,
        permission: str | None = None,
        message: str = "Permission denied",
        **details: Any,
    ) -> None:
        """Initialize with optional permission code and message.

        Args:
            permission: Permission code that was required (e.g. 'TASK_APPROVE_CHANGES').
            message: Human-readable message; replaced when permission is given.
            **details: Extra context (e.g. task_id, unit_id).
        """
        if permission:
            message = f"Permission denied: {permission} required"
            details["permission"] = permission
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(TaskApprovalException):
    """Raised when a requested resource does not exist or is inactive."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'change_request').
            resource_id: The ID (or name) that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ChangeRequestConflictException(TaskApprovalException):
    """Raised when a decision targets a change request that is no longer PENDING."""

    def __init__(self, change_request_id: str, current_status: str | None = None) -> None:
        details: dict[str, Any] = {"change_request_id": change_request_id}
        if current_status:
            details["current_status"] = current_status
        super().__init__(
            f"Change request {change_request_id} has already been decided",
            "CHANGE_REQUEST_CONFLICT",
            details,
        )


class DuplicateResourceException(TaskApprovalException):
    """Raised when an insert violates a unique constraint (e.g. unit code, username)."""

    def __init__(self, resource_type: str, message: str | None = None) -> None:
        super().__init__(
            message or f"{resource_type} already exists",
            "DUPLICATE_RESOURCE",
            {"resource_type": resource_type},
        )
