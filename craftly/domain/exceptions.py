"""Domain exceptions for the Craftly marketplace.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class CraftlyException(Exception):
    """Base exception for all Craftly application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

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
        """Return the failure envelope sent to API clients."""
        body: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(CraftlyException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(CraftlyException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(CraftlyException):
    """Raised when the caller may not act on the resource (e.g. not the owner)."""

    def __init__(
        self,
        message: str = "Permission denied",
        resource: str | None = None,
    ) -> None:
        """Initialize with message and optional resource type.

        Args:
            message: Human-readable message.
            resource: Optional resource type (e.g. 'order', 'product').
        """
        details = {"resource": resource} if resource else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(CraftlyException):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        message: str | None = None,
    ) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'Order', 'Product').
            resource_id: The ID that was not found.
            message: Optional override; defaults to "<type> not found".
        """
        super().__init__(
            message or f"{resource_type} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type.lower(), "resource_id": resource_id},
        )


class ConflictException(CraftlyException):
    """Raised when a write collides with existing state (duplicate email, repeat review)."""

    def __init__(self, message: str, resource: str | None = None) -> None:
        details = {"resource": resource} if resource else {}
        super().__init__(message, "CONFLICT", details)


class RecoveryCodesExhaustedException(CraftlyException):
    """Raised when an account has no unused recovery codes left."""

    def __init__(self) -> None:
        super().__init__(
            "No recovery codes remaining. Please contact admin for assistance.",
            "RECOVERY_CODES_EXHAUSTED",
        )


class FirestoreUnavailableException(CraftlyException):
    """Raised when an operation needs Firestore but the client is not configured."""

    def __init__(self) -> None:
        super().__init__(
            "Firestore not configured (set FIREBASE_SERVICE_ACCOUNT_KEY or PATH)",
            "SERVICE_UNAVAILABLE",
        )
