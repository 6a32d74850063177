"""Domain exceptions for the intake application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class IntakeException(Exception):
    """Base exception for all intake application errors.

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
        """Return the JSON body used by the HTTP exception handler."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(IntakeException):
    """Raised when input validation fails (missing field, bad format, unknown reference)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(IntakeException):
    """Raised when administrator authentication fails or is missing."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class InvalidTokenException(IntakeException):
    """Raised when an upload token is unknown or inactive.

    Both cases share one message so callers cannot probe which tokens exist.
    """

    def __init__(self) -> None:
        super().__init__("Invalid or inactive token", "INVALID_TOKEN", {"field": "token"})


class ResourceNotFoundException(IntakeException):
    """Raised when a requested or referenced resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'category', 'process').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateResourceException(IntakeException):
    """Raised when creating reference data whose unique name already exists."""

    def __init__(self, resource_type: str, name: str) -> None:
        super().__init__(
            f"{resource_type} '{name}' already exists",
            "DUPLICATE_RESOURCE",
            {"resource_type": resource_type, "name": name},
        )


class PersistenceException(IntakeException):
    """Raised when a table read/write or store procedure fails unexpectedly."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Database operation failed: {operation}",
            "PERSISTENCE_ERROR",
            {"operation": operation, "reason": reason},
        )


class NotificationException(IntakeException):
    """Raised by notification channels. Always caught by the dispatcher."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Notification could not be sent",
            "NOTIFICATION_ERROR",
            {"reason": reason},
        )


class SqlNotConfiguredException(IntakeException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
