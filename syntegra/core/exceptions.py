"""
Exception hierarchy for the Syntegra portal.

Provides layered exception structure for portal-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from syntegra.core.notifications import Toast


class SyntegraException(Exception):
    """Base exception for all portal errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class FormValidationError(SyntegraException):
    """Raised when a form payload fails client-side validation."""

    def __init__(
        self,
        errors: dict[str, str],
        message: str = "Data yang dikirim tidak valid",
    ) -> None:
        """
        Initialize validation error.

        Args:
            errors: Mapping of field path to localized error message
            message: Summary message
        """
        self.errors = errors
        super().__init__(message, {"errors": errors})

    @property
    def first_error(self) -> str:
        """Return the first field message, or the summary when there is none."""
        return next(iter(self.errors.values()), self.message)


class BackendRequestError(SyntegraException):
    """Raised when the REST backend rejects a request or reports success=false."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize backend request error.

        Args:
            message: Message returned by the backend envelope
            status_code: HTTP status code, None when the envelope reported failure on a 2xx
            path: Upstream path that failed
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        if path:
            details["path"] = path
        self.status_code = status_code
        self.path = path
        super().__init__(message, details)

    @property
    def is_client_error(self) -> bool:
        """True for 4xx responses, which are never retried."""
        return self.status_code is not None and 400 <= self.status_code < 500


class BackendUnavailableError(BackendRequestError):
    """Raised when the REST backend cannot be reached or answers with garbage."""

    pass


class ActionFailedError(SyntegraException):
    """Raised by services when a portal action fails; carries the toast to show."""

    def __init__(
        self,
        operation: str,
        toast: "Toast",
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize action failure.

        Args:
            operation: Operation name (e.g. "participants.bulk_add")
            toast: Localized error toast selected for the failure
            status_code: HTTP status the portal answers with
            details: Additional context
        """
        details = details or {}
        details["operation"] = operation
        self.operation = operation
        self.toast = toast
        self.status_code = status_code
        super().__init__(toast.description or toast.title, details)
