"""
Portal error handling utilities.

Provides a decorator for consistent error handling across portal API
endpoints. Every failure leaves the route as an HTTPException whose detail
carries the message and the toast the UI should show.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from syntegra.core.exceptions import (
    ActionFailedError,
    BackendRequestError,
    BackendUnavailableError,
    FormValidationError,
)
from syntegra.core.notifications import GENERIC_ERRORS, Toast

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

UNAVAILABLE_TITLE = "Server tidak dapat dihubungi"
INVALID_FORM_TITLE = "Data tidak valid"


def error_detail(message: str, toast: Toast, errors: dict[str, str] | None = None) -> dict[str, Any]:
    """Build the HTTPException detail body."""
    detail: dict[str, Any] = {"message": message, "toast": toast.model_dump(mode="json")}
    if errors:
        detail["errors"] = errors
    return detail


def upstream_status(error: BackendRequestError) -> int:
    """Portal status for an upstream failure: 4xx passes through, the rest is 502."""
    if isinstance(error, BackendUnavailableError):
        return status.HTTP_502_BAD_GATEWAY
    if error.status_code is None:
        return status.HTTP_400_BAD_REQUEST
    if error.is_client_error:
        return error.status_code
    return status.HTTP_502_BAD_GATEWAY


def handle_portal_errors(func: F) -> F:
    """
    Decorator to handle portal errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with context (operation, upstream path)
    - Mapping exceptions to HTTP status codes
    - Attaching the localized toast to every error response
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except FormValidationError as e:
            logger.info("Form validation failed", extra={"errors": e.errors})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=error_detail(e.first_error, Toast.error(INVALID_FORM_TITLE, e.first_error), e.errors),
            )

        except ActionFailedError as e:
            logger.warning(
                "Portal action failed",
                extra={"operation": e.operation, "error": e.message},
            )
            raise HTTPException(status_code=e.status_code, detail=error_detail(e.message, e.toast))

        except BackendUnavailableError as e:
            logger.error("Backend unavailable", extra={"path": e.path, "error": e.message})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=error_detail(e.message, Toast.error(UNAVAILABLE_TITLE, e.message)),
            )

        except BackendRequestError as e:
            logger.warning(
                "Backend rejected request",
                extra={"path": e.path, "status_code": e.status_code, "error": e.message},
            )
            raise HTTPException(
                status_code=upstream_status(e),
                detail=error_detail(e.message, Toast.error(GENERIC_ERRORS.fallback_title, e.message)),
            )

        except Exception as e:
            logger.exception("Unexpected failure in portal operation", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=error_detail(
                    "Terjadi kesalahan internal",
                    Toast.error(GENERIC_ERRORS.fallback_title, GENERIC_ERRORS.fallback_description),
                ),
            )

    return wrapper  # type: ignore
