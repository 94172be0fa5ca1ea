"""
Validation helpers shared by the form schemas.

Form schemas raise `PydanticCustomError` so that the localized message
reaches the caller untouched; this module turns pydantic errors into the
portal's `FormValidationError`.

Dependencies: pydantic, pydantic_core
System role: Localized form validation
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticCustomError

from syntegra.core.exceptions import FormValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def invalid(message: str) -> PydanticCustomError:
    """Build a validation error carrying a localized message verbatim."""
    return PydanticCustomError("form_invalid", message)


def format_validation_errors(exc: ValidationError) -> dict[str, str]:
    """
    Map pydantic errors to `{field_path: message}`.

    The first message per field wins. Model-level errors use the key "_form".
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"]) or "_form"
        errors.setdefault(path, error["msg"])
    return errors


def validate_form(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """
    Validate raw form data against a schema.

    Raises:
        FormValidationError: With localized per-field messages
    """
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise FormValidationError(format_validation_errors(exc)) from exc
