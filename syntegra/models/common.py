"""
Common response models and utilities.

Generic envelope, pagination and action result wrappers.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from syntegra.core.notifications import Toast

T = TypeVar("T")


class PaginationMeta(BaseModel):
    """Pagination block returned by list endpoints."""

    current_page: int = 1
    per_page: int = 10
    total: int = 0
    total_pages: int = 0
    has_next_page: bool = False
    has_prev_page: bool = False


class ApiEnvelope(BaseModel):
    """`{success, message, data}` envelope used by every upstream endpoint."""

    model_config = ConfigDict(extra="allow")

    success: bool
    message: str = ""
    data: Any = None
    meta: PaginationMeta | None = None
    timestamp: str | None = None


class PaginatedResult(BaseModel, Generic[T]):
    """A page of records plus pagination and filter metadata."""

    items: list[T]
    meta: PaginationMeta = Field(default_factory=PaginationMeta)
    filters: dict[str, Any] = Field(default_factory=dict)


class ActionResult(BaseModel, Generic[T]):
    """Result of a portal mutation with the toasts the UI should show."""

    data: T
    notifications: list[Toast] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    message: str = Field(description="Error message")
    toast: Toast | None = None
    errors: dict[str, str] | None = Field(default=None, description="Per-field validation messages")


class ListParams(BaseModel):
    """
    Base for list query parameters.

    `to_query()` mirrors how the UI builds its query string: falsy page/limit
    and empty strings are omitted, booleans are sent as "true"/"false".
    """

    page: int | None = None
    limit: int | None = None
    search: str | None = None

    def to_query(self) -> dict[str, str]:
        query: dict[str, str] = {}
        for key, value in self.model_dump(mode="json").items():
            if value is None or value == "":
                continue
            if isinstance(value, bool):
                query[key] = "true" if value else "false"
            elif isinstance(value, list):
                if value:
                    query[key] = ",".join(str(item) for item in value)
            elif key in ("page", "limit") and not value:
                continue
            else:
                query[key] = str(value)
        return query
