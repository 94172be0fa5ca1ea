"""
Shared plumbing for portal services.

Every service is bound to one caller: reads go through the query cache in
that caller's scope, mutations go straight to the backend and translate
rejections into localized toasts.

Dependencies: syntegra.boundary
System role: Base class for use case orchestrators
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel

from syntegra.boundary.api_client import BackendApiClient
from syntegra.boundary.query_cache import QueryCache, QueryKey, scope_for_token
from syntegra.configs.query import QuerySettings
from syntegra.core.exceptions import ActionFailedError, BackendRequestError, BackendUnavailableError
from syntegra.core.notifications import error_toast
from syntegra.models.common import ApiEnvelope, PaginatedResult, PaginationMeta

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class PortalService:
    """Base for services that call the REST backend on behalf of a user."""

    def __init__(
        self,
        client: BackendApiClient,
        cache: QueryCache,
        token: str | None = None,
        query_settings: QuerySettings | None = None,
    ) -> None:
        """
        Initialize service.

        Args:
            client: Backend API client
            cache: Shared query cache
            token: Caller's bearer token, forwarded upstream
            query_settings: Stale times (defaults when omitted)
        """
        self.client = client
        self.cache = cache
        self.token = token
        self.scope = scope_for_token(token)
        self.query_settings = query_settings or QuerySettings()

    async def _query(
        self,
        key: QueryKey,
        path: str,
        params: dict[str, Any] | None = None,
        stale_seconds: float | None = None,
    ) -> ApiEnvelope:
        """GET through the cache."""
        return await self.cache.fetch(
            self.scope,
            key,
            lambda: self.client.get(path, params=params, token=self.token),
            stale_seconds,
        )

    async def _mutate(
        self,
        operation: str,
        method: str,
        path: str,
        json: Any = None,
    ) -> ApiEnvelope:
        """
        Send a mutation once.

        Raises:
            ActionFailedError: Backend rejected the mutation (toast attached)
            BackendUnavailableError: Backend could not be reached
        """
        try:
            if method == "delete":
                return await self.client.delete(path, token=self.token)
            return await getattr(self.client, method)(path, json=json, token=self.token)
        except BackendUnavailableError:
            raise
        except BackendRequestError as e:
            logger.warning(f"{__name__}:{operation} - {e.message}")
            if e.status_code is None:
                status_code = 400
            elif e.is_client_error:
                status_code = e.status_code
            else:
                status_code = 502
            raise ActionFailedError(
                operation=operation,
                toast=error_toast(operation, e.message),
                status_code=status_code,
                details={"backend_message": e.message},
            ) from e

    def _invalidate(self, *prefixes: QueryKey) -> None:
        for prefix in prefixes:
            self.cache.invalidate(prefix)

    @staticmethod
    def _page(envelope: ApiEnvelope, model: type[ModelT]) -> PaginatedResult[ModelT]:
        items = [model.model_validate(item) for item in envelope.data or []]
        extra = envelope.model_extra or {}
        return PaginatedResult[model](
            items=items,
            meta=envelope.meta or PaginationMeta(total=len(items), per_page=len(items) or 10),
            filters=extra.get("filters") or {},
        )
