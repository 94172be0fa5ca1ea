"""
HTTP client for the psikotes REST backend.

Wraps httpx.AsyncClient, forwards the caller's bearer token and correlation
ID, and unwraps the `{success, message, data, meta}` envelope. Reads are
retried with exponential backoff; mutations are sent exactly once.

Dependencies: httpx, tenacity
System role: Upstream API boundary
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from syntegra.core.exceptions import BackendRequestError, BackendUnavailableError
from syntegra.models.common import ApiEnvelope
from syntegra.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    """Retry transport failures and server errors, never 4xx."""
    return isinstance(exc, BackendRequestError) and not exc.is_client_error


class BackendApiClient:
    """Async client for the psikotes REST API."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        max_retries: int = 3,
        retry_initial_seconds: float = 1.0,
        retry_max_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the backend client.

        Args:
            base_url: Backend base URL including the API prefix
            timeout_seconds: Per-request timeout
            max_retries: GET retries after the first failure
            retry_initial_seconds: First backoff delay, doubled per retry
            retry_max_seconds: Backoff ceiling
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._max_retries = max_retries
        self._retry_initial_seconds = retry_initial_seconds
        self._retry_max_seconds = retry_max_seconds
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    def _headers(self, token: str | None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        correlation_id = get_correlation_id()
        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        token: str | None,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> ApiEnvelope:
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                headers=self._headers(token),
            )
        except httpx.HTTPError as e:
            logger.warning(f"{__name__}:{method} {path} - transport error: {e}")
            raise BackendUnavailableError(
                message="Tidak dapat terhubung ke server",
                path=path,
                details={"error": str(e)},
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise BackendUnavailableError(
                message="Respons server tidak valid",
                status_code=response.status_code,
                path=path,
            ) from e

        if not isinstance(body, dict):
            raise BackendUnavailableError(
                message="Respons server tidak valid",
                status_code=response.status_code,
                path=path,
            )

        if response.is_error:
            message = body.get("message") or response.reason_phrase or "Request failed"
            raise BackendRequestError(
                message=message,
                status_code=response.status_code,
                path=path,
                details={"errors": body.get("errors")} if body.get("errors") else None,
            )

        try:
            envelope = ApiEnvelope.model_validate({"success": True, **body})
        except ValidationError as e:
            raise BackendUnavailableError(
                message="Respons server tidak valid",
                status_code=response.status_code,
                path=path,
            ) from e

        if not envelope.success:
            raise BackendRequestError(message=envelope.message or "Request failed", path=path)
        return envelope

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        token: str | None = None,
    ) -> ApiEnvelope:
        """
        GET with retry.

        Retries up to `max_retries` times with delays of
        min(initial * 2**n, max) seconds; 4xx responses fail immediately.

        Raises:
            BackendRequestError: Backend rejected the request
            BackendUnavailableError: Backend unreachable after all retries
        """
        retrying = AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_exponential(
                multiplier=self._retry_initial_seconds,
                max=self._retry_max_seconds,
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:get {path} - Retry {retry_state.attempt_number}/{self._max_retries}"
            ),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._send("GET", path, token, params=params)
        raise AssertionError("unreachable")  # pragma: no cover

    async def post(self, path: str, json: Any = None, token: str | None = None) -> ApiEnvelope:
        return await self._send("POST", path, token, json=json)

    async def put(self, path: str, json: Any = None, token: str | None = None) -> ApiEnvelope:
        return await self._send("PUT", path, token, json=json)

    async def delete(self, path: str, token: str | None = None) -> ApiEnvelope:
        return await self._send("DELETE", path, token)
