"""
Dependency injection container.

Factory functions for FastAPI dependencies. The api client, query cache
and poller are process-wide; services are built per request and bound to
the caller's bearer token.

Dependencies: syntegra.configs, syntegra.application, syntegra.boundary
System role: DI container for service injection
"""

from typing import TypeVar

from fastapi import Depends, Header

from syntegra.application.services import (
    DashboardService,
    ParticipantService,
    PsychTestService,
    QuestionService,
    ReportService,
    SessionService,
    UserService,
)
from syntegra.application.services.base import PortalService
from syntegra.application.services.dashboard_service import DASHBOARD_STALE_SECONDS
from syntegra.application.services.psychtest_service import TEST_STATS_STALE_SECONDS
from syntegra.boundary.api_client import BackendApiClient
from syntegra.boundary.poller import PollJob, QueryPoller
from syntegra.boundary.query_cache import QueryCache, QueryKeys, scope_for_token
from syntegra.configs import Settings, get_settings

ServiceT = TypeVar("ServiceT", bound=PortalService)


class ServiceCache:
    """Container for cached process-wide instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._api_client = None
        self._query_cache = None
        self._poller = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def api_client(self) -> BackendApiClient:
        """Get cached upstream API client."""
        if self._api_client is None:
            api = self.settings.backend_api
            query = self.settings.query
            self._api_client = BackendApiClient(
                base_url=api.base_url,
                timeout_seconds=api.timeout_seconds,
                max_retries=query.retry_max_attempts,
                retry_initial_seconds=query.retry_initial_seconds,
                retry_max_seconds=query.retry_max_seconds,
            )
        return self._api_client

    @property
    def query_cache(self) -> QueryCache:
        """Get cached query cache."""
        if self._query_cache is None:
            query = self.settings.query
            self._query_cache = QueryCache(
                default_stale_seconds=query.default_stale_seconds,
                max_entries=query.cache_max_entries,
            )
        return self._query_cache

    @property
    def poller(self) -> QueryPoller:
        """Get cached poller with the standard refetch jobs registered."""
        if self._poller is None:
            self._poller = self._build_poller()
        return self._poller

    def _build_poller(self) -> QueryPoller:
        token = self.settings.backend_api.service_token
        query = self.settings.query
        poller = QueryPoller(self.query_cache, service_scope=scope_for_token(token) if token else None)

        # Session lists are keyed by filters, so they are only expired.
        poller.register(
            PollJob(
                "sessions",
                QueryKeys.sessions.lists(),
                query.sessions_poll_seconds,
            )
        )
        poller.register(
            PollJob(
                "session-stats",
                QueryKeys.sessions.stats(),
                query.session_stats_poll_seconds,
                fetcher=lambda: self.api_client.get("/sessions/stats/summary", token=token),
            )
        )
        poller.register(
            PollJob(
                "test-stats",
                QueryKeys.tests.stats(),
                query.test_stats_poll_seconds,
                fetcher=lambda: self.api_client.get("/tests/stats/summary", token=token),
                stale_seconds=TEST_STATS_STALE_SECONDS,
            )
        )
        poller.register(
            PollJob(
                "admin-dashboard",
                QueryKeys.dashboard.admin(),
                query.dashboard_poll_seconds,
                fetcher=lambda: self.api_client.get("/dashboard/admin", token=token),
                stale_seconds=DASHBOARD_STALE_SECONDS,
            )
        )
        return poller

    async def aclose(self) -> None:
        """Stop background work and release the HTTP connection pool."""
        if self._poller is not None:
            await self._poller.stop()
        if self._api_client is not None:
            await self._api_client.aclose()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._api_client = None
        self._query_cache = None
        self._poller = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """
    Extract the caller's bearer token.

    Authentication is owned by the backend; the portal only forwards the
    token and scopes cached reads by it.
    """
    if not authorization:
        return None
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        return None
    return credentials.strip()


def _build(service_cls: type[ServiceT], token: str | None) -> ServiceT:
    cache = get_service_cache()
    return service_cls(cache.api_client, cache.query_cache, token, cache.settings.query)


def get_session_service(token: str | None = Depends(get_bearer_token)) -> SessionService:
    """
    Get session service instance.

    Args:
        token: Caller's bearer token (injected via Depends)

    Returns:
        SessionService: Session service bound to the caller
    """
    return _build(SessionService, token)


def get_participant_service(token: str | None = Depends(get_bearer_token)) -> ParticipantService:
    return _build(ParticipantService, token)


def get_test_service(token: str | None = Depends(get_bearer_token)) -> PsychTestService:
    return _build(PsychTestService, token)


def get_question_service(token: str | None = Depends(get_bearer_token)) -> QuestionService:
    return _build(QuestionService, token)


def get_user_service(token: str | None = Depends(get_bearer_token)) -> UserService:
    return _build(UserService, token)


def get_dashboard_service(token: str | None = Depends(get_bearer_token)) -> DashboardService:
    return _build(DashboardService, token)


def get_report_service(token: str | None = Depends(get_bearer_token)) -> ReportService:
    return _build(ReportService, token)
