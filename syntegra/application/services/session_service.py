"""
Session service orchestrator.

Coordinates session scheduling: listing, detail, create/update/delete,
statistics and the public participant lookup.

Dependencies: syntegra.boundary, syntegra.models.session
System role: Session use case orchestration
"""

import logging
from typing import Any

from syntegra.application.services.base import PortalService
from syntegra.boundary.query_cache import QueryKeys
from syntegra.core.notifications import Toast
from syntegra.core.session_status import with_schedule
from syntegra.models.common import ActionResult, PaginatedResult
from syntegra.models.session import (
    AvailableTest,
    CheckParticipantRequest,
    CreateSessionRequest,
    ProctorOption,
    Session,
    SessionListParams,
)

logger = logging.getLogger(__name__)

PUBLIC_SESSION_STALE_SECONDS = 60


class SessionService(PortalService):
    """Session service orchestrator."""

    async def list_sessions(self, params: SessionListParams | None = None) -> PaginatedResult[Session]:
        """
        List sessions for the sessions table.

        Args:
            params: Pagination and filters

        Returns:
            PaginatedResult[Session]: Page of sessions
        """
        params = params or SessionListParams()
        envelope = await self._query(
            QueryKeys.sessions.list(params),
            "/sessions",
            params=params.to_query(),
            stale_seconds=self.query_settings.realtime_stale_seconds,
        )
        page = self._page(envelope, Session)
        return page.model_copy(update={"items": [with_schedule(session) for session in page.items]})

    async def get_session(self, session_id: str) -> Session:
        envelope = await self._query(
            QueryKeys.sessions.detail(session_id),
            f"/sessions/{session_id}",
            stale_seconds=self.query_settings.realtime_stale_seconds,
        )
        return with_schedule(Session.model_validate(envelope.data))

    async def get_public_session(self, session_code: str) -> dict[str, Any]:
        """Public session info shown on the participant entry page."""
        envelope = await self._query(
            QueryKeys.sessions.public(session_code),
            f"/sessions/public/{session_code}",
            stale_seconds=PUBLIC_SESSION_STALE_SECONDS,
        )
        return envelope.data or {}

    async def get_stats(self) -> dict[str, Any]:
        envelope = await self._query(QueryKeys.sessions.stats(), "/sessions/stats/summary")
        return envelope.data or {}

    async def list_available_tests(self) -> list[AvailableTest]:
        """Active tests that can be scheduled as session modules."""
        envelope = await self._query(
            QueryKeys.sessions.available_tests(),
            "/tests",
            params={"status": "active", "limit": "100"},
            stale_seconds=self.query_settings.catalog_stale_seconds,
        )
        return [AvailableTest.model_validate(item) for item in envelope.data or []]

    async def list_proctors(self) -> list[ProctorOption]:
        """Admin users that may proctor a session."""
        envelope = await self._query(
            QueryKeys.sessions.proctors(),
            "/users",
            params={"role": "admin", "limit": "50"},
        )
        return [ProctorOption.model_validate(item) for item in envelope.data or []]

    async def create_session(self, request: CreateSessionRequest) -> ActionResult[Session]:
        """
        Create a session.

        Args:
            request: Validated session form

        Returns:
            ActionResult[Session]: Created session with success toast

        Raises:
            ActionFailedError: Backend rejected the session
        """
        envelope = await self._mutate("sessions.create", "post", "/sessions", json=request.to_payload())
        session = with_schedule(Session.model_validate(envelope.data))

        self._invalidate(QueryKeys.sessions.lists(), QueryKeys.sessions.stats())
        self.cache.set(
            self.scope,
            QueryKeys.sessions.detail(session.id),
            envelope,
            self.query_settings.realtime_stale_seconds,
        )
        logger.info(f"{__name__}:create_session - created {session.id} ({session.session_code})")

        return ActionResult(
            data=session,
            notifications=[
                Toast.success(
                    "Sesi berhasil dibuat!",
                    f'Sesi "{session.session_name}" telah dibuat dengan kode: {session.session_code}',
                )
            ],
        )

    async def update_session(self, session_id: str, request: CreateSessionRequest) -> ActionResult[Session]:
        envelope = await self._mutate(
            "sessions.update", "put", f"/sessions/{session_id}", json=request.to_payload()
        )
        session = with_schedule(Session.model_validate(envelope.data))

        self._invalidate(QueryKeys.sessions.detail(session_id), QueryKeys.sessions.lists())
        logger.info(f"{__name__}:update_session - updated {session_id}")

        return ActionResult(
            data=session,
            notifications=[
                Toast.success("Sesi berhasil diperbarui!", f'Sesi "{session.session_name}" telah diperbarui')
            ],
        )

    async def delete_session(self, session_id: str) -> ActionResult[dict[str, Any]]:
        envelope = await self._mutate("sessions.delete", "delete", f"/sessions/{session_id}")

        self.cache.remove(QueryKeys.sessions.detail(session_id))
        self._invalidate(
            QueryKeys.sessions.lists(),
            QueryKeys.sessions.stats(),
            QueryKeys.participants.session(session_id),
        )
        logger.info(f"{__name__}:delete_session - deleted {session_id}")

        return ActionResult(
            data=envelope.data or {"id": session_id},
            notifications=[Toast.success("Sesi berhasil dihapus", "Sesi telah dihapus dari sistem")],
        )

    async def check_participant(self, request: CheckParticipantRequest) -> dict[str, Any]:
        """Public lookup of a participant by session code and phone number."""
        envelope = await self._mutate(
            "sessions.check_participant",
            "post",
            "/sessions/check-participant",
            json=request.model_dump(by_alias=True),
        )
        return envelope.data or {}
