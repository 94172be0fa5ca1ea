"""
Participant service orchestrator.

Coordinates enrollment of users into sessions, including the bulk add
whose result may be partial.

Dependencies: syntegra.boundary, syntegra.core.enrollment
System role: Participant enrollment use case orchestration
"""

import logging

from syntegra.application.services.base import PortalService
from syntegra.boundary.query_cache import QueryKeys
from syntegra.core.enrollment import BulkEnrollmentForm, reconcile_bulk_add
from syntegra.core.notifications import Toast
from syntegra.models.common import ActionResult, PaginatedResult
from syntegra.models.participant import (
    AddParticipantRequest,
    BulkAddOutcome,
    ParticipantListParams,
    ParticipantStatusChange,
    RemovedParticipant,
    SessionParticipant,
    UpdateParticipantStatusRequest,
)

logger = logging.getLogger(__name__)


class ParticipantService(PortalService):
    """Participant service orchestrator."""

    def _after_enrollment_change(self, session_id: str) -> None:
        self._invalidate(
            QueryKeys.participants.session(session_id),
            QueryKeys.sessions.lists(),
            QueryKeys.sessions.detail(session_id),
        )

    async def list_participants(
        self,
        session_id: str,
        params: ParticipantListParams | None = None,
    ) -> PaginatedResult[SessionParticipant]:
        params = params or ParticipantListParams()
        envelope = await self._query(
            QueryKeys.participants.list(session_id, params),
            f"/sessions/{session_id}/participants",
            params=params.to_query(),
            stale_seconds=self.query_settings.realtime_stale_seconds,
        )
        return self._page(envelope, SessionParticipant)

    async def add_participant(
        self,
        session_id: str,
        request: AddParticipantRequest,
    ) -> ActionResult[SessionParticipant]:
        """
        Enroll one user.

        Raises:
            ActionFailedError: Duplicate, full session, closed session or inactive user
        """
        envelope = await self._mutate(
            "participants.add",
            "post",
            f"/sessions/{session_id}/participants",
            json=request.model_dump(mode="json"),
        )
        participant = SessionParticipant.model_validate(envelope.data)
        self._after_enrollment_change(session_id)
        logger.info(f"{__name__}:add_participant - {participant.user_id} added to {session_id}")

        return ActionResult(
            data=participant,
            notifications=[
                Toast.success(
                    "Peserta berhasil ditambahkan!",
                    f"{participant.display_name} telah ditambahkan ke sesi",
                )
            ],
        )

    async def bulk_add(self, session_id: str, form: BulkEnrollmentForm) -> ActionResult[BulkAddOutcome]:
        """
        Enroll the users selected in a bulk-add form.

        Args:
            session_id: Target session
            form: Dialog state with the selected users

        Returns:
            ActionResult[BulkAddOutcome]: Added/skipped partition, with a
            warning toast when part of the batch was skipped

        Raises:
            FormValidationError: Empty selection or invalid link expiry
            ActionFailedError: Backend rejected the whole batch
        """
        request = form.begin_submit()
        succeeded = False
        try:
            envelope = await self._mutate(
                "participants.bulk_add",
                "post",
                f"/sessions/{session_id}/participants/bulk",
                json=request.model_dump(mode="json", exclude_none=True),
            )
            succeeded = True
        finally:
            form.finish_submit(succeeded)

        outcome, toasts = reconcile_bulk_add(envelope.data or {})
        self._after_enrollment_change(session_id)
        logger.info(
            f"{__name__}:bulk_add - session {session_id}: "
            f"{outcome.total_added} added, {len(outcome.skipped)} skipped"
        )
        return ActionResult(data=outcome, notifications=toasts)

    async def update_status(
        self,
        session_id: str,
        participant_id: str,
        request: UpdateParticipantStatusRequest,
    ) -> ActionResult[ParticipantStatusChange]:
        envelope = await self._mutate(
            "participants.update_status",
            "put",
            f"/sessions/{session_id}/participants/{participant_id}",
            json=request.model_dump(mode="json"),
        )
        change = ParticipantStatusChange.model_validate(envelope.data)
        self._invalidate(QueryKeys.participants.session(session_id))

        return ActionResult(
            data=change,
            notifications=[
                Toast.success(
                    "Status peserta berhasil diperbarui!",
                    f"Status {change.user_name} diubah dari {change.old_status} ke {change.new_status}",
                )
            ],
        )

    async def remove_participant(
        self,
        session_id: str,
        participant_id: str,
    ) -> ActionResult[RemovedParticipant]:
        envelope = await self._mutate(
            "participants.remove",
            "delete",
            f"/sessions/{session_id}/participants/{participant_id}",
        )
        removed = RemovedParticipant.model_validate(envelope.data or {"id": participant_id})
        self._after_enrollment_change(session_id)

        return ActionResult(
            data=removed,
            notifications=[
                Toast.success(
                    "Peserta berhasil dihapus!",
                    f"{removed.user_name or 'Peserta'} telah dihapus dari sesi",
                )
            ],
        )
