"""
Bulk participant enrollment workflow.

`BulkEnrollmentForm` holds the selection made in the bulk-add dialog and
turns it into a validated request; `reconcile_bulk_add` interprets the
backend's answer, which may enroll only part of the batch.

Dependencies: pydantic (via models)
System role: Participant enrollment workflow
"""

import logging
from typing import Any

from syntegra.core.exceptions import FormValidationError
from syntegra.core.notifications import Toast
from syntegra.core.validation import validate_form
from syntegra.models.participant import (
    DEFAULT_LINK_EXPIRY_HOURS,
    BulkAddOutcome,
    BulkAddParticipantsRequest,
    BulkAddResult,
    InvitationTally,
    ParticipantUser,
)

logger = logging.getLogger(__name__)


class BulkEnrollmentForm:
    """
    Selection state of the bulk-add dialog.

    Users are kept in selection order and never duplicated. Submission is
    refused while nothing is selected or a previous submit is still running.
    """

    def __init__(
        self,
        link_expires_hours: Any = DEFAULT_LINK_EXPIRY_HOURS,
        send_invitations: bool = True,
    ) -> None:
        self.link_expires_hours = link_expires_hours
        self.send_invitations = send_invitations
        self._selected: dict[str, ParticipantUser] = {}
        self._submitting = False

    @property
    def selected_users(self) -> list[ParticipantUser]:
        return list(self._selected.values())

    @property
    def selected_ids(self) -> list[str]:
        return list(self._selected)

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def can_submit(self) -> bool:
        return bool(self._selected) and not self._submitting

    def add_user(self, user: ParticipantUser) -> bool:
        """Select a user; returns False when already selected."""
        if user.id in self._selected:
            return False
        self._selected[user.id] = user
        return True

    def remove_user(self, user_id: str) -> None:
        self._selected.pop(user_id, None)

    def clear(self) -> None:
        self._selected.clear()

    def to_request(self) -> BulkAddParticipantsRequest:
        """
        Validate the selection into a bulk-add request.

        Raises:
            FormValidationError: Empty selection or link expiry outside 1-168 hours
        """
        return validate_form(
            BulkAddParticipantsRequest,
            {
                "participants": [{"user_id": user_id} for user_id in self._selected],
                "link_expires_hours": self.link_expires_hours,
                "send_invitations": self.send_invitations,
            },
        )

    def begin_submit(self) -> BulkAddParticipantsRequest:
        """
        Lock the form and return the request to send.

        Raises:
            FormValidationError: If the form cannot be submitted
        """
        if self._submitting:
            raise FormValidationError({"_form": "Penambahan peserta sedang diproses"})
        request = self.to_request()
        self._submitting = True
        return request

    def finish_submit(self, succeeded: bool) -> None:
        """Unlock the form; a successful submit also clears the selection."""
        self._submitting = False
        if succeeded:
            self.clear()


def reconcile_bulk_add(data: dict[str, Any] | BulkAddResult) -> tuple[BulkAddOutcome, list[Toast]]:
    """
    Partition a bulk-add response into added and skipped participants.

    Args:
        data: `data` block of the backend response

    Returns:
        tuple: Reconciled outcome and the toasts to show
    """
    result = data if isinstance(data, BulkAddResult) else BulkAddResult.model_validate(data or {})

    skipped = result.skipped_participants or []
    total_added = result.total_added if result.total_added is not None else len(result.added_participants)

    outcome = BulkAddOutcome(
        added=result.added_participants,
        total_added=total_added,
        skipped=skipped,
        invitations=result.invitation_status or InvitationTally(),
    )

    description = f"{total_added} peserta ditambahkan"
    if skipped:
        description += f", {len(skipped)} dilewati"
    toasts = [Toast.success("Peserta berhasil ditambahkan!", description)]

    if skipped:
        logger.info(
            "Bulk add partially applied: %d added, %d skipped (%s)",
            total_added,
            len(skipped),
            "; ".join(f"{item.user_id}: {item.reason}" for item in skipped),
        )
        toasts.append(
            Toast.warning(
                f"{len(skipped)} peserta dilewati",
                "Beberapa peserta sudah terdaftar atau tidak valid",
            )
        )

    return outcome, toasts
