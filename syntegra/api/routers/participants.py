"""
Session participant API endpoints.

Routes:
- GET /sessions/{id}/participants - List participants
- POST /sessions/{id}/participants - Enroll one user
- POST /sessions/{id}/participants/bulk - Enroll a selection of users
- PUT /sessions/{id}/participants/{pid} - Update participant status
- DELETE /sessions/{id}/participants/{pid} - Remove participant

Dependencies: syntegra.application.services, syntegra.core.enrollment
System role: Participant enrollment HTTP API
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from syntegra.api.deps.dependencies import get_participant_service
from syntegra.api.routers.router_utils import handle_portal_errors
from syntegra.application.services import ParticipantService
from syntegra.core.enrollment import BulkEnrollmentForm
from syntegra.models.common import ActionResult, PaginatedResult
from syntegra.models.participant import (
    AddParticipantRequest,
    BulkAddOutcome,
    BulkEnrollmentSubmission,
    ParticipantListParams,
    ParticipantStatusChange,
    ParticipantUser,
    RemovedParticipant,
    SessionParticipant,
    UpdateParticipantStatusRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions/{session_id}/participants", tags=["participants"])


@router.get("", response_model=PaginatedResult[SessionParticipant])
@handle_portal_errors
async def list_participants(
    session_id: str,
    params: Annotated[ParticipantListParams, Query()],
    participant_service: ParticipantService = Depends(get_participant_service),
) -> PaginatedResult[SessionParticipant]:
    return await participant_service.list_participants(session_id, params)


@router.post("", response_model=ActionResult[SessionParticipant], status_code=201)
@handle_portal_errors
async def add_participant(
    session_id: str,
    request: AddParticipantRequest,
    participant_service: ParticipantService = Depends(get_participant_service),
) -> ActionResult[SessionParticipant]:
    """
    Enroll a single user into a session.

    Raises:
        HTTPException(422): Invalid form
        HTTPException(4xx): Duplicate, full session, closed session or inactive user
    """
    return await participant_service.add_participant(session_id, request)


@router.post("/bulk", response_model=ActionResult[BulkAddOutcome], status_code=201)
@handle_portal_errors
async def bulk_add_participants(
    session_id: str,
    submission: BulkEnrollmentSubmission,
    participant_service: ParticipantService = Depends(get_participant_service),
) -> ActionResult[BulkAddOutcome]:
    """
    Enroll a selection of users.

    The result may be partial: users that were already enrolled or invalid
    are reported as skipped together with a warning toast.

    Raises:
        HTTPException(422): Empty selection or link expiry outside 1-168 hours
    """
    form = BulkEnrollmentForm(
        link_expires_hours=submission.link_expires_hours,
        send_invitations=submission.send_invitations,
    )
    for user_id in submission.user_ids:
        form.add_user(ParticipantUser(id=user_id, name=user_id))

    logger.info(
        "Bulk enrolling participants",
        extra={"session_id": session_id, "selected": len(form.selected_ids)},
    )
    return await participant_service.bulk_add(session_id, form)


@router.put("/{participant_id}", response_model=ActionResult[ParticipantStatusChange])
@handle_portal_errors
async def update_participant_status(
    session_id: str,
    participant_id: str,
    request: UpdateParticipantStatusRequest,
    participant_service: ParticipantService = Depends(get_participant_service),
) -> ActionResult[ParticipantStatusChange]:
    return await participant_service.update_status(session_id, participant_id, request)


@router.delete("/{participant_id}", response_model=ActionResult[RemovedParticipant])
@handle_portal_errors
async def remove_participant(
    session_id: str,
    participant_id: str,
    participant_service: ParticipantService = Depends(get_participant_service),
) -> ActionResult[RemovedParticipant]:
    return await participant_service.remove_participant(session_id, participant_id)
