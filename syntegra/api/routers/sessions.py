"""
Session API endpoints.

Routes:
- GET /sessions - List sessions
- POST /sessions - Create session
- GET /sessions/stats - Session statistics
- GET /sessions/available-tests - Active tests for session modules
- GET /sessions/proctors - Admins that can proctor
- GET /sessions/public/{code} - Public session info
- POST /sessions/check-participant - Public participant lookup
- GET /sessions/{id} - Get session
- PUT /sessions/{id} - Update session
- DELETE /sessions/{id} - Delete session

Dependencies: syntegra.application.services, syntegra.models
System role: Session management HTTP API
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from syntegra.api.deps.dependencies import get_session_service
from syntegra.api.routers.router_utils import handle_portal_errors
from syntegra.application.services import SessionService
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

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=PaginatedResult[Session])
@handle_portal_errors
async def list_sessions(
    params: Annotated[SessionListParams, Query()],
    session_service: SessionService = Depends(get_session_service),
) -> PaginatedResult[Session]:
    """
    List sessions with pagination and filters.

    Args:
        params: page, limit, search, status, participant_id
        session_service: Injected SessionService

    Returns:
        PaginatedResult[Session]: Page of sessions
    """
    return await session_service.list_sessions(params)


@router.post("", response_model=ActionResult[Session], status_code=201)
@handle_portal_errors
async def create_session(
    request: CreateSessionRequest,
    session_service: SessionService = Depends(get_session_service),
) -> ActionResult[Session]:
    """
    Create a session with its test modules.

    Raises:
        HTTPException(422): Invalid form
        HTTPException(409/400): Backend rejected the session (toast attached)
        HTTPException(502): Backend unavailable
    """
    logger.info("Creating session", extra={"session_code": request.session_code})
    return await session_service.create_session(request)


@router.get("/stats")
@handle_portal_errors
async def get_session_stats(
    session_service: SessionService = Depends(get_session_service),
) -> dict[str, Any]:
    return await session_service.get_stats()


@router.get("/available-tests", response_model=list[AvailableTest])
@handle_portal_errors
async def list_available_tests(
    session_service: SessionService = Depends(get_session_service),
) -> list[AvailableTest]:
    return await session_service.list_available_tests()


@router.get("/proctors", response_model=list[ProctorOption])
@handle_portal_errors
async def list_proctors(
    session_service: SessionService = Depends(get_session_service),
) -> list[ProctorOption]:
    return await session_service.list_proctors()


@router.get("/public/{session_code}")
@handle_portal_errors
async def get_public_session(
    session_code: str,
    session_service: SessionService = Depends(get_session_service),
) -> dict[str, Any]:
    """Session info for the participant entry page."""
    return await session_service.get_public_session(session_code)


@router.post("/check-participant")
@handle_portal_errors
async def check_participant(
    request: CheckParticipantRequest,
    session_service: SessionService = Depends(get_session_service),
) -> dict[str, Any]:
    return await session_service.check_participant(request)


@router.get("/{session_id}", response_model=Session)
@handle_portal_errors
async def get_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> Session:
    return await session_service.get_session(session_id)


@router.put("/{session_id}", response_model=ActionResult[Session])
@handle_portal_errors
async def update_session(
    session_id: str,
    request: CreateSessionRequest,
    session_service: SessionService = Depends(get_session_service),
) -> ActionResult[Session]:
    logger.info("Updating session", extra={"session_id": session_id})
    return await session_service.update_session(session_id, request)


@router.delete("/{session_id}", response_model=ActionResult[dict[str, Any]])
@handle_portal_errors
async def delete_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> ActionResult[dict[str, Any]]:
    logger.info("Deleting session", extra={"session_id": session_id})
    return await session_service.delete_session(session_id)
