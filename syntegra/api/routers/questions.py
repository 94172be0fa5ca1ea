"""
Question bank API endpoints.

Routes:
- GET /tests/{id}/questions - List questions
- POST /tests/{id}/questions - Add question
- GET /tests/{id}/questions/stats - Question bank statistics
- PUT /tests/{id}/questions/bulk/sequence - Reorder several questions
- GET /tests/{id}/questions/{qid} - Get question
- PUT /tests/{id}/questions/{qid} - Update question
- DELETE /tests/{id}/questions/{qid} - Delete question
- PUT /tests/{id}/questions/{qid}/sequence - Set one sequence number
- POST /tests/{id}/questions/{qid}/move - Swap with the neighbour

Dependencies: syntegra.application.services, syntegra.models.question
System role: Question bank HTTP API
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from syntegra.api.deps.dependencies import get_question_service
from syntegra.api.routers.router_utils import handle_portal_errors
from syntegra.application.services import QuestionService
from syntegra.models.common import ActionResult, PaginatedResult
from syntegra.models.question import (
    BulkSequenceRequest,
    MoveQuestionRequest,
    Question,
    QuestionForm,
    QuestionListParams,
    QuestionStats,
    SequenceRequest,
    SequenceUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tests/{test_id}/questions", tags=["questions"])


@router.get("", response_model=PaginatedResult[Question])
@handle_portal_errors
async def list_questions(
    test_id: str,
    params: Annotated[QuestionListParams, Query()],
    question_service: QuestionService = Depends(get_question_service),
) -> PaginatedResult[Question]:
    return await question_service.list_questions(test_id, params)


@router.post("", response_model=ActionResult[Question], status_code=201)
@handle_portal_errors
async def create_question(
    test_id: str,
    form: QuestionForm,
    question_service: QuestionService = Depends(get_question_service),
) -> ActionResult[Question]:
    """
    Add a question from the question dialog.

    The payload sent upstream depends on the question type: options are
    generated for true/false and rating scales, and media URLs are dropped
    for types that cannot show them.

    Raises:
        HTTPException(422): Invalid form
        HTTPException(4xx): Backend rejected the question (toast attached)
    """
    logger.info("Adding question", extra={"test_id": test_id, "question_type": form.question_type.value})
    return await question_service.create_question(test_id, form)


@router.get("/stats", response_model=QuestionStats)
@handle_portal_errors
async def get_question_stats(
    test_id: str,
    question_service: QuestionService = Depends(get_question_service),
) -> QuestionStats:
    return await question_service.get_stats(test_id)


@router.put("/bulk/sequence", response_model=ActionResult[dict[str, Any]])
@handle_portal_errors
async def bulk_update_sequence(
    test_id: str,
    request: BulkSequenceRequest,
    question_service: QuestionService = Depends(get_question_service),
) -> ActionResult[dict[str, Any]]:
    return await question_service.bulk_update_sequence(test_id, request)


@router.get("/{question_id}", response_model=Question)
@handle_portal_errors
async def get_question(
    test_id: str,
    question_id: str,
    question_service: QuestionService = Depends(get_question_service),
) -> Question:
    return await question_service.get_question(test_id, question_id)


@router.put("/{question_id}", response_model=ActionResult[Question])
@handle_portal_errors
async def update_question(
    test_id: str,
    question_id: str,
    form: QuestionForm,
    question_service: QuestionService = Depends(get_question_service),
) -> ActionResult[Question]:
    return await question_service.update_question(test_id, question_id, form)


@router.delete("/{question_id}", response_model=ActionResult[dict[str, Any]])
@handle_portal_errors
async def delete_question(
    test_id: str,
    question_id: str,
    question_service: QuestionService = Depends(get_question_service),
) -> ActionResult[dict[str, Any]]:
    return await question_service.delete_question(test_id, question_id)


@router.put("/{question_id}/sequence", response_model=ActionResult[Question])
@handle_portal_errors
async def update_question_sequence(
    test_id: str,
    question_id: str,
    request: SequenceRequest,
    question_service: QuestionService = Depends(get_question_service),
) -> ActionResult[Question]:
    update = SequenceUpdate(question_id=question_id, sequence=request.sequence)
    return await question_service.update_sequence(test_id, update)


@router.post("/{question_id}/move", response_model=ActionResult[list[SequenceUpdate]])
@handle_portal_errors
async def move_question(
    test_id: str,
    question_id: str,
    request: MoveQuestionRequest,
    params: Annotated[QuestionListParams, Query()],
    question_service: QuestionService = Depends(get_question_service),
) -> ActionResult[list[SequenceUpdate]]:
    """
    Move a question one place up or down.

    Only the moved question and its neighbour are renumbered; moving the
    first question up or the last one down is a no-op.
    """
    return await question_service.move_question(test_id, question_id, request.direction, params)
