"""
Question bank service orchestrator.

Coordinates authoring and ordering of the questions of a test.

Dependencies: syntegra.boundary, syntegra.core.question_forms, syntegra.core.sequencing
System role: Question bank use case orchestration
"""

import logging
from typing import Any

from syntegra.application.services.base import PortalService
from syntegra.boundary.query_cache import QueryKeys
from syntegra.core.notifications import Toast
from syntegra.core.question_forms import build_question_payload, next_sequence, question_preview
from syntegra.core.sequencing import plan_move
from syntegra.models.common import ActionResult, PaginatedResult
from syntegra.models.question import (
    BulkSequenceRequest,
    MoveDirection,
    Question,
    QuestionForm,
    QuestionListParams,
    QuestionStats,
    SequenceUpdate,
)

logger = logging.getLogger(__name__)


class QuestionService(PortalService):
    """Question bank service orchestrator."""

    def _after_bank_change(self, test_id: str) -> None:
        self._invalidate(QueryKeys.questions.test(test_id), QueryKeys.tests.detail(test_id))

    async def list_questions(
        self,
        test_id: str,
        params: QuestionListParams | None = None,
    ) -> PaginatedResult[Question]:
        params = params or QuestionListParams()
        envelope = await self._query(
            QueryKeys.questions.list(test_id, params),
            f"/tests/{test_id}/questions",
            params=params.to_query(),
        )
        return self._page(envelope, Question)

    async def get_question(self, test_id: str, question_id: str) -> Question:
        envelope = await self._query(
            QueryKeys.questions.detail(test_id, question_id),
            f"/tests/{test_id}/questions/{question_id}",
        )
        return Question.model_validate(envelope.data)

    async def get_stats(self, test_id: str) -> QuestionStats:
        envelope = await self._query(QueryKeys.questions.stats(test_id), f"/tests/{test_id}/questions/stats")
        return QuestionStats.model_validate(envelope.data or {})

    async def create_question(self, test_id: str, form: QuestionForm) -> ActionResult[Question]:
        """
        Add a question to the bank.

        When the form has no sequence the question is appended after the
        current last one.

        Raises:
            ActionFailedError: Backend rejected the question
        """
        if form.sequence is None:
            stats = await self.get_stats(test_id)
            form = form.model_copy(update={"sequence": next_sequence(stats.total_questions)})

        payload = build_question_payload(form, test_id)
        envelope = await self._mutate("questions.create", "post", f"/tests/{test_id}/questions", json=payload)
        question = Question.model_validate(envelope.data)
        self._after_bank_change(test_id)
        logger.info(f"{__name__}:create_question - {question.id} added to {test_id}")

        return ActionResult(
            data=question,
            notifications=[
                Toast.success(
                    "Soal berhasil ditambahkan!",
                    f'Soal "{question_preview(form.question)}" telah ditambahkan',
                )
            ],
        )

    async def update_question(
        self,
        test_id: str,
        question_id: str,
        form: QuestionForm,
    ) -> ActionResult[Question]:
        payload = build_question_payload(form, test_id)
        envelope = await self._mutate(
            "questions.update",
            "put",
            f"/tests/{test_id}/questions/{question_id}",
            json=payload,
        )
        question = Question.model_validate(envelope.data)
        self._after_bank_change(test_id)

        return ActionResult(
            data=question,
            notifications=[
                Toast.success(
                    "Soal berhasil diperbarui!",
                    f'Soal "{question_preview(form.question)}" telah diperbarui',
                )
            ],
        )

    async def delete_question(self, test_id: str, question_id: str) -> ActionResult[dict[str, Any]]:
        envelope = await self._mutate(
            "questions.delete", "delete", f"/tests/{test_id}/questions/{question_id}"
        )
        self.cache.remove(QueryKeys.questions.detail(test_id, question_id))
        self._after_bank_change(test_id)

        return ActionResult(
            data=envelope.data or {"id": question_id},
            notifications=[Toast.success("Soal berhasil dihapus")],
        )

    async def update_sequence(self, test_id: str, update: SequenceUpdate) -> ActionResult[Question]:
        """Set the sequence number of a single question."""
        envelope = await self._mutate(
            "questions.sequence",
            "put",
            f"/tests/{test_id}/questions/{update.question_id}/sequence",
            json={"sequence": update.sequence},
        )
        self._invalidate(QueryKeys.questions.test(test_id))

        return ActionResult(
            data=Question.model_validate(envelope.data),
            notifications=[Toast.success("Urutan soal berhasil diubah")],
        )

    async def move_question(
        self,
        test_id: str,
        question_id: str,
        direction: MoveDirection,
        params: QuestionListParams | None = None,
    ) -> ActionResult[list[SequenceUpdate]]:
        """
        Swap a question with its neighbour in the bank-soal table.

        One sequence update moves the question onto its neighbour's number;
        the backend shifts the neighbour into the vacated slot. A question at
        the edge of the list is left untouched.

        Args:
            test_id: Owning test
            question_id: Question to move
            direction: "up" or "down"
            params: Page of the table the move was made on
        """
        params = (params or QuestionListParams()).model_copy(
            update={"sort_by": "sequence", "sort_order": "asc"}
        )
        page = await self.list_questions(test_id, params)
        plan = plan_move(page.items, question_id, direction)
        if not plan:
            return ActionResult(data=[])

        moved = plan[0]
        try:
            await self._mutate(
                "questions.sequence",
                "put",
                f"/tests/{test_id}/questions/{moved.question_id}/sequence",
                json={"sequence": moved.sequence},
            )
        finally:
            self._invalidate(QueryKeys.questions.test(test_id))
        logger.info(f"{__name__}:move_question - {question_id} moved {MoveDirection(direction).value}")

        return ActionResult(data=plan, notifications=[Toast.success("Urutan soal berhasil diubah")])

    async def bulk_update_sequence(self, test_id: str, request: BulkSequenceRequest) -> ActionResult[dict[str, Any]]:
        envelope = await self._mutate(
            "questions.bulk_sequence",
            "put",
            f"/tests/{test_id}/questions/bulk/sequence",
            json=request.model_dump(),
        )
        self._invalidate(QueryKeys.questions.test(test_id))

        return ActionResult(
            data=envelope.data or {},
            notifications=[Toast.success("Urutan soal berhasil diperbarui")],
        )
