"""Tests for question bank reordering."""

import pytest

from syntegra.core.sequencing import plan_move
from syntegra.models.question import MoveDirection, Question


@pytest.fixture
def questions(question_records) -> list[Question]:
    return [Question.model_validate(record) for record in question_records]


def test_move_up_swaps_with_previous(questions) -> None:
    plan = plan_move(questions, "q2", MoveDirection.UP)

    assert [(u.question_id, u.sequence) for u in plan] == [("q2", 1), ("q1", 2)]


def test_move_down_swaps_with_next(questions) -> None:
    plan = plan_move(questions, "q2", "down")

    assert [(u.question_id, u.sequence) for u in plan] == [("q2", 3), ("q3", 2)]


def test_only_two_questions_are_touched(questions) -> None:
    plan = plan_move(questions, "q1", "down")

    assert {u.question_id for u in plan} == {"q1", "q2"}


def test_swap_keeps_gaps_in_numbering() -> None:
    questions = [
        Question(id="a", question="a", question_type="text", sequence=2),
        Question(id="b", question="b", question_type="text", sequence=7),
    ]

    plan = plan_move(questions, "b", "up")

    assert [(u.question_id, u.sequence) for u in plan] == [("b", 2), ("a", 7)]


@pytest.mark.parametrize("question_id, direction", [("q1", "up"), ("q3", "down"), ("missing", "up")])
def test_boundary_or_unknown_gives_empty_plan(questions, question_id, direction) -> None:
    assert plan_move(questions, question_id, direction) == []


def test_invalid_direction_raises(questions) -> None:
    with pytest.raises(ValueError):
        plan_move(questions, "q1", "sideways")
