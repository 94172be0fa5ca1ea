"""
Question bank reordering.

Moving a question one step swaps its sequence number with the neighbour in
that direction. Only those two questions are touched; concurrent edits are
not reconciled and the last write wins.
"""

from collections.abc import Sequence

from syntegra.models.question import MoveDirection, Question, SequenceUpdate


def plan_move(
    questions: Sequence[Question],
    question_id: str,
    direction: MoveDirection | str,
) -> list[SequenceUpdate]:
    """
    Plan the sequence updates for moving one question up or down.

    Args:
        questions: Questions of the test, in any order
        question_id: Question to move
        direction: "up" or "down"

    Returns:
        list[SequenceUpdate]: The two swapped sequence numbers, or an empty
        plan when the question is unknown or already at the boundary
    """
    direction = MoveDirection(direction)
    ordered = sorted(questions, key=lambda question: question.sequence)

    index = next((i for i, question in enumerate(ordered) if question.id == question_id), None)
    if index is None:
        return []

    neighbour_index = index - 1 if direction == MoveDirection.UP else index + 1
    if neighbour_index < 0 or neighbour_index >= len(ordered):
        return []

    moved = ordered[index]
    neighbour = ordered[neighbour_index]
    return [
        SequenceUpdate(question_id=moved.id, sequence=neighbour.sequence),
        SequenceUpdate(question_id=neighbour.id, sequence=moved.sequence),
    ]
