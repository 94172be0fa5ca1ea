"""
Question authoring form logic.

Switching the question type resets the type-specific fields of the form;
submitting shapes the payload according to the selected type.
"""

from string import ascii_uppercase
from typing import Any

from syntegra.core.payload import clean_payload
from syntegra.models.question import (
    QuestionForm,
    QuestionOptionInput,
    QuestionType,
    supports_media,
)

DEFAULT_RATING_MIN = 1
DEFAULT_RATING_MAX = 5
DEFAULT_RATING_MIN_LABEL = "Sangat Tidak Setuju"
DEFAULT_RATING_MAX_LABEL = "Sangat Setuju"

TRUE_FALSE_OPTIONS = (
    {"value": "true", "label": "Benar"},
    {"value": "false", "label": "Salah"},
)


def option_value(index: int) -> str:
    """Letter for the option at `index`: A, B, C..."""
    return ascii_uppercase[index % len(ascii_uppercase)]


def relabel_options(options: list[QuestionOptionInput]) -> list[QuestionOptionInput]:
    """Renumber option values in display order."""
    return [option.model_copy(update={"value": option_value(index)}) for index, option in enumerate(options)]


def next_sequence(total_questions: int) -> int:
    """Sequence number proposed for a new question."""
    return total_questions + 1


def change_question_type(form: QuestionForm, question_type: QuestionType) -> QuestionForm:
    """
    Return the form switched to another question type.

    Options, answer, rating bounds and sequence items are always cleared
    first, then seeded with the defaults of the new type.
    """
    update: dict[str, Any] = {
        "question_type": question_type,
        "options": [],
        "correct_answer": "",
        "sequence_items": [],
        "rating_min": None,
        "rating_max": None,
        "rating_min_label": "",
        "rating_max_label": "",
    }

    if question_type == QuestionType.MULTIPLE_CHOICE:
        update["options"] = [
            QuestionOptionInput(value="A", label="", score=0),
            QuestionOptionInput(value="B", label="", score=0),
        ]
    elif question_type == QuestionType.RATING_SCALE:
        update["rating_min"] = DEFAULT_RATING_MIN
        update["rating_max"] = DEFAULT_RATING_MAX
        update["rating_min_label"] = DEFAULT_RATING_MIN_LABEL
        update["rating_max_label"] = DEFAULT_RATING_MAX_LABEL
    elif question_type == QuestionType.SEQUENCE:
        update["sequence_items"] = ["Item 1", "Item 2"]

    return form.model_copy(update=update)


def _rating_options(form: QuestionForm) -> tuple[list[dict[str, Any]], dict[str, int]]:
    low = form.rating_min or DEFAULT_RATING_MIN
    high = form.rating_max or DEFAULT_RATING_MAX
    options = []
    for value in range(low, high + 1):
        label = str(value)
        if value == low and form.rating_min_label:
            label = form.rating_min_label
        elif value == high and form.rating_max_label:
            label = form.rating_max_label
        options.append({"value": str(value), "label": label, "score": value})
    return options, {str(value): value for value in range(low, high + 1)}


def build_question_payload(form: QuestionForm, test_id: str) -> dict[str, Any]:
    """
    Shape the create/update payload for a question.

    Args:
        form: Validated question form
        test_id: Owning test

    Returns:
        dict: Payload with only the fields meaningful for the question type
    """
    payload: dict[str, Any] = {
        "test_id": test_id,
        "question": form.question,
        "question_type": form.question_type.value,
        "is_required": form.is_required,
    }
    if form.sequence and form.sequence > 0:
        payload["sequence"] = form.sequence
    if form.time_limit and form.time_limit > 0:
        payload["time_limit"] = form.time_limit

    if supports_media(form.question_type):
        payload["image_url"] = form.image_url.strip()
        payload["audio_url"] = form.audio_url.strip()

    question_type = form.question_type
    if question_type == QuestionType.MULTIPLE_CHOICE:
        payload["options"] = [
            {"value": option.value, "label": option.label}
            for option in form.options
            if option.label.strip()
        ]
    elif question_type == QuestionType.TRUE_FALSE:
        payload["options"] = [dict(option) for option in TRUE_FALSE_OPTIONS]
    elif question_type == QuestionType.RATING_SCALE:
        payload["options"], payload["scoring_key"] = _rating_options(form)
    elif question_type == QuestionType.SEQUENCE:
        items = [item for item in form.sequence_items if item.strip()]
        payload["options"] = [
            {"value": str(index), "label": item} for index, item in enumerate(items, start=1)
        ]

    if question_type != QuestionType.RATING_SCALE and form.correct_answer.strip():
        payload["correct_answer"] = form.correct_answer

    return clean_payload(payload)


def question_preview(text: str, limit: int = 50) -> str:
    """Shortened question text for toasts."""
    return f"{text[:limit]}..."
