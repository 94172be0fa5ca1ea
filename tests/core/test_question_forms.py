"""
Test suite for question form logic.

Tests question-type switching and payload shaping per question type.

System role: Verification of question authoring rules
"""

import pytest

from syntegra.core.question_forms import (
    build_question_payload,
    change_question_type,
    next_sequence,
    option_value,
    question_preview,
    relabel_options,
)
from syntegra.models.question import QuestionForm, QuestionOptionInput, QuestionType


@pytest.fixture
def mc_form() -> QuestionForm:
    return QuestionForm(
        question="Apa ibu kota Indonesia?",
        options=[
            QuestionOptionInput(value="A", label="Jakarta"),
            QuestionOptionInput(value="B", label="Bandung"),
            QuestionOptionInput(value="C", label="  "),
        ],
        correct_answer="A",
        image_url="https://cdn.example.com/peta.png",
    )


class TestChangeQuestionType:
    """Resetting type-specific fields."""

    def test_multiple_choice_to_rating_scale(self, mc_form: QuestionForm) -> None:
        form = change_question_type(mc_form, QuestionType.RATING_SCALE)

        assert form.question_type == QuestionType.RATING_SCALE
        assert form.options == []
        assert form.correct_answer == ""
        assert form.rating_min == 1
        assert form.rating_max == 5
        assert form.rating_min_label == "Sangat Tidak Setuju"
        assert form.rating_max_label == "Sangat Setuju"
        assert form.question == mc_form.question

    def test_to_multiple_choice_seeds_two_blank_options(self) -> None:
        form = change_question_type(
            QuestionForm(question="x", question_type=QuestionType.TEXT, options=[]),
            QuestionType.MULTIPLE_CHOICE,
        )

        assert [option.value for option in form.options] == ["A", "B"]
        assert all(option.label == "" for option in form.options)
        assert form.rating_min is None

    def test_to_sequence_seeds_items(self, mc_form: QuestionForm) -> None:
        form = change_question_type(mc_form, QuestionType.SEQUENCE)

        assert form.sequence_items == ["Item 1", "Item 2"]
        assert form.options == []

    def test_to_text_clears_everything(self, mc_form: QuestionForm) -> None:
        rating = change_question_type(mc_form, QuestionType.RATING_SCALE)

        form = change_question_type(rating, QuestionType.TEXT)

        assert form.options == []
        assert form.rating_min is None
        assert form.rating_max_label == ""
        assert form.sequence_items == []

    def test_original_form_is_untouched(self, mc_form: QuestionForm) -> None:
        change_question_type(mc_form, QuestionType.TRUE_FALSE)

        assert mc_form.question_type == QuestionType.MULTIPLE_CHOICE
        assert len(mc_form.options) == 3


class TestBuildQuestionPayload:
    """Payload shaping per question type."""

    def test_multiple_choice_drops_blank_options(self, mc_form: QuestionForm) -> None:
        payload = build_question_payload(mc_form, "t1")

        assert payload["test_id"] == "t1"
        assert payload["options"] == [
            {"value": "A", "label": "Jakarta"},
            {"value": "B", "label": "Bandung"},
        ]
        assert payload["correct_answer"] == "A"
        assert payload["image_url"] == "https://cdn.example.com/peta.png"
        assert payload["time_limit"] == 30
        assert "audio_url" not in payload
        assert "sequence" not in payload

    def test_true_false_gets_fixed_options(self) -> None:
        form = QuestionForm(question="Bumi bulat", question_type=QuestionType.TRUE_FALSE, correct_answer="true")

        payload = build_question_payload(form, "t1")

        assert payload["options"] == [
            {"value": "true", "label": "Benar"},
            {"value": "false", "label": "Salah"},
        ]
        assert payload["correct_answer"] == "true"

    def test_rating_scale_generates_options_and_scoring_key(self, mc_form: QuestionForm) -> None:
        form = change_question_type(mc_form, QuestionType.RATING_SCALE)
        form = form.model_copy(update={"correct_answer": "3"})

        payload = build_question_payload(form, "t1")

        assert [option["value"] for option in payload["options"]] == ["1", "2", "3", "4", "5"]
        assert payload["options"][0]["label"] == "Sangat Tidak Setuju"
        assert payload["options"][2]["label"] == "3"
        assert payload["options"][4]["label"] == "Sangat Setuju"
        assert payload["scoring_key"] == {"1": 1, "2": 2, "3": 3, "4": 4, "5": 5}
        assert "correct_answer" not in payload

    def test_rating_scale_drops_media(self, mc_form: QuestionForm) -> None:
        form = change_question_type(mc_form, QuestionType.RATING_SCALE)

        payload = build_question_payload(form, "t1")

        assert "image_url" not in payload

    def test_sequence_items_become_numbered_options(self) -> None:
        form = QuestionForm(
            question="Urutkan",
            question_type=QuestionType.SEQUENCE,
            options=[],
            sequence_items=["Bangun", " ", "Mandi", "Berangkat"],
        )

        payload = build_question_payload(form, "t1")

        assert payload["options"] == [
            {"value": "1", "label": "Bangun"},
            {"value": "2", "label": "Mandi"},
            {"value": "3", "label": "Berangkat"},
        ]

    def test_text_question_has_no_options(self) -> None:
        form = QuestionForm(question="Ceritakan diri Anda", question_type=QuestionType.TEXT, options=[])

        payload = build_question_payload(form, "t1")

        assert "options" not in payload
        assert "correct_answer" not in payload

    def test_sequence_and_time_limit_only_when_positive(self) -> None:
        form = QuestionForm(question="x", sequence=4, time_limit=None)

        payload = build_question_payload(form, "t1")

        assert payload["sequence"] == 4
        assert "time_limit" not in payload


class TestHelpers:
    def test_option_values_are_letters(self) -> None:
        assert [option_value(i) for i in range(3)] == ["A", "B", "C"]

    def test_relabel_options(self) -> None:
        options = [QuestionOptionInput(value="C", label="x"), QuestionOptionInput(value="A", label="y")]

        assert [option.value for option in relabel_options(options)] == ["A", "B"]

    def test_next_sequence(self) -> None:
        assert next_sequence(0) == 1
        assert next_sequence(7) == 8

    def test_question_preview_truncates(self) -> None:
        assert question_preview("a" * 80) == "a" * 50 + "..."
