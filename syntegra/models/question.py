"""
Question bank models and schemas.

Request/response schemas for authoring questions inside a test.

Dependencies: pydantic
System role: Question bank API contracts
"""

from datetime import datetime
from enum import Enum
from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

from syntegra.core.validation import invalid
from syntegra.models.common import ListParams


class QuestionType(str, Enum):
    """Shape of a question's options and answer."""

    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    TEXT = "text"
    RATING_SCALE = "rating_scale"
    DRAWING = "drawing"
    SEQUENCE = "sequence"
    MATRIX = "matrix"


# Types whose payload may carry image/audio URLs
MEDIA_QUESTION_TYPES = frozenset(
    {
        QuestionType.MULTIPLE_CHOICE,
        QuestionType.TRUE_FALSE,
        QuestionType.TEXT,
        QuestionType.MATRIX,
    }
)


def supports_media(question_type: QuestionType) -> bool:
    return question_type in MEDIA_QUESTION_TYPES


def _check_url(value: str, message: str) -> str:
    if value == "":
        return value
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise invalid(message)
    return value


class QuestionOption(BaseModel):
    """One selectable answer."""

    value: str
    label: str
    score: float | None = None


class QuestionOptionInput(BaseModel):
    """Option row as edited in the form; label may still be blank."""

    value: str = ""
    label: str = ""
    score: float | None = 0


class QuestionForm(BaseModel):
    """
    State of the add/edit question dialog.

    Holds the type-specific helper fields (rating bounds, sequence items)
    that `build_question_payload` turns into options and scoring keys.
    """

    question: str = Field(default="", validate_default=True)
    question_type: QuestionType = QuestionType.MULTIPLE_CHOICE
    options: list[QuestionOptionInput] = Field(
        default_factory=lambda: [
            QuestionOptionInput(value="A", label="", score=0),
            QuestionOptionInput(value="B", label="", score=0),
        ]
    )
    correct_answer: str = ""
    sequence: int | None = None
    time_limit: int | None = 30
    image_url: str = ""
    audio_url: str = ""
    is_required: bool = True
    rating_min: int | None = None
    rating_max: int | None = None
    rating_min_label: str = ""
    rating_max_label: str = ""
    sequence_items: list[str] = Field(default_factory=list)

    @field_validator("question")
    @classmethod
    def _validate_question(cls, value: str) -> str:
        if len(value) < 1:
            raise invalid("Pertanyaan tidak boleh kosong")
        if len(value) > 1000:
            raise invalid("Pertanyaan terlalu panjang")
        return value

    @field_validator("sequence")
    @classmethod
    def _validate_sequence(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise invalid("Urutan harus minimal 1")
        return value

    @field_validator("time_limit")
    @classmethod
    def _validate_time_limit(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise invalid("Waktu minimal 1 detik")
        return value

    @field_validator("image_url")
    @classmethod
    def _validate_image_url(cls, value: str) -> str:
        return _check_url(value, "URL gambar tidak valid")

    @field_validator("audio_url")
    @classmethod
    def _validate_audio_url(cls, value: str) -> str:
        return _check_url(value, "URL audio tidak valid")

    @classmethod
    def from_question(cls, question: "Question") -> "QuestionForm":
        """Prefill the dialog from an existing question (edit mode)."""
        return cls(
            question=question.question,
            question_type=question.question_type,
            options=[
                QuestionOptionInput(value=option.value, label=option.label, score=option.score)
                for option in question.options or []
            ],
            correct_answer=question.correct_answer or "",
            sequence=question.sequence,
            time_limit=question.time_limit or 30,
            image_url=question.image_url or "",
            audio_url=question.audio_url or "",
            is_required=question.is_required,
        )


class Question(BaseModel):
    """Question record as returned by the backend."""

    model_config = ConfigDict(extra="allow")

    id: str
    test_id: str | None = None
    question: str
    question_type: QuestionType
    options: list[QuestionOption] | None = None
    correct_answer: str | None = None
    sequence: int
    time_limit: int | None = None
    image_url: str | None = None
    audio_url: str | None = None
    scoring_key: dict[str, float] | None = None
    is_required: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class QuestionListParams(ListParams):
    """Filters for the bank-soal table."""

    question_type: QuestionType | None = None
    is_required: bool | None = None
    sort_by: Literal["sequence", "question", "question_type", "created_at", "updated_at"] | None = None
    sort_order: Literal["asc", "desc"] | None = None


class QuestionStats(BaseModel):
    """Aggregates for a test's question bank."""

    model_config = ConfigDict(extra="allow")

    total_questions: int = 0
    by_question_type: dict[str, int] = Field(default_factory=dict)
    required_questions: int = 0
    optional_questions: int = 0
    avg_time_limit: float = 0
    questions_with_images: int = 0
    questions_with_audio: int = 0


class SequenceUpdate(BaseModel):
    """Single-field sequence change for one question."""

    question_id: str
    sequence: int = Field(ge=1)


class BulkSequenceItem(BaseModel):
    id: str
    sequence: int = Field(ge=1)


class BulkSequenceRequest(BaseModel):
    """Explicit reordering of several questions in one call."""

    questions: list[BulkSequenceItem] = Field(min_length=1)

    @field_validator("questions")
    @classmethod
    def _unique_sequences(cls, value: list[BulkSequenceItem]) -> list[BulkSequenceItem]:
        sequences = [item.sequence for item in value]
        if len(set(sequences)) != len(sequences):
            raise invalid("Urutan soal tidak boleh duplikat")
        return value


class MoveDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class MoveQuestionRequest(BaseModel):
    direction: MoveDirection


class SequenceRequest(BaseModel):
    """New position of a single question."""

    sequence: int

    @field_validator("sequence")
    @classmethod
    def _validate_sequence(cls, value: int) -> int:
        if value < 1:
            raise invalid("Urutan harus minimal 1")
        return value
