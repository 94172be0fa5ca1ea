"""
Session domain models and schemas.

Request/response schemas for session scheduling operations.

Dependencies: pydantic
System role: Session API contracts
"""

import re
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from syntegra.core.payload import clean_payload
from syntegra.core.validation import invalid
from syntegra.models.common import ListParams

MAX_SESSION_HOURS = 12
SESSION_CODE_PATTERN = re.compile(r"^[A-Za-z0-9\-_]*$")

TARGET_POSITION_OPTIONS: dict[str, str] = {
    "security": "Security",
    "staff": "Staff",
    "manager": "Manager",
    "supervisor": "Supervisor",
    "administrator": "Administrator",
    "officer": "Officer",
    "coordinator": "Coordinator",
    "analyst": "Analyst",
    "specialist": "Specialist",
    "general": "Umum",
}


class SessionStatus(str, Enum):
    """Server-side session lifecycle states."""

    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class SessionStatusInfo(BaseModel):
    """Display data for a session status badge."""

    status: SessionStatus
    label: str
    variant: str
    description: str


def parse_timestamp(value: Any, message: str) -> datetime:
    """Parse an ISO timestamp, treating naive values as UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            raise invalid(message) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _check_uuid(value: Any, message: str) -> str:
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        raise invalid(message) from None


class SessionModuleInput(BaseModel):
    """A test scheduled inside a session."""

    test_id: str
    sequence: int
    is_required: bool = True
    weight: float = 1.0

    @field_validator("test_id", mode="before")
    @classmethod
    def _validate_test_id(cls, value: Any) -> str:
        return _check_uuid(value, "Test ID harus berupa UUID yang valid")

    @field_validator("sequence", mode="before")
    @classmethod
    def _validate_sequence(cls, value: Any) -> int:
        if value is None:
            raise invalid("Urutan wajib diisi")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise invalid("Urutan harus berupa angka")
        if value < 1:
            raise invalid("Urutan minimal 1")
        if value != int(value):
            raise invalid("Urutan harus berupa bilangan bulat")
        return int(value)

    @field_validator("weight", mode="before")
    @classmethod
    def _validate_weight(cls, value: Any) -> float:
        if value is None:
            raise invalid("Bobot wajib diisi")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise invalid("Bobot harus berupa angka")
        if value < 0.1:
            raise invalid("Bobot minimal 0.1")
        if value > 10:
            raise invalid("Bobot maksimal 10")
        return float(value)


class CreateSessionRequest(BaseModel):
    """Validated session creation/update form."""

    session_name: str
    session_code: str = ""
    start_time: datetime
    end_time: datetime
    target_position: str
    max_participants: int | None = None
    description: str = ""
    location: str = ""
    proctor_id: str = ""
    auto_expire: bool = True
    allow_late_entry: bool = False
    session_modules: list[SessionModuleInput] = Field(default_factory=list, validate_default=True)

    @field_validator("session_name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if len(value) < 1:
            raise invalid("Nama sesi wajib diisi")
        if len(value) < 3:
            raise invalid("Nama sesi minimal 3 karakter")
        if len(value) > 255:
            raise invalid("Nama sesi maksimal 255 karakter")
        if not value.strip():
            raise invalid("Nama sesi tidak boleh hanya spasi")
        return value

    @field_validator("session_code")
    @classmethod
    def _validate_code(cls, value: str) -> str:
        if len(value) > 50:
            raise invalid("Kode sesi maksimal 50 karakter")
        if not SESSION_CODE_PATTERN.match(value):
            raise invalid("Kode sesi hanya boleh huruf, angka, dash, dan underscore")
        return value

    @field_validator("start_time", mode="before")
    @classmethod
    def _parse_start(cls, value: Any) -> datetime:
        return parse_timestamp(value, "Format waktu mulai tidak valid")

    @field_validator("end_time", mode="before")
    @classmethod
    def _parse_end(cls, value: Any) -> datetime:
        return parse_timestamp(value, "Format waktu selesai tidak valid")

    @field_validator("end_time")
    @classmethod
    def _validate_window(cls, value: datetime, info: ValidationInfo) -> datetime:
        start = info.data.get("start_time")
        if start is None:
            return value
        if value <= start:
            raise invalid("Waktu selesai harus setelah waktu mulai")
        if (value - start).total_seconds() / 3600 > MAX_SESSION_HOURS:
            raise invalid("Durasi sesi tidak boleh lebih dari 12 jam")
        return value

    @field_validator("target_position")
    @classmethod
    def _validate_position(cls, value: str) -> str:
        if len(value) < 1:
            raise invalid("Posisi target wajib diisi")
        if len(value) > 100:
            raise invalid("Posisi target maksimal 100 karakter")
        return value

    @field_validator("max_participants", mode="before")
    @classmethod
    def _validate_capacity(cls, value: Any) -> int | None:
        if value is None or value == 0:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise invalid("Maksimal peserta harus berupa angka")
        if value < 1:
            raise invalid("Minimal 1 peserta")
        if value > 1000:
            raise invalid("Maksimal 1000 peserta")
        return int(value)

    @field_validator("description")
    @classmethod
    def _validate_description(cls, value: str) -> str:
        if len(value) > 1000:
            raise invalid("Deskripsi maksimal 1000 karakter")
        return value

    @field_validator("location")
    @classmethod
    def _validate_location(cls, value: str) -> str:
        if len(value) > 255:
            raise invalid("Lokasi maksimal 255 karakter")
        return value

    @field_validator("proctor_id")
    @classmethod
    def _validate_proctor(cls, value: str) -> str:
        if value == "":
            return value
        return _check_uuid(value, "Proctor ID harus berupa UUID yang valid")

    @field_validator("session_modules")
    @classmethod
    def _validate_modules(cls, value: list[SessionModuleInput]) -> list[SessionModuleInput]:
        if len(value) < 1:
            raise invalid("Minimal harus memiliki 1 modul tes")
        if len(value) > 10:
            raise invalid("Maksimal 10 modul tes")
        sequences = [module.sequence for module in value]
        if len(set(sequences)) != len(sequences):
            raise invalid("Urutan modul tidak boleh duplikat")
        return value

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the backend, dropping empty optional fields."""
        return clean_payload(self.model_dump(mode="json"))


class SessionListParams(ListParams):
    """Filters for the sessions table."""

    status: str | None = None
    participant_id: str | None = None


class UserInfo(BaseModel):
    """Compact user reference embedded in sessions."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None
    email: str | None = None


class SessionModule(BaseModel):
    """A scheduled test inside a session as returned by the backend."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    test_id: str
    sequence: int
    is_required: bool = True
    weight: float = 1.0
    test: dict[str, Any] | None = None


class Session(BaseModel):
    """Session record as returned by the backend."""

    model_config = ConfigDict(extra="allow")

    id: str
    session_name: str
    session_code: str | None = None
    start_time: datetime
    end_time: datetime
    target_position: str | None = None
    status: SessionStatus = SessionStatus.DRAFT
    location: str | None = None
    description: str | None = None
    current_participants: int = 0
    max_participants: int | None = None
    proctor_id: str | None = None
    auto_expire: bool = True
    allow_late_entry: bool = False
    # Minutes until the session window closes
    time_remaining: float | None = None
    participant_link: str | None = None
    session_duration_hours: float | None = None
    total_test_time_minutes: int | None = None
    total_questions: int | None = None
    session_modules: list[SessionModule] = Field(default_factory=list)
    proctor: UserInfo | None = None
    status_info: SessionStatusInfo | None = None


class CheckParticipantRequest(BaseModel):
    """Public lookup of a participant by session code and phone number."""

    session_code: str = Field(alias="sessionCode")
    phone: str

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("session_code", "phone")
    @classmethod
    def _require(cls, value: str) -> str:
        if not value.strip():
            raise invalid("Mohon lengkapi kode sesi dan nomor telepon")
        return value.strip()


class AvailableTest(BaseModel):
    """Active test offered when composing session modules."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    category: str | None = None
    module_type: str | None = None
    time_limit: int | None = None
    total_questions: int | None = None


class ProctorOption(BaseModel):
    """Admin user that can proctor a session."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    email: str | None = None
