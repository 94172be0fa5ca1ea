"""
Session participant models and schemas.

Request/response schemas for enrolling users into sessions.

Dependencies: pydantic
System role: Participant enrollment API contracts
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from syntegra.core.validation import invalid
from syntegra.models.common import ListParams

MIN_LINK_EXPIRY_HOURS = 1
MAX_LINK_EXPIRY_HOURS = 168
DEFAULT_LINK_EXPIRY_HOURS = 24


class ParticipantStatus(str, Enum):
    """Enrollment lifecycle of a participant inside a session."""

    INVITED = "invited"
    REGISTERED = "registered"
    STARTED = "started"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


def _validate_link_expiry(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise invalid("Masa berlaku link harus berupa angka")
    if isinstance(value, float) and not value.is_integer():
        raise invalid("Masa berlaku link harus berupa bilangan bulat")
    if value < MIN_LINK_EXPIRY_HOURS:
        raise invalid("Minimal 1 jam")
    if value > MAX_LINK_EXPIRY_HOURS:
        raise invalid("Maksimal 168 jam (7 hari)")
    return int(value)


class ParticipantUser(BaseModel):
    """User summary embedded in a participant record."""

    model_config = ConfigDict(extra="allow")

    id: str
    nik: str | None = None
    name: str
    email: str | None = None
    phone: str | None = None
    is_active: bool = True


class SessionParticipant(BaseModel):
    """A user enrolled in a session, with its time-boxed access link."""

    model_config = ConfigDict(extra="allow")

    id: str
    session_id: str | None = None
    user_id: str
    status: ParticipantStatus = ParticipantStatus.INVITED
    registered_at: datetime | None = None
    invitation_sent_at: datetime | None = None
    unique_link: str | None = None
    link_expires_at: datetime | None = None
    is_link_expired: bool = False
    access_url: str | None = None
    user: ParticipantUser | None = None

    @property
    def display_name(self) -> str:
        return self.user.name if self.user else self.user_id


class ParticipantListParams(ListParams):
    """Filters for the participants tab."""

    status: ParticipantStatus | None = None
    invitation_sent: bool | None = None
    registered: bool | None = None
    sort_by: Literal[
        "name", "nik", "email", "status", "registered_at", "invitation_sent_at", "created_at"
    ] | None = None
    sort_order: Literal["asc", "desc"] | None = None


class AddParticipantRequest(BaseModel):
    """Enroll a single user."""

    user_id: str
    link_expires_hours: int = DEFAULT_LINK_EXPIRY_HOURS
    send_invitation: bool = True

    @field_validator("user_id")
    @classmethod
    def _require_user(cls, value: str) -> str:
        if not value.strip():
            raise invalid("Peserta wajib dipilih")
        return value

    @field_validator("link_expires_hours", mode="before")
    @classmethod
    def _validate_expiry(cls, value: Any) -> int:
        return _validate_link_expiry(value)


class BulkParticipantEntry(BaseModel):
    """One user in a bulk enrollment request."""

    user_id: str
    custom_message: str | None = None


class BulkAddParticipantsRequest(BaseModel):
    """Enroll several users in one request."""

    participants: list[BulkParticipantEntry] = Field(default_factory=list, validate_default=True)
    link_expires_hours: int = DEFAULT_LINK_EXPIRY_HOURS
    send_invitations: bool = True

    @field_validator("participants")
    @classmethod
    def _require_participants(cls, value: list[BulkParticipantEntry]) -> list[BulkParticipantEntry]:
        if len(value) < 1:
            raise invalid("Minimal satu peserta harus dipilih")
        return value

    @field_validator("link_expires_hours", mode="before")
    @classmethod
    def _validate_expiry(cls, value: Any) -> int:
        return _validate_link_expiry(value)


class SkippedParticipant(BaseModel):
    """A user the backend declined to enroll."""

    model_config = ConfigDict(extra="allow")

    user_id: str
    user_name: str | None = None
    reason: str


class InvitationTally(BaseModel):
    """Invitation delivery counters reported by the backend."""

    sent: int = 0
    failed: int = 0
    skipped: int = 0


class BulkAddResult(BaseModel):
    """`data` block of the bulk-add response."""

    model_config = ConfigDict(extra="allow")

    added_participants: list[SessionParticipant] = Field(default_factory=list)
    total_added: int | None = None
    skipped_participants: list[SkippedParticipant] | None = None
    invitation_status: InvitationTally | None = None


class BulkAddOutcome(BaseModel):
    """Reconciled result of a bulk enrollment."""

    added: list[SessionParticipant]
    total_added: int
    skipped: list[SkippedParticipant]
    invitations: InvitationTally

    @property
    def partial(self) -> bool:
        return bool(self.skipped)


class UpdateParticipantStatusRequest(BaseModel):
    """Move a participant to another enrollment status."""

    status: ParticipantStatus


class ParticipantStatusChange(BaseModel):
    """Backend acknowledgement of a status update."""

    model_config = ConfigDict(extra="allow")

    id: str
    user_id: str | None = None
    user_name: str | None = None
    old_status: str
    new_status: str


class RemovedParticipant(BaseModel):
    """Backend acknowledgement of a removal."""

    model_config = ConfigDict(extra="allow")

    id: str
    session_id: str | None = None
    user_id: str | None = None
    user_name: str | None = None


class BulkEnrollmentSubmission(BaseModel):
    """Selection submitted from the bulk-add dialog."""

    user_ids: list[str] = Field(default_factory=list)
    link_expires_hours: Any = DEFAULT_LINK_EXPIRY_HOURS
    send_invitations: bool = True
