"""
User models and schemas.

Request/response schemas for admin and participant accounts.

Dependencies: pydantic, email-validator
System role: User management API contracts
"""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from syntegra.core.exceptions import FormValidationError
from syntegra.core.payload import clean_payload
from syntegra.core.validation import invalid
from syntegra.models.common import ListParams

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]")
NIK_LENGTH = 16


class Role(str, Enum):
    ADMIN = "admin"
    PARTICIPANT = "participant"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Religion(str, Enum):
    ISLAM = "islam"
    KRISTEN = "kristen"
    KATOLIK = "katolik"
    HINDU = "hindu"
    BUDDHA = "buddha"
    KONGHUCU = "konghucu"
    OTHER = "other"


class Education(str, Enum):
    SD = "sd"
    SMP = "smp"
    SMA = "sma"
    DIPLOMA = "diploma"
    S1 = "s1"
    S2 = "s2"
    S3 = "s3"
    OTHER = "other"


def _check_email(value: str) -> str:
    try:
        validate_email(value)
    except PydanticCustomError:
        raise invalid("Format email tidak valid") from None
    return value


def _check_max(value: str | None, limit: int, label: str) -> str | None:
    if value is not None and len(value) > limit:
        raise invalid(f"{label} maksimal {limit} karakter")
    return value


class UserProfileFields(BaseModel):
    """Optional profile fields shared by create and update."""

    phone: str | None = None
    gender: Gender | None = None
    birth_place: str | None = None
    birth_date: str | None = None
    religion: Religion | None = None
    education: Education | None = None
    address: str | None = None
    province: str | None = None
    regency: str | None = None
    district: str | None = None
    village: str | None = None
    postal_code: str | None = None

    @field_validator("gender", "religion", "education", mode="before")
    @classmethod
    def _blank_choice(cls, value: Any) -> Any:
        return None if value == "" else value

    @field_validator("phone")
    @classmethod
    def _validate_phone(cls, value: str | None) -> str | None:
        if value and len(value) < 10:
            raise invalid("Nomor HP minimal 10 digit")
        return value

    @field_validator("birth_place", "province", "regency", "district", "village")
    @classmethod
    def _validate_region(cls, value: str | None) -> str | None:
        return _check_max(value, 100, "Isian")

    @field_validator("address")
    @classmethod
    def _validate_address(cls, value: str | None) -> str | None:
        return _check_max(value, 500, "Alamat")

    @field_validator("postal_code")
    @classmethod
    def _validate_postal_code(cls, value: str | None) -> str | None:
        if not value:
            return value
        if len(value) > 10:
            raise invalid("Kode pos maksimal 10 karakter")
        if not value.isdigit():
            raise invalid("Kode pos hanya boleh angka")
        return value


class CreateUserRequest(UserProfileFields):
    """
    Account creation form for both roles.

    Admins must supply a password; participants must supply a NIK.
    """

    name: str
    email: str
    role: Role
    password: str | None = None
    nik: str | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if len(value) < 2:
            raise invalid("Nama minimal 2 karakter")
        if len(value) > 100:
            raise invalid("Nama maksimal 100 karakter")
        return value

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("role", mode="before")
    @classmethod
    def _validate_role(cls, value: Any) -> Any:
        if value in (None, ""):
            raise invalid("Pilih role user")
        return value

    @field_validator("password")
    @classmethod
    def _validate_password(cls, value: str | None) -> str | None:
        if not value:
            return value
        if len(value) < 8:
            raise invalid("Password minimal 8 karakter")
        if not PASSWORD_PATTERN.match(value):
            raise invalid("Password harus mengandung huruf besar, kecil, angka, dan simbol")
        return value

    @field_validator("nik")
    @classmethod
    def _validate_nik(cls, value: str | None) -> str | None:
        if not value:
            return value
        if len(value) != NIK_LENGTH:
            raise invalid("NIK harus 16 digit")
        if not value.isdigit():
            raise invalid("NIK hanya boleh angka")
        return value

    @model_validator(mode="after")
    def _role_requirements(self) -> "CreateUserRequest":
        errors: dict[str, str] = {}
        if self.role == Role.ADMIN and not self.password:
            errors["password"] = "Password wajib untuk admin"
        if self.role == Role.PARTICIPANT and not self.nik:
            errors["nik"] = "NIK wajib untuk peserta"
        if errors:
            raise FormValidationError(errors)
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the backend, dropping empty optional fields."""
        return clean_payload(self.model_dump(mode="json"))


class UpdateUserRequest(UserProfileFields):
    """Partial profile update."""

    name: str | None = None
    email: str | None = None
    nik: str | None = None
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if len(value) < 2:
            raise invalid("Nama minimal 2 karakter")
        if len(value) > 100:
            raise invalid("Nama maksimal 100 karakter")
        return value

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str | None) -> str | None:
        return _check_email(value) if value else value

    @field_validator("nik")
    @classmethod
    def _validate_nik(cls, value: str | None) -> str | None:
        if value and (len(value) != NIK_LENGTH or not value.isdigit()):
            raise invalid("NIK harus 16 digit angka")
        return value

    def to_payload(self) -> dict[str, Any]:
        return clean_payload(self.model_dump(mode="json", exclude_unset=True))


class User(BaseModel):
    """User record as returned by the backend."""

    model_config = ConfigDict(extra="allow")

    id: str
    nik: str | None = None
    name: str
    role: Role
    email: str
    gender: str | None = None
    phone: str | None = None
    birth_place: str | None = None
    birth_date: datetime | None = None
    religion: str | None = None
    education: str | None = None
    address: str | None = None
    province: str | None = None
    regency: str | None = None
    district: str | None = None
    village: str | None = None
    postal_code: str | None = None
    profile_picture_url: str | None = None
    is_active: bool = True
    email_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserListParams(ListParams):
    """Filters for the users table."""

    role: Role | None = None
    gender: Gender | None = None
    religion: str | None = None
    education: str | None = None
    province: str | None = None
    regency: str | None = None
    is_active: bool | None = None
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] | None = None
    created_from: str | None = None
    created_to: str | None = None
