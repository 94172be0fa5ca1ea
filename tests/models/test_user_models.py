"""Tests for user account form validation."""

import pytest

from syntegra.core.exceptions import FormValidationError
from syntegra.core.validation import validate_form
from syntegra.models.user import CreateUserRequest, Role, UpdateUserRequest


@pytest.fixture
def participant_form() -> dict:
    return {
        "name": "Siti Rahma",
        "email": "siti@syntegra.co.id",
        "role": "participant",
        "nik": "3174012345678901",
        "phone": "081234567890",
        "gender": "",
        "postal_code": "12345",
    }


def _errors(data) -> dict[str, str]:
    with pytest.raises(FormValidationError) as exc_info:
        validate_form(CreateUserRequest, data)
    return exc_info.value.errors


class TestCreateUserRequest:
    def test_participant_payload(self, participant_form) -> None:
        payload = validate_form(CreateUserRequest, participant_form).to_payload()

        assert payload["role"] == "participant"
        assert payload["nik"] == "3174012345678901"
        assert "gender" not in payload
        assert "password" not in payload

    def test_participant_requires_nik(self, participant_form) -> None:
        participant_form.pop("nik")

        with pytest.raises(FormValidationError) as exc_info:
            CreateUserRequest.model_validate(participant_form)

        assert exc_info.value.errors == {"nik": "NIK wajib untuk peserta"}

    def test_admin_requires_password(self) -> None:
        with pytest.raises(FormValidationError) as exc_info:
            CreateUserRequest.model_validate({"name": "Admin", "email": "admin@syntegra.co.id", "role": Role.ADMIN})

        assert exc_info.value.errors == {"password": "Password wajib untuk admin"}

    def test_admin_password_strength(self) -> None:
        errors = _errors(
            {"name": "Admin", "email": "admin@syntegra.co.id", "role": "admin", "password": "password123"}
        )

        assert errors["password"] == "Password harus mengandung huruf besar, kecil, angka, dan simbol"

    def test_strong_admin_password(self) -> None:
        request = validate_form(
            CreateUserRequest,
            {"name": "Admin", "email": "admin@syntegra.co.id", "role": "admin", "password": "Rahasia@2026"},
        )

        assert request.role == Role.ADMIN

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("email", "bukan-email", "Format email tidak valid"),
            ("nik", "12345", "NIK harus 16 digit"),
            ("nik", "31740123456789AB", "NIK hanya boleh angka"),
            ("phone", "0812", "Nomor HP minimal 10 digit"),
            ("postal_code", "12A45", "Kode pos hanya boleh angka"),
            ("name", "S", "Nama minimal 2 karakter"),
            ("role", "", "Pilih role user"),
        ],
    )
    def test_field_messages(self, participant_form, field, value, message) -> None:
        participant_form[field] = value

        assert _errors(participant_form)[field] == message


class TestUpdateUserRequest:
    def test_only_set_fields_are_sent(self) -> None:
        request = UpdateUserRequest.model_validate({"name": "Siti R.", "is_active": False})

        assert request.to_payload() == {"name": "Siti R.", "is_active": False}

    @pytest.mark.parametrize(
        "name, message",
        [
            ("S", "Nama minimal 2 karakter"),
            ("S" * 101, "Nama maksimal 100 karakter"),
        ],
    )
    def test_name_length_messages(self, name, message) -> None:
        with pytest.raises(FormValidationError) as exc_info:
            validate_form(UpdateUserRequest, {"name": name})

        assert exc_info.value.errors["name"] == message
