"""Tests for payload cleaning and localized form validation."""

import pytest

from syntegra.core.exceptions import FormValidationError
from syntegra.core.payload import clean_payload
from syntegra.core.validation import validate_form
from syntegra.models.session import CreateSessionRequest


class TestCleanPayload:
    def test_drops_empty_values(self) -> None:
        data = {"a": None, "b": "", "c": float("nan"), "d": [], "e": 0, "f": False, "g": "x"}

        assert clean_payload(data) == {"e": 0, "f": False, "g": "x"}

    def test_cleans_nested_dicts(self) -> None:
        data = {"meta": {"x": None, "y": 1}, "empty": {"z": ""}}

        assert clean_payload(data) == {"meta": {"y": 1}}

    def test_keeps_list_items_as_is(self) -> None:
        data = {"items": [None, "", {"a": None}]}

        assert clean_payload(data) == data


class TestValidateForm:
    def test_returns_model(self, session_form) -> None:
        request = validate_form(CreateSessionRequest, session_form)

        assert request.session_code == "SEC-001"
        assert len(request.session_modules) == 2

    def test_messages_reach_caller_verbatim(self, session_form) -> None:
        session_form["session_name"] = "ab"
        session_form["end_time"] = "2026-11-01T07:00:00Z"

        with pytest.raises(FormValidationError) as exc_info:
            validate_form(CreateSessionRequest, session_form)

        errors = exc_info.value.errors
        assert errors["session_name"] == "Nama sesi minimal 3 karakter"
        assert errors["end_time"] == "Waktu selesai harus setelah waktu mulai"

    def test_nested_paths(self, session_form) -> None:
        session_form["session_modules"][1]["sequence"] = 0

        with pytest.raises(FormValidationError) as exc_info:
            validate_form(CreateSessionRequest, session_form)

        assert exc_info.value.errors["session_modules.1.sequence"] == "Urutan minimal 1"

    def test_first_error(self) -> None:
        error = FormValidationError({"a": "pertama", "b": "kedua"})

        assert error.first_error == "pertama"
        assert FormValidationError({}).first_error == "Data yang dikirim tidak valid"
