"""Tests for backend error message mapping."""

import pytest

from syntegra.core.notifications import ToastVariant, error_toast


@pytest.mark.parametrize(
    "operation, message, title",
    [
        ("participants.add", "Participant already exists in session", "Peserta sudah terdaftar"),
        ("participants.add", "Duplicate enrollment", "Peserta sudah terdaftar"),
        ("participants.add", "Session full: maximum participants reached", "Sesi penuh"),
        ("participants.add", "Cannot add to cancelled session", "Sesi tidak dapat diubah"),
        ("participants.add", "User is inactive", "Peserta tidak aktif"),
        ("sessions.create", "Session code already exists", "Kode sesi sudah digunakan"),
        ("users.create_admin", "Email already exists", "Email sudah terdaftar"),
        ("users.create_admin", "Admin limit reached", "Batas admin tercapai"),
        ("users.create_participant", "NIK already registered", "NIK sudah terdaftar"),
    ],
)
def test_rule_selects_localized_toast(operation, message, title) -> None:
    toast = error_toast(operation, message)

    assert toast.variant == ToastVariant.ERROR
    assert toast.title == title


def test_rules_are_checked_in_order() -> None:
    # "duplicate" wins over "maximum" because its rule comes first
    assert error_toast("participants.add", "duplicate, maximum").title == "Peserta sudah terdaftar"


def test_global_rule_applies_to_every_operation() -> None:
    assert error_toast("tests.delete", "Unauthorized").title == "Sesi login berakhir"


def test_fallback_uses_raw_message() -> None:
    toast = error_toast("tests.create", "Something odd happened")

    assert toast.title == "Gagal membuat tes"
    assert toast.description == "Something odd happened"


def test_fallback_without_message() -> None:
    toast = error_toast("sessions.delete", "")

    assert toast.description == "Terjadi kesalahan saat menghapus sesi"


def test_unknown_operation_uses_generic_copy() -> None:
    toast = error_toast("nope.nothing", None)

    assert toast.title == "Terjadi kesalahan"
