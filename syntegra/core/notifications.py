"""
Toast descriptors and backend error message mapping.

The REST backend reports failures as a flat message string. Each portal
operation owns an ordered list of substring rules that pick the localized
toast shown to the user; unmatched messages fall back to the operation's
generic title with the raw message as description.

Dependencies: pydantic
System role: User-facing feedback for portal actions
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel


class ToastVariant(str, Enum):
    """Toast flavours understood by the UI."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


class Toast(BaseModel):
    """A single user-facing notification."""

    variant: ToastVariant
    title: str
    description: str | None = None

    @classmethod
    def success(cls, title: str, description: str | None = None) -> "Toast":
        return cls(variant=ToastVariant.SUCCESS, title=title, description=description)

    @classmethod
    def warning(cls, title: str, description: str | None = None) -> "Toast":
        return cls(variant=ToastVariant.WARNING, title=title, description=description)

    @classmethod
    def error(cls, title: str, description: str | None = None) -> "Toast":
        return cls(variant=ToastVariant.ERROR, title=title, description=description)


@dataclass(frozen=True)
class ErrorRule:
    """
    Substring rule over a lowercased backend message.

    The rule matches when every term in `all_of` occurs and, if `any_of` is
    non-empty, at least one of its terms occurs.
    """

    title: str
    description: str
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()

    def matches(self, message: str) -> bool:
        if not all(term in message for term in self.all_of):
            return False
        if self.any_of and not any(term in message for term in self.any_of):
            return False
        return bool(self.any_of or self.all_of)


@dataclass(frozen=True)
class OperationErrors:
    """Error rules plus fallback copy for one portal operation."""

    fallback_title: str
    fallback_description: str
    rules: tuple[ErrorRule, ...] = field(default_factory=tuple)


# Applied after operation rules, before the fallback.
GLOBAL_RULES: tuple[ErrorRule, ...] = (
    ErrorRule(
        title="Sesi login berakhir",
        description="Silakan masuk kembali untuk melanjutkan",
        any_of=("unauthorized", "token expired", "invalid token"),
    ),
    ErrorRule(
        title="Akses ditolak",
        description="Anda tidak memiliki izin untuk melakukan aksi ini",
        any_of=("forbidden", "not permitted"),
    ),
)


ERROR_CATALOG: dict[str, OperationErrors] = {
    "sessions.create": OperationErrors(
        "Gagal membuat sesi",
        "Terjadi kesalahan saat membuat sesi",
        (
            ErrorRule(
                "Kode sesi sudah digunakan",
                "Silakan gunakan kode sesi yang berbeda atau biarkan kosong untuk dibuat otomatis",
                all_of=("session code", "exists"),
            ),
            ErrorRule(
                "Tes tidak valid",
                "Satu atau lebih tes yang dipilih tidak valid atau tidak aktif",
                all_of=("invalid test",),
            ),
            ErrorRule(
                "Proktor tidak valid",
                "Proktor yang dipilih tidak valid atau bukan admin",
                all_of=("invalid proctor",),
            ),
            ErrorRule(
                "Waktu tidak valid",
                "Periksa kembali waktu mulai dan selesai sesi",
                all_of=("time",),
            ),
        ),
    ),
    "sessions.update": OperationErrors(
        "Gagal memperbarui sesi", "Terjadi kesalahan saat memperbarui sesi"
    ),
    "sessions.delete": OperationErrors(
        "Gagal menghapus sesi", "Terjadi kesalahan saat menghapus sesi"
    ),
    "sessions.check_participant": OperationErrors(
        "Gagal memeriksa peserta",
        "Terjadi kesalahan saat memeriksa peserta",
        (
            ErrorRule(
                "Sesi tidak ditemukan",
                "Kode sesi yang Anda masukkan tidak valid",
                all_of=("session not found",),
            ),
            ErrorRule(
                "Data tidak lengkap",
                "Mohon lengkapi kode sesi dan nomor telepon",
                all_of=("missing required",),
            ),
        ),
    ),
    "participants.add": OperationErrors(
        "Gagal menambah peserta",
        "Terjadi kesalahan saat menambah peserta",
        (
            ErrorRule(
                "Peserta sudah terdaftar",
                "Peserta ini sudah terdaftar dalam sesi ini",
                any_of=("already exists", "duplicate"),
            ),
            ErrorRule(
                "Sesi penuh",
                "Sesi telah mencapai batas maksimal peserta",
                any_of=("session full", "maximum"),
            ),
            ErrorRule(
                "Sesi tidak dapat diubah",
                "Tidak dapat menambah peserta ke sesi yang sudah selesai atau dibatalkan",
                any_of=("cancelled", "completed"),
            ),
            ErrorRule(
                "Peserta tidak aktif",
                "Tidak dapat menambahkan peserta yang tidak aktif",
                any_of=("inactive",),
            ),
        ),
    ),
    "participants.bulk_add": OperationErrors(
        "Gagal menambah peserta",
        "Terjadi kesalahan saat menambah peserta secara bulk",
        (
            ErrorRule(
                "Sesi penuh",
                "Sesi telah mencapai batas maksimal peserta",
                any_of=("session full", "maximum"),
            ),
            ErrorRule(
                "Sesi tidak dapat diubah",
                "Tidak dapat menambah peserta ke sesi yang sudah selesai atau dibatalkan",
                any_of=("cancelled", "completed"),
            ),
        ),
    ),
    "participants.update_status": OperationErrors(
        "Gagal memperbarui status",
        "Terjadi kesalahan saat memperbarui status peserta",
        (
            ErrorRule(
                "Perubahan status tidak valid",
                "Transisi status yang dipilih tidak diizinkan",
                any_of=("invalid transition", "status transition"),
            ),
            ErrorRule(
                "Status tidak berubah",
                "Peserta sudah memiliki status yang sama",
                any_of=("unchanged",),
            ),
        ),
    ),
    "participants.remove": OperationErrors(
        "Gagal menghapus peserta",
        "Terjadi kesalahan saat menghapus peserta",
        (
            ErrorRule(
                "Tidak dapat menghapus peserta",
                "Peserta yang sudah memulai tes tidak dapat dihapus",
                any_of=("started", "active"),
            ),
            ErrorRule(
                "Tidak dapat menghapus peserta",
                "Peserta yang sudah menyelesaikan tes tidak dapat dihapus",
                any_of=("completed",),
            ),
            ErrorRule(
                "Tidak dapat menghapus peserta",
                "Peserta memiliki data tes yang tidak dapat dihapus",
                any_of=("attempts", "dependencies"),
            ),
        ),
    ),
    "users.create_admin": OperationErrors(
        "Gagal membuat admin",
        "Terjadi kesalahan saat membuat admin",
        (
            ErrorRule(
                "Email sudah terdaftar",
                "Email yang Anda masukkan sudah digunakan oleh akun lain",
                all_of=("email", "exist"),
            ),
            ErrorRule(
                "Batas admin tercapai",
                "Sistem telah mencapai batas maksimal jumlah admin",
                all_of=("admin", "limit"),
            ),
        ),
    ),
    "users.create_participant": OperationErrors(
        "Gagal mendaftarkan peserta",
        "Terjadi kesalahan saat mendaftarkan peserta",
        (
            ErrorRule(
                "Email sudah terdaftar",
                "Email yang Anda masukkan sudah digunakan",
                all_of=("email",),
            ),
            ErrorRule(
                "NIK sudah terdaftar",
                "NIK yang Anda masukkan sudah digunakan",
                all_of=("nik",),
            ),
            ErrorRule(
                "Nomor telepon sudah terdaftar",
                "Nomor telepon yang Anda masukkan sudah digunakan",
                all_of=("phone",),
            ),
        ),
    ),
    "users.update": OperationErrors(
        "Gagal update user", "Terjadi kesalahan saat mengupdate user"
    ),
    "users.delete": OperationErrors(
        "Gagal menghapus user", "Terjadi kesalahan saat menghapus user"
    ),
    "tests.create": OperationErrors(
        "Gagal membuat tes", "Terjadi kesalahan saat membuat tes. Silakan coba lagi."
    ),
    "tests.update": OperationErrors(
        "Gagal memperbarui tes", "Terjadi kesalahan saat memperbarui tes"
    ),
    "tests.delete": OperationErrors(
        "Gagal menghapus tes", "Terjadi kesalahan saat menghapus tes"
    ),
    "tests.duplicate": OperationErrors(
        "Gagal menduplikasi tes", "Terjadi kesalahan saat menduplikasi tes"
    ),
    "questions.create": OperationErrors(
        "Gagal menambahkan soal", "Terjadi kesalahan saat memproses permintaan"
    ),
    "questions.update": OperationErrors(
        "Gagal memperbarui soal", "Terjadi kesalahan saat memproses permintaan"
    ),
    "questions.delete": OperationErrors(
        "Gagal menghapus soal", "Terjadi kesalahan saat menghapus soal"
    ),
    "questions.sequence": OperationErrors(
        "Gagal mengubah urutan soal", "Terjadi kesalahan saat mengubah urutan soal"
    ),
    "questions.bulk_sequence": OperationErrors(
        "Gagal memperbarui urutan soal", "Terjadi kesalahan saat memperbarui urutan soal"
    ),
}

GENERIC_ERRORS = OperationErrors("Terjadi kesalahan", "Silakan coba lagi beberapa saat lagi")


def error_toast(operation: str, message: str | None) -> Toast:
    """
    Select the error toast for a failed operation.

    Args:
        operation: Catalog key (e.g. "participants.add")
        message: Raw backend message, may be empty

    Returns:
        Toast: Localized error toast
    """
    entry = ERROR_CATALOG.get(operation, GENERIC_ERRORS)
    lowered = (message or "").lower()

    for rule in (*entry.rules, *GLOBAL_RULES):
        if rule.matches(lowered):
            return Toast.error(rule.title, rule.description)

    return Toast.error(entry.fallback_title, message or entry.fallback_description)
