"""
Psychometric test (module) models and schemas.

Request/response schemas for test configuration.

Dependencies: pydantic
System role: Test configuration API contracts
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from syntegra.core.exceptions import FormValidationError
from syntegra.core.validation import invalid
from syntegra.models.common import ListParams


class ModuleType(str, Enum):
    """Family of psychometric instrument."""

    INTELLIGENCE = "intelligence"
    PERSONALITY = "personality"
    APTITUDE = "aptitude"
    INTEREST = "interest"
    PROJECTIVE = "projective"
    COGNITIVE = "cognitive"


class ModuleCategory(str, Enum):
    """Concrete instrument."""

    WAIS = "wais"
    MBTI = "mbti"
    WARTEGG = "wartegg"
    RIASEC = "riasec"
    KRAEPELIN = "kraepelin"
    PAULI = "pauli"
    BIG_FIVE = "big_five"
    PAPI_KOSTICK = "papi_kostick"
    DAP = "dap"
    RAVEN = "raven"
    EPPS = "epps"
    ARMY_ALPHA = "army_alpha"
    HTP = "htp"
    DISC = "disc"
    IQ = "iq"
    EQ = "eq"


class ModuleStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


MODULE_TYPE_LABELS: dict[ModuleType, str] = {
    ModuleType.INTELLIGENCE: "Inteligensi",
    ModuleType.PERSONALITY: "Kepribadian",
    ModuleType.APTITUDE: "Bakat",
    ModuleType.INTEREST: "Minat",
    ModuleType.PROJECTIVE: "Proyektif",
    ModuleType.COGNITIVE: "Kognitif",
}

CATEGORIES_BY_MODULE_TYPE: dict[ModuleType, tuple[ModuleCategory, ...]] = {
    ModuleType.INTELLIGENCE: (
        ModuleCategory.WAIS,
        ModuleCategory.RAVEN,
        ModuleCategory.IQ,
        ModuleCategory.ARMY_ALPHA,
    ),
    ModuleType.PERSONALITY: (
        ModuleCategory.MBTI,
        ModuleCategory.BIG_FIVE,
        ModuleCategory.DISC,
        ModuleCategory.EPPS,
    ),
    ModuleType.APTITUDE: (
        ModuleCategory.KRAEPELIN,
        ModuleCategory.PAULI,
        ModuleCategory.PAPI_KOSTICK,
    ),
    ModuleType.INTEREST: (ModuleCategory.RIASEC,),
    ModuleType.PROJECTIVE: (ModuleCategory.WARTEGG, ModuleCategory.DAP, ModuleCategory.HTP),
    ModuleType.COGNITIVE: (ModuleCategory.EQ,),
}


def categories_for(module_type: ModuleType) -> tuple[ModuleCategory, ...]:
    """Categories selectable for a module type."""
    return CATEGORIES_BY_MODULE_TYPE.get(module_type, ())


def _bounded_int(value: Any, low: int, high: int, messages: dict[str, str]) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise invalid(messages["type"])
    if value < low:
        raise invalid(messages["min"])
    if value > high:
        raise invalid(messages["max"])
    if "int" in messages and value != int(value):
        raise invalid(messages["int"])
    return int(value)


class CreateTestRequest(BaseModel):
    """Validated test creation form."""

    name: str
    description: str = ""
    module_type: ModuleType
    category: ModuleCategory
    time_limit: int = 30
    icon: str = ""
    card_color: str = ""
    passing_score: float = 0
    display_order: int = 0
    status: ModuleStatus = ModuleStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if len(value) < 1:
            raise invalid("Nama tes wajib diisi")
        if len(value) < 3:
            raise invalid("Nama tes minimal 3 karakter")
        if len(value) > 255:
            raise invalid("Nama tes maksimal 255 karakter")
        if not value.strip():
            raise invalid("Nama tes tidak boleh hanya spasi")
        return value

    @field_validator("description")
    @classmethod
    def _validate_description(cls, value: str) -> str:
        if len(value) > 1000:
            raise invalid("Deskripsi maksimal 1000 karakter")
        return value

    @field_validator("module_type", mode="before")
    @classmethod
    def _validate_module_type(cls, value: Any) -> Any:
        if value in (None, ""):
            raise invalid("Tipe modul wajib dipilih")
        if value not in {item.value for item in ModuleType} and not isinstance(value, ModuleType):
            raise invalid("Tipe modul tidak valid")
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _validate_category(cls, value: Any) -> Any:
        if value in (None, ""):
            raise invalid("Kategori wajib dipilih")
        if value not in {item.value for item in ModuleCategory} and not isinstance(value, ModuleCategory):
            raise invalid("Kategori tidak valid")
        return value

    @field_validator("time_limit", mode="before")
    @classmethod
    def _validate_time_limit(cls, value: Any) -> int:
        return _bounded_int(
            value,
            1,
            480,
            {
                "type": "Batas waktu harus berupa angka",
                "min": "Batas waktu minimal 1 menit",
                "max": "Batas waktu maksimal 480 menit (8 jam)",
                "int": "Batas waktu harus berupa bilangan bulat",
            },
        )

    @field_validator("icon")
    @classmethod
    def _validate_icon(cls, value: str) -> str:
        if len(value) > 10:
            raise invalid("Icon maksimal 10 karakter")
        return value

    @field_validator("card_color")
    @classmethod
    def _validate_card_color(cls, value: str) -> str:
        if len(value) > 100:
            raise invalid("Warna kartu maksimal 100 karakter")
        return value

    @field_validator("passing_score", mode="before")
    @classmethod
    def _validate_passing_score(cls, value: Any) -> float:
        if value is None:
            return 0
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise invalid("Skor kelulusan harus berupa angka")
        if value < 0:
            raise invalid("Skor kelulusan minimal 0")
        if value > 100:
            raise invalid("Skor kelulusan maksimal 100")
        return value

    @field_validator("display_order", mode="before")
    @classmethod
    def _validate_display_order(cls, value: Any) -> int:
        if value is None:
            return 0
        return _bounded_int(
            value,
            0,
            9999,
            {
                "type": "Urutan tampilan harus berupa angka",
                "min": "Urutan tampilan minimal 0",
                "max": "Urutan tampilan maksimal 9999",
                "int": "Urutan tampilan harus berupa bilangan bulat",
            },
        )

    @model_validator(mode="after")
    def _category_matches_module_type(self) -> "CreateTestRequest":
        if self.category not in categories_for(self.module_type):
            raise invalid("Kategori tidak sesuai dengan tipe modul")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the backend; zero/empty optional fields are omitted."""
        payload = self.model_dump(mode="json")
        for key in ("description", "icon", "card_color", "passing_score", "display_order"):
            if not payload.get(key):
                payload.pop(key, None)
        return payload


class UpdateTestRequest(BaseModel):
    """Partial test update; only provided fields are sent."""

    name: str | None = None
    description: str | None = None
    module_type: ModuleType | None = None
    category: ModuleCategory | None = None
    time_limit: int | None = None
    icon: str | None = None
    card_color: str | None = None
    passing_score: float | None = None
    display_order: int | None = None
    status: ModuleStatus | None = None
    instructions: str | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str | None) -> str | None:
        if value is not None and len(value.strip()) < 3:
            raise invalid("Nama tes minimal 3 karakter")
        return value

    @field_validator("time_limit", mode="before")
    @classmethod
    def _validate_time_limit(cls, value: Any) -> int | None:
        if value is None:
            return None
        return _bounded_int(
            value,
            1,
            480,
            {
                "type": "Batas waktu harus berupa angka",
                "min": "Batas waktu minimal 1 menit",
                "max": "Batas waktu maksimal 480 menit (8 jam)",
            },
        )

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json", exclude_unset=True)
        if not payload:
            raise FormValidationError({"_form": "Minimal satu data harus diubah"})
        return payload


class PsychTest(BaseModel):
    """Test record as returned by the backend."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: str | None = None
    module_type: str | None = None
    category: str | None = None
    time_limit: int | None = None
    total_questions: int = 0
    icon: str | None = None
    card_color: str | None = None
    status: str | None = None
    display_order: int | None = None
    passing_score: float | None = None


class PsychTestListParams(ListParams):
    """Filters for the tests catalog."""

    module_type: str | None = None
    category: str | None = None
    status: str | None = None
    time_limit_min: int | None = None
    time_limit_max: int | None = None
    total_questions_min: int | None = None
    total_questions_max: int | None = None
    difficulty_level: str | None = None
    sort_by: Literal[
        "name", "created_at", "updated_at", "display_order", "total_questions", "time_limit"
    ] | None = None
    sort_order: Literal["asc", "desc"] | None = None
    created_from: str | None = None
    created_to: str | None = None
    tags: list[str] | None = None
    include_stats: bool | None = None
