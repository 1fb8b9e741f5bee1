from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.elective import SUBJECT_TYPES
from utils.dates import to_naive_utc


def _clean_code(v):
    # "", "null", "undefined" all mean "no course code"
    if v is None:
        return None
    text = str(v).strip()
    if text.lower() in {"", "null", "undefined"}:
        return None
    return text.upper()


def _clean_categories(v):
    if v is None:
        return v
    if isinstance(v, str):
        v = [v]
    cleaned = [str(c).strip() for c in v if str(c).strip()]
    if not cleaned:
        raise ValueError("at least one category is required")
    if len(cleaned) > 10:
        raise ValueError("an elective can carry at most 10 categories")
    # keep order, drop repeats
    return list(dict.fromkeys(cleaned))


class ElectiveCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    code: str | None = None
    department: str = Field(min_length=1)
    semester: int = Field(ge=1, le=8)
    track: str | None = None
    credits: int = Field(default=3, ge=1, le=6)
    categories: list[str] = Field(default_factory=lambda: ["Departmental"], alias="category")
    subject_type: str = Field(default="Theory", alias="subjectType")
    description: str | None = None
    instructor: str | None = None
    deadline: datetime | None = None
    min_enrollment: int | None = Field(default=None, ge=0, alias="minEnrollment")
    max_enrollment: int | None = Field(default=None, ge=1, alias="maxEnrollment")
    prerequisites: list[int] = Field(default_factory=list)

    @field_validator("code", mode="before")
    @classmethod
    def clean_code(cls, v):
        return _clean_code(v)

    @field_validator("categories", mode="before")
    @classmethod
    def clean_categories(cls, v):
        return _clean_categories(v)

    @field_validator("subject_type")
    @classmethod
    def known_subject_type(cls, v: str) -> str:
        if v not in SUBJECT_TYPES:
            raise ValueError(f"subjectType must be one of {', '.join(SUBJECT_TYPES)}")
        return v

    @field_validator("deadline", mode="before")
    @classmethod
    def empty_deadline(cls, v):
        return None if v == "" else v

    @field_validator("deadline")
    @classmethod
    def deadline_utc(cls, v):
        return to_naive_utc(v)


class ElectiveUpdate(BaseModel):
    """Partial update; only fields present in the body are applied."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=255)
    code: str | None = None
    department: str | None = None
    semester: int | None = Field(default=None, ge=1, le=8)
    track: str | None = None
    credits: int | None = Field(default=None, ge=1, le=6)
    categories: list[str] | None = Field(default=None, alias="category")
    subject_type: str | None = Field(default=None, alias="subjectType")
    description: str | None = None
    instructor: str | None = None
    deadline: datetime | None = None
    min_enrollment: int | None = Field(default=None, ge=0, alias="minEnrollment")
    max_enrollment: int | None = Field(default=None, ge=1, alias="maxEnrollment")
    is_active: bool | None = Field(default=None, alias="isActive")
    prerequisites: list[int] | None = None

    @field_validator("code", mode="before")
    @classmethod
    def clean_code(cls, v):
        return _clean_code(v)

    @field_validator("categories", mode="before")
    @classmethod
    def clean_categories(cls, v):
        return _clean_categories(v)

    @field_validator("subject_type")
    @classmethod
    def known_subject_type(cls, v):
        if v is not None and v not in SUBJECT_TYPES:
            raise ValueError(f"subjectType must be one of {', '.join(SUBJECT_TYPES)}")
        return v

    @field_validator("deadline", mode="before")
    @classmethod
    def empty_deadline(cls, v):
        return None if v == "" else v

    @field_validator("deadline")
    @classmethod
    def deadline_utc(cls, v):
        return to_naive_utc(v)
