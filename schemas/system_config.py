from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_names(v):
    if v is None:
        return v
    cleaned = [str(x).strip() for x in v if str(x).strip()]
    return list(dict.fromkeys(cleaned))


class SystemConfigUpdate(BaseModel):
    """Lists present in the body replace the stored ones; absent lists are kept."""

    model_config = ConfigDict(populate_by_name=True)

    departments: list[str] | None = None
    sections: list[str] | None = None
    semesters: list[int] | None = None
    elective_categories: list[str] | None = Field(default=None, alias="electiveCategories")

    @field_validator("departments", "sections", "elective_categories", mode="before")
    @classmethod
    def clean_names(cls, v):
        return _clean_names(v)

    @field_validator("semesters")
    @classmethod
    def known_semesters(cls, v):
        if v is None:
            return v
        bad = [s for s in v if not 1 <= s <= 8]
        if bad:
            raise ValueError(f"semesters must be between 1 and 8, got {bad}")
        return sorted(set(v))
