from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileUpdate(BaseModel):
    """Partial update of a user's own details. Role and password are not editable here."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=120)
    email: str | None = Field(default=None, min_length=3, max_length=150)
    department: str | None = Field(default=None, min_length=1, max_length=120)
    semester: int | None = Field(default=None, ge=1, le=8)
    section: str | None = Field(default=None, max_length=16)
    roll_number: str | None = Field(default=None, alias="rollNumber", max_length=32)
    mobile: str | None = Field(default=None, max_length=20)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        if v is None:
            return v
        if "@" not in v:
            raise ValueError("invalid email address")
        return v.lower()
