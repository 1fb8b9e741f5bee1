from pydantic import BaseModel, ConfigDict, Field

from models.selection import STATUSES


class SelectionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Defaults to the authenticated caller
    student_id: int | None = Field(default=None, alias="studentId")
    # Defaults to the elective's own semester; range is re-checked at admission
    semester: int | None = None


class StatusUpdate(BaseModel):
    status: str = Field(json_schema_extra={"enum": list(STATUSES)})
