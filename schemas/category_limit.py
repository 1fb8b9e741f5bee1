from pydantic import BaseModel, ConfigDict, Field


class CategoryLimitUpsert(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    department: str = Field(min_length=1)
    semester: int = Field(ge=1, le=8)
    category: str = Field(min_length=1)
    max_electives: int = Field(ge=1, alias="maxElectives")


class CategoryLimitUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    max_electives: int = Field(ge=1, alias="maxElectives")
