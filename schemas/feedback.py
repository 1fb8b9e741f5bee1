from pydantic import BaseModel, ConfigDict, Field


class FeedbackBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=1, max_length=2000)
    would_recommend: bool = Field(alias="wouldRecommend")
    improvements: str | None = Field(default=None, max_length=2000)


class FeedbackCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    elective_id: int = Field(alias="previousElectiveId")
    semester: int = Field(ge=1, le=8)
    feedback: FeedbackBody
