from datetime import datetime

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from elearning.schemas.user import InstructorSummary


class CourseCreate(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    instructor_id: str | None = None
    price: float = Field(default=0, ge=0, allow_inf_nan=False)
    published: bool = False


class CourseRead(BaseModel):
    """Course with the instructor reference left as an id."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    id: str
    title: str
    description: str | None = None
    instructor_id: str | None = None
    price: float
    published: bool
    created_at: datetime
    updated_at: datetime


class CourseOut(BaseModel):
    """Course with the instructor resolved to id and name."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    id: str
    title: str
    description: str | None = None
    instructor: InstructorSummary | None = None
    price: float
    published: bool
    created_at: datetime
    updated_at: datetime
