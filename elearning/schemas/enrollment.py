from datetime import datetime

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from elearning.schemas.course import CourseRead

_read_config = ConfigDict(
    from_attributes=True,
    alias_generator=AliasGenerator(serialization_alias=to_camel),
)


class EnrollmentCreate(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    student_id: str
    course_id: str


class ProgressUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    progress: float = Field(allow_inf_nan=False)


class EnrollmentOut(BaseModel):
    model_config = _read_config

    id: str
    student_id: str
    course_id: str
    progress: float
    enrolled_at: datetime


class EnrollmentWithCourse(BaseModel):
    model_config = _read_config

    id: str
    student_id: str
    course: CourseRead | None = None
    progress: float
    enrolled_at: datetime


class EnrollResponse(BaseModel):
    message: str
    enrollment: EnrollmentOut
