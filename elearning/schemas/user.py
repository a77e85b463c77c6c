from datetime import datetime
from typing import Literal

from pydantic import AliasGenerator, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class UserCreate(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str | None = Field(default=None, max_length=255)
    email: EmailStr
    role: Literal["student", "instructor"] = "student"


class UserRead(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    id: str
    name: str | None = None
    email: str
    role: str
    created_at: datetime
    updated_at: datetime


class InstructorSummary(BaseModel):
    """What a course listing reveals about its instructor."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None = None


class RegisterResponse(BaseModel):
    message: str
    user: UserRead
