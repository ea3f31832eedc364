"""Request payload schemas shared by the HTTP client and the development backend."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WirePayload(BaseModel):
    """Base schema that serializes to the API's camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)


class LoginPayload(WirePayload):
    email: str
    password: str


class RegisterPayload(WirePayload):
    name: str
    email: str
    password: str


class PasswordResetPayload(WirePayload):
    email: str


class ProfileUpdatePayload(WirePayload):
    name: str | None = None
    email: str | None = None
    current_password: str | None = None
    new_password: str | None = None


class QuizSettings(WirePayload):
    """Parameters for generating a quiz."""

    subject: str
    num_questions: int = Field(default=10, ge=1, le=50)
    title: str | None = None
    description: str | None = None
    difficulty: str | None = None
    time_limit: int | None = None


class SubmitPayload(WirePayload):
    """Answers are option ids in question order; completion time is in seconds."""

    answers: list[str]
    completion_time: int = Field(ge=0)
