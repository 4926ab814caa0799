from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ActionRegisterRequest(BaseModel):
    """Body of POST /register-action; `uuid` is accepted for older hook scripts."""

    model_config = ConfigDict(extra="ignore")

    token: str = Field(min_length=1, validation_alias=AliasChoices("token", "uuid"))
    session_id: str = ""
    notification_type: str = ""
    message: str = ""
    project: str = ""
    tool: str = ""

    @field_validator("session_id", "notification_type", "message", "project", "tool", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value
