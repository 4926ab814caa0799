from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class SessionRegisterRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    session_id: str = Field(min_length=1)
    terminal_handle: str = Field(default="", validation_alias=AliasChoices("terminal_handle", "iterm_session"))
    cwd: str = ""

    @field_validator("terminal_handle", "cwd", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value
