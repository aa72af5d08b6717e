from typing import Literal

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    message: str = Field(default="")
    history: list[ChatTurn] = Field(default=[])


class StreamEvent(BaseModel):
    # exactly one field is set per event
    content: str | None = Field(default=None)
    done: bool | None = Field(default=None)
    error: str | None = Field(default=None)

    @property
    def is_terminal(self) -> bool:
        return bool(self.done) or bool(self.error)


class ErrorResponse(BaseModel):
    error: str
