from datetime import datetime

from pydantic import field_validator

from .base import CamelModel


class ChatSend(CamelModel):
    content: str

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not (v or "").strip():
            raise ValueError("Content is required")
        return v.strip()


class ChatMessageRead(CamelModel):
    id: int
    role: str
    content: str
    created_at: datetime


class ChatReply(CamelModel):
    success: bool = True
    response: str
