from datetime import datetime

from sqlmodel import Field, SQLModel

from hermetrix.core.timeutil import utc_now


class ChatMessage(SQLModel, table=True):
    __tablename__ = "chat_messages"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    role: str  # user | assistant
    content: str
    created_at: datetime = Field(default_factory=utc_now)
