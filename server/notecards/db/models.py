from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field, Relationship


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Message(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    role: str = Field(max_length=16)  # "user" | "assistant"
    content: str
    created_at: datetime = Field(default_factory=utcnow, index=True)


class Card(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = ""
    content: Optional[str] = ""
    pos_x: Optional[float] = 0
    pos_y: Optional[float] = 0
    width: Optional[float] = 200
    height: Optional[float] = 200
    # Not unique: a message is normally linked by at most one card, but nothing enforces it
    message_id: Optional[int] = Field(default=None, foreign_key="message.id", index=True)

    message: Optional[Message] = Relationship()
