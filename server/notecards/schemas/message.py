from __future__ import annotations
from datetime import datetime, timezone
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_serializer


class MessageCreate(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class MessageRead(BaseModel):
    """Stored message as sent over the wire (timestamp key is ``createdAt``)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    role: str
    content: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @field_serializer("created_at")
    def _as_utc(self, value: datetime) -> datetime:
        # SQLite hands back naive values; they were written as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
