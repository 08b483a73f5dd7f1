from __future__ import annotations
from typing import Any, List, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from notecards.core.errors import NotFound
from notecards.db.models import Card, Message


class MessageRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list(self, exclude_id: Optional[int] = None) -> List[Message]:
        """All messages, oldest first. ``exclude_id`` drops one message from the result."""
        stmt = select(Message).order_by(Message.created_at.asc(), Message.id.asc())
        if exclude_id is not None:
            stmt = stmt.where(Message.id != exclude_id)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, role: str, content: str) -> Message:
        msg = Message(role=role, content=content)
        self.session.add(msg)
        await self.session.commit()
        await self.session.refresh(msg)
        return msg


class CardRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list(self) -> List[Card]:
        stmt = select(Card).options(selectinload(Card.message)).order_by(Card.id.asc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get(self, card_id: int) -> Card:
        card = await self.session.get(Card, card_id)
        if card is None:
            raise NotFound("Card not found")
        return card

    async def create(self, **fields: Any) -> Card:
        card = Card(**fields)
        self.session.add(card)
        await self.session.commit()
        await self.session.refresh(card)
        return card

    async def update(self, card_id: int, **fields: Any) -> Card:
        """Write only the given fields; anything not passed is left as stored."""
        card = await self.get(card_id)
        for name, value in fields.items():
            setattr(card, name, value)
        self.session.add(card)
        await self.session.commit()
        await self.session.refresh(card)
        return card

    async def delete(self, card_id: int) -> None:
        card = await self.get(card_id)
        await self.session.delete(card)
        await self.session.commit()
