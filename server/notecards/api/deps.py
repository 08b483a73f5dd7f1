from __future__ import annotations
from typing import AsyncIterator

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from notecards.db.repository import CardRepository, MessageRepository
from notecards.providers.base import LanguageModel


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.db.session() as session:
        yield session


def get_message_repository(session: AsyncSession = Depends(get_session)) -> MessageRepository:
    return MessageRepository(session)


def get_card_repository(session: AsyncSession = Depends(get_session)) -> CardRepository:
    return CardRepository(session)


def get_language_model(request: Request) -> LanguageModel:
    return request.app.state.llm
