from fastapi import APIRouter, Depends
import logging
from typing import List

from notecards.api.deps import get_language_model, get_message_repository
from notecards.db.models import Message as MessageModel
from notecards.db.repository import MessageRepository
from notecards.providers.base import LanguageModel
from notecards.schemas.message import MessageCreate, MessageRead

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/messages", response_model=List[MessageRead])
async def list_messages(messages: MessageRepository = Depends(get_message_repository)) -> List[MessageModel]:
    """Get the whole transcript (oldest first)."""
    return await messages.list()


@router.post("/messages", response_model=List[MessageRead])
async def create_message(
    request: MessageCreate,
    messages: MessageRepository = Depends(get_message_repository),
    llm: LanguageModel = Depends(get_language_model),
) -> List[MessageModel]:
    """Store a message; a user message also gets an assistant reply, which is the only item returned."""
    if request.role == "assistant":
        # Scripted reply, no model call
        msg = await messages.create(role="assistant", content=request.content)
        logger.info("Stored assistant message id=%s", msg.id)
        return [msg]

    user_msg = await messages.create(role="user", content=request.content)
    history = await messages.list(exclude_id=user_msg.id)
    logger.info("Generating reply for message id=%s history=%d", user_msg.id, len(history))
    reply_text = await llm.generate_response(request.content, {"messages": history})
    reply = await messages.create(role="assistant", content=reply_text)
    return [reply]
