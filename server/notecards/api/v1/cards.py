from fastapi import APIRouter, Depends, Request, Response
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from notecards.api.deps import get_card_repository, get_language_model, get_message_repository
from notecards.core.card_mapper import to_external, to_persisted
from notecards.core.errors import InvalidPayload
from notecards.db.repository import CardRepository, MessageRepository
from notecards.providers.base import LanguageModel
from notecards.schemas.card import (
    CardBody,
    CardCreate,
    ContentRequest,
    MoveRequest,
    ResizeRequest,
    TitleRequest,
)

router = APIRouter()
logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


async def _parse(model: Type[ModelT], http_request: Request, error: str) -> ModelT:
    try:
        return model.model_validate(await http_request.json())
    except (ValueError, ValidationError):
        # ValueError covers bodies that are empty or not JSON at all
        raise InvalidPayload(error) from None


def _with_title(fields: Dict[str, Any], title: Optional[str]) -> Dict[str, Any]:
    # to_persisted does not carry the title; hand it to the store next to the mapped fields
    if title is not None:
        fields["title"] = title
    return fields


@router.get("/cards")
async def list_cards(cards: CardRepository = Depends(get_card_repository)) -> List[Dict[str, Any]]:
    """Get all cards in their external shape."""
    return [to_external(card) for card in await cards.list()]


@router.post("/cards")
async def create_card(request: CardCreate, cards: CardRepository = Depends(get_card_repository)) -> Dict[str, Any]:
    """Create a card, optionally linked to the message it was made from."""
    body = request.model_dump(exclude={"messageId"})
    card = await cards.create(**_with_title(to_persisted(body, request.messageId), request.title))
    logger.info("Created card id=%s message_id=%s", card.id, card.message_id)
    return to_external(card)


@router.put("/cards/{card_id}")
async def replace_card(
    card_id: int, request: CardBody, cards: CardRepository = Depends(get_card_repository)
) -> Dict[str, Any]:
    """Replace every field of a card. The message link is always cleared."""
    fields = _with_title(to_persisted(request.model_dump(), None), request.title)
    card = await cards.update(card_id, **fields)
    return to_external(card)


@router.patch("/cards/{card_id}/move")
async def move_card(
    card_id: int, http_request: Request, cards: CardRepository = Depends(get_card_repository)
) -> Dict[str, Any]:
    request = await _parse(MoveRequest, http_request, "Invalid position data")
    card = await cards.update(card_id, pos_x=request.position.x, pos_y=request.position.y)
    return to_external(card)


@router.patch("/cards/{card_id}/resize")
async def resize_card(
    card_id: int, http_request: Request, cards: CardRepository = Depends(get_card_repository)
) -> Dict[str, Any]:
    request = await _parse(ResizeRequest, http_request, "Invalid size data")
    card = await cards.update(card_id, width=request.size.width, height=request.size.height)
    return to_external(card)


@router.patch("/cards/{card_id}/content")
async def update_card_content(
    card_id: int, http_request: Request, cards: CardRepository = Depends(get_card_repository)
) -> Dict[str, Any]:
    request = await _parse(ContentRequest, http_request, "Invalid content data")
    card = await cards.update(card_id, content=request.content)
    return to_external(card)


@router.patch("/cards/{card_id}/title")
async def update_card_title(
    card_id: int, http_request: Request, cards: CardRepository = Depends(get_card_repository)
) -> Dict[str, Any]:
    request = await _parse(TitleRequest, http_request, "Invalid title data")
    card = await cards.update(card_id, title=request.title)
    return to_external(card)


@router.delete("/cards/{card_id}", status_code=204)
async def delete_card(card_id: int, cards: CardRepository = Depends(get_card_repository)) -> Response:
    await cards.delete(card_id)
    logger.info("Deleted card id=%s", card_id)
    return Response(status_code=204)


@router.get("/cards/{card_id}/suggestions")
async def suggest_for_card(
    card_id: int,
    cards: CardRepository = Depends(get_card_repository),
    messages: MessageRepository = Depends(get_message_repository),
    llm: LanguageModel = Depends(get_language_model),
) -> Dict[str, str]:
    """Ask the model for a title, related cards and tags for one card."""
    card = await cards.get(card_id)
    others = [to_external(c) for c in await cards.list() if c.id != card.id]
    history = await messages.list()
    text = await llm.generate_card_suggestions(card.content or "", others, history)
    return {"suggestions": text}
