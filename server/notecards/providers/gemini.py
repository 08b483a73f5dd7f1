from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional, Sequence
import httpx

from notecards.config import Settings

logger = logging.getLogger(__name__)

SYSTEM_PERSONA = (
    "You are an friendly and knowledgeable AI assistant to help user to clear "
    "their thoughts and organize them."
)


def _field(item: Any, name: str, default: Any = None) -> Any:
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def _format_messages(messages: Sequence[Any]) -> str:
    return "\n".join(f"{_field(m, 'role')}: {_field(m, 'content')}" for m in messages)


def _format_cards(cards: Sequence[Any]) -> str:
    lines = []
    for index, card in enumerate(cards, start=1):
        content = _field(card, "content") or ""
        snippet = content[:100] + ("..." if len(content) > 100 else "")
        lines.append(f'Card {index}: "{_field(card, "title") or ""}" - {snippet}')
    return "\n".join(lines)


def build_response_prompt(user_message: str, context: Optional[Dict[str, Any]] = None) -> str:
    context = context or {}
    conversation = ""
    if context.get("messages"):
        conversation = "\n\nPrevious conversation:\n" + _format_messages(context["messages"])
    cards = ""
    if context.get("cards"):
        cards = "\n\nCurrent cards in workspace:\n" + _format_cards(context["cards"])
    return (
        f"{SYSTEM_PERSONA}\n\n"
        f'Current user message: "{user_message}"{conversation}{cards}\n\n'
        "Please provide a helpful, concise response that takes into account both the "
        "conversation history and the current cards in the workspace."
    )


def build_suggestions_prompt(content: str, existing_cards: Sequence[Any], conversation: Sequence[Any]) -> str:
    recent = ""
    if conversation:
        recent = "\n\nRecent conversation:\n" + _format_messages(list(conversation)[-5:])
    return (
        f'Based on this card content: "{content}"\n\n'
        f"And these existing cards: {json.dumps(list(existing_cards), indent=2, default=str)}{recent}\n\n"
        "Suggest:\n"
        "1. A good title for this card\n"
        "2. Any connections or relationships to existing cards\n"
        "3. Potential categories or tags\n\n"
        "Keep suggestions concise and actionable."
    )


class GeminiService:
    """Text generation through the Gemini ``generateContent`` endpoint.

    Never raises to callers: any failure is logged and replaced by a canned
    reply so the HTTP layer always gets a string back.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self.client = client
        self.api_key = settings.gemini_api_key
        self.model = settings.gemini_model
        self.base_url = settings.gemini_base_url.rstrip("/")

    @staticmethod
    def build_client(settings: Settings) -> httpx.AsyncClient:
        timeout = httpx.Timeout(settings.llm_timeout_seconds, connect=10.0)
        return httpx.AsyncClient(timeout=timeout, trust_env=True)

    async def generate_response(self, user_message: str, context: Optional[Dict[str, Any]] = None) -> str:
        prompt = build_response_prompt(user_message, context)
        try:
            return await self._generate(prompt)
        except Exception:
            logger.exception("Gemini generateContent failed model=%s", self.model)
            return (
                f'I understand you said: "{user_message}". '
                "Sorry I cannot process your request due to a technical issue."
            )

    async def generate_card_suggestions(
        self,
        content: str,
        existing_cards: Sequence[Any] = (),
        conversation: Sequence[Any] = (),
    ) -> str:
        prompt = build_suggestions_prompt(content, existing_cards, conversation)
        try:
            return await self._generate(prompt)
        except Exception:
            logger.exception("Gemini card suggestions failed model=%s", self.model)
            return "Unable to generate suggestions at this time."

    async def _generate(self, prompt: str) -> str:
        if not self.api_key:
            raise RuntimeError("GEMINI_API_KEY is not configured")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }
        resp = await self.client.post(url, params={"key": self.api_key}, json=payload)
        resp.raise_for_status()
        obj = resp.json()
        candidates = obj.get("candidates") or []
        if not candidates:
            raise ValueError(f"Gemini returned no candidates: {obj.get('promptFeedback')}")
        parts: List[Dict[str, Any]] = candidates[0].get("content", {}).get("parts", [])
        text = "".join(p.get("text", "") for p in parts)
        if not text:
            raise ValueError("Gemini returned an empty response")
        return text
