from __future__ import annotations
from typing import Any, Dict, Optional, Protocol, Sequence


class LanguageModel(Protocol):
    async def generate_response(self, user_message: str, context: Optional[Dict[str, Any]] = None) -> str:
        """Reply to ``user_message``; ``context["messages"]`` is the prior transcript. Must not raise."""
        ...

    async def generate_card_suggestions(
        self,
        content: str,
        existing_cards: Sequence[Any] = (),
        conversation: Sequence[Any] = (),
    ) -> str:
        ...
