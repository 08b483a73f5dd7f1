from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest
from fastapi.testclient import TestClient

from notecards.api.deps import get_language_model
from notecards.config import Settings
from notecards.main import create_app


class FakeLanguageModel:
    def __init__(self, reply: str = "Hello there!") -> None:
        self.reply = reply
        self.calls: List[Tuple[str, Optional[Dict[str, Any]]]] = []
        self.suggestion_calls: List[Tuple[str, Sequence[Any], Sequence[Any]]] = []

    async def generate_response(self, user_message: str, context: Optional[Dict[str, Any]] = None) -> str:
        self.calls.append((user_message, context))
        return self.reply

    async def generate_card_suggestions(self, content: str, existing_cards=(), conversation=()) -> str:
        self.suggestion_calls.append((content, list(existing_cards), list(conversation)))
        return "Title: Groceries"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", gemini_api_key=None)


@pytest.fixture
def llm() -> FakeLanguageModel:
    return FakeLanguageModel()


@pytest.fixture
def app(settings, llm):
    app = create_app(settings)
    app.dependency_overrides[get_language_model] = lambda: llm
    return app


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def make_card(client):
    def _make(**overrides: Any) -> Dict[str, Any]:
        body = {
            "title": "Card",
            "content": "Content",
            "position": {"x": 0, "y": 0},
            "size": {"width": 200, "height": 200},
        }
        body.update(overrides)
        resp = client.post("/cards", json=body)
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _make
