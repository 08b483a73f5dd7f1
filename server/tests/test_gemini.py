import asyncio
import json

import httpx

from notecards.config import Settings
from notecards.db.models import Message
from notecards.providers.gemini import GeminiService, build_response_prompt


def _service(handler, api_key="AIza-test-key") -> GeminiService:
    settings = Settings(gemini_api_key=api_key, gemini_model="gemini-1.5-flash")
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiService(client, settings)


def _reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_generate_response_posts_prompt_with_history():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_reply("Sure, let's sort that out."))

    service = _service(handler)
    history = [Message(id=1, role="user", content="Hi"), Message(id=2, role="assistant", content="Hello!")]

    text = asyncio.run(service.generate_response("Plan my week", {"messages": history}))

    assert text == "Sure, let's sort that out."
    assert seen["url"].path == "/v1beta/models/gemini-1.5-flash:generateContent"
    assert seen["url"].params["key"] == "AIza-test-key"
    prompt = seen["body"]["contents"][0]["parts"][0]["text"]
    assert 'Current user message: "Plan my week"' in prompt
    assert "Previous conversation:\nuser: Hi\nassistant: Hello!" in prompt


def test_generate_response_falls_back_on_http_error():
    service = _service(lambda request: httpx.Response(500, json={"error": "boom"}))

    text = asyncio.run(service.generate_response("Hello", {"messages": []}))

    assert text == 'I understand you said: "Hello". Sorry I cannot process your request due to a technical issue.'


def test_generate_response_falls_back_without_candidates():
    service = _service(lambda request: httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}}))

    text = asyncio.run(service.generate_response("Hello"))

    assert text.startswith('I understand you said: "Hello".')


def test_generate_response_without_api_key_never_calls_out():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=_reply("unused"))

    service = _service(handler, api_key=None)

    text = asyncio.run(service.generate_response("Hello"))

    assert calls == []
    assert "Sorry I cannot process your request" in text


def test_card_suggestions_fall_back_on_transport_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    service = _service(handler)

    text = asyncio.run(service.generate_card_suggestions("eggs", [], []))

    assert text == "Unable to generate suggestions at this time."


def test_response_prompt_lists_cards_with_truncated_content():
    cards = [{"title": "Long", "content": "x" * 120}, {"title": "Short", "content": "tiny"}]

    prompt = build_response_prompt("Hi", {"messages": [], "cards": cards})

    assert "Previous conversation" not in prompt
    assert f'Card 1: "Long" - {"x" * 100}...' in prompt
    assert 'Card 2: "Short" - tiny' in prompt
