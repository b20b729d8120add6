# tests/test_sse.py
"""SSE framing and the httpx chat stream client."""

import json
from uuid import uuid4

import httpx
import pytest

from revyn_audit.core.exceptions import ChatSessionError
from revyn_audit.services.chat_client import ChatClient
from revyn_audit.services.sse import DONE_EVENT, error_event, iter_sse_tokens, token_event


def test_event_framing():
    assert token_event("Hi") == 'data: {"token": "Hi"}\n\n'
    assert error_event("boom") == 'data: {"error": "boom"}\n\n'
    assert DONE_EVENT == "data: [DONE]\n\n"


def test_iter_tokens_stops_at_done():
    lines = ['data: {"token": "a"}', "", ": keep-alive", 'data: {"token": "b"}', "data: [DONE]", 'data: {"token": "c"}']
    assert list(iter_sse_tokens(lines)) == ["a", "b"]


def test_iter_tokens_skips_garbage():
    lines = ["data: not-json", "data: [1, 2]", 'data: {"token": ""}', 'data: {"token": "ok"}']
    assert list(iter_sse_tokens(lines)) == ["ok"]


def test_iter_tokens_raises_on_error_payload():
    with pytest.raises(ChatSessionError, match="slow down"):
        list(iter_sse_tokens(['data: {"token": "a"}', 'data: {"error": "slow down"}']))


def _client(handler):
    transport = httpx.MockTransport(handler)
    return ChatClient("http://test", client=httpx.Client(base_url="http://test", transport=transport))


class TestChatClient:

    def test_collects_streamed_reply(self):
        session_id = uuid4()
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            body = token_event("Hello") + token_event(" there") + DONE_EVENT
            return httpx.Response(200, text=body, headers={"content-type": "text/event-stream"})

        tokens = []
        with _client(handler) as client:
            reply = client.send_message(session_id, "hi", on_token=tokens.append)

        assert reply == "Hello there"
        assert tokens == ["Hello", " there"]
        assert seen["path"] == f"/api/v1/chat/sessions/{session_id}/message"
        assert seen["body"] == {"message": "hi"}

    def test_error_status_uses_envelope_message(self):
        def handler(request):
            return httpx.Response(404, json={"detail": {"error_code": "CHAT_ERROR", "message": "Session not found"}})

        with _client(handler) as client:
            with pytest.raises(ChatSessionError, match="Session not found"):
                client.send_message(uuid4(), "hi")

    def test_error_status_without_json(self):
        def handler(request):
            return httpx.Response(502, text="Bad gateway")

        with _client(handler) as client:
            with pytest.raises(ChatSessionError, match="status: 502"):
                client.send_message(uuid4(), "hi")

    def test_error_event_in_stream(self):
        def handler(request):
            return httpx.Response(200, text=token_event("a") + error_event("Too many requests"))

        with _client(handler) as client:
            with pytest.raises(ChatSessionError, match="Too many requests"):
                client.send_message(uuid4(), "hi")
