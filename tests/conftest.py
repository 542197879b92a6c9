"""Shared fixtures: a stub transport that records every request it receives."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest


class StubProvider:
    """Answers every request with one canned response and keeps the requests."""

    def __init__(
        self,
        status_code: int = 200,
        body: Any = None,
        text: str | None = None,
        error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.text = text
        self.error = error
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def stub() -> Callable[..., StubProvider]:
    def _make(**kwargs: Any) -> StubProvider:
        return StubProvider(**kwargs)

    return _make


@pytest.fixture
def openai_success() -> dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "model": "gpt-4o-2024-08-06",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Hi there!"},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 3, "total_tokens": 15},
    }


@pytest.fixture
def anthropic_success() -> dict[str, Any]:
    return {
        "id": "msg_1",
        "type": "message",
        "role": "assistant",
        "model": "claude-3-5-sonnet-20241022",
        "content": [{"type": "text", "text": "Hello from Claude"}],
        "stop_reason": "end_turn",
        "usage": {"input_tokens": 10, "output_tokens": 5},
    }


@pytest.fixture
def google_success() -> dict[str, Any]:
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": "Hello from Gemini"}]},
                "finishReason": "STOP",
            }
        ],
        "usageMetadata": {
            "promptTokenCount": 7,
            "candidatesTokenCount": 4,
            "totalTokenCount": 11,
        },
    }


@pytest.fixture
def ollama_success() -> dict[str, Any]:
    return {
        "model": "llama3.2",
        "created_at": "2024-11-01T10:00:00Z",
        "message": {"role": "assistant", "content": "Hello from llama"},
        "done": True,
        "prompt_eval_count": 20,
        "eval_count": 8,
    }
