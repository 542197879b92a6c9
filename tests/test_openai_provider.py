"""Unit tests for the OpenAI-compatible adapter."""

from __future__ import annotations

import json

import pytest

from relay.llm_adapter.errors import (
    EmptyResponseError,
    MalformedResponseError,
    MissingCredentialError,
)
from relay.llm_adapter.models import LLMConfig, LLMMessage
from relay.llm_adapter.openai_provider import OpenAIProvider


class TestOpenAIRequest:

    def test_messages_pass_through_verbatim(self):
        messages = [
            LLMMessage(role="system", content="be brief"),
            LLMMessage(role="user", content="hi"),
            LLMMessage(role="tool", content="{}"),
        ]
        body = OpenAIProvider().build_body(
            LLMConfig(provider="openai", api_key="k"), messages, "gpt-4o"
        )

        assert body["messages"] == [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "hi"},
            {"role": "tool", "content": "{}"},
        ]
        assert body["stream"] is False

    def test_unset_generation_options_are_omitted(self):
        body = OpenAIProvider().build_body(
            LLMConfig(provider="openai", api_key="k"), [], "gpt-4o"
        )
        assert "temperature" not in body
        assert "max_tokens" not in body

    def test_generation_options_are_forwarded(self):
        body = OpenAIProvider().build_body(
            LLMConfig(provider="openai", api_key="k", temperature=1.7, max_tokens=64),
            [],
            "gpt-4o",
        )
        assert body["temperature"] == 1.7
        assert body["max_tokens"] == 64

    def test_missing_api_key(self):
        with pytest.raises(MissingCredentialError, match="OpenAI API key is required"):
            OpenAIProvider().resolve_api_key(LLMConfig(provider="openai"))

    def test_custom_base_url_trailing_slash(self):
        provider = OpenAIProvider()
        base_url = provider.resolve_base_url(
            LLMConfig(provider="openai", base_url="http://127.0.0.1:8080/v1/")
        )
        assert provider.endpoint(base_url, "m") == "http://127.0.0.1:8080/v1/chat/completions"


class TestOpenAIResponse:

    def test_reported_model_and_usage(self, openai_success):
        response = OpenAIProvider().parse_response(json.dumps(openai_success), "gpt-4o")

        assert response.content == "Hi there!"
        assert response.model == "gpt-4o-2024-08-06"
        assert response.usage.prompt_tokens == 12
        assert response.usage.completion_tokens == 3
        assert response.usage.total_tokens == 15

    def test_missing_model_falls_back_to_requested(self):
        text = '{"choices": [{"message": {"role": "assistant", "content": "ok"}}]}'
        response = OpenAIProvider().parse_response(text, "gpt-4o-mini")

        assert response.model == "gpt-4o-mini"
        assert response.usage is None

    def test_total_derived_when_not_reported(self):
        text = (
            '{"choices": [{"message": {"role": "assistant", "content": "ok"}}],'
            ' "usage": {"prompt_tokens": 4, "completion_tokens": 6}}'
        )
        response = OpenAIProvider().parse_response(text, "gpt-4o")
        assert response.usage.total_tokens == 10

    def test_empty_choices(self):
        with pytest.raises(EmptyResponseError, match="No response from OpenAI"):
            OpenAIProvider().parse_response('{"choices": []}', "gpt-4o")

    def test_not_json(self):
        with pytest.raises(MalformedResponseError):
            OpenAIProvider().parse_response("<html>oops</html>", "gpt-4o")

    def test_null_content_is_malformed(self):
        text = '{"choices": [{"message": {"role": "assistant", "content": null}}]}'
        with pytest.raises(MalformedResponseError):
            OpenAIProvider().parse_response(text, "gpt-4o")
