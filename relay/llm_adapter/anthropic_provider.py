"""
Anthropic Messages API provider.

System messages are dropped rather than moved into the top-level "system"
field, and every role other than "assistant" is sent as "user". The Messages
API rejects requests without max_tokens, so 4096 is sent when the caller set
none. Anthropic reports only input/output counts; the total is derived.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from relay.llm_adapter.base import LLMProvider, normalize_usage
from relay.llm_adapter.errors import EmptyResponseError
from relay.llm_adapter.models import LLMConfig, LLMMessage, LLMResponse

ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MAX_TOKENS = 4096

_USAGE_FIELDS = {
    "prompt_tokens": "input_tokens",
    "completion_tokens": "output_tokens",
}


class _ContentBlock(BaseModel):
    type: str
    text: str | None = None


class _MessagesResponse(BaseModel):
    content: list[_ContentBlock]
    usage: dict[str, Any] | None = None
    model: str | None = None


class AnthropicProvider(LLMProvider):

    name = "anthropic"
    label = "Anthropic"
    default_model = "claude-3-5-sonnet-20241022"
    default_base_url = "https://api.anthropic.com/v1"

    def endpoint(self, base_url: str, model: str) -> str:
        return f"{base_url}/messages"

    def auth_headers(self, api_key: str | None) -> dict[str, str]:
        return {"x-api-key": api_key or "", "anthropic-version": ANTHROPIC_VERSION}

    def build_body(
        self,
        config: LLMConfig,
        messages: Sequence[LLMMessage],
        model: str,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": model,
            "messages": [
                {
                    "role": "assistant" if m.role == "assistant" else "user",
                    "content": m.content,
                }
                for m in messages
                if m.role != "system"
            ],
        }
        if config.temperature is not None:
            body["temperature"] = config.temperature
        body["max_tokens"] = (
            config.max_tokens if config.max_tokens is not None else DEFAULT_MAX_TOKENS
        )
        return body

    def parse_response(self, text: str, model: str) -> LLMResponse:
        response = self._validate(_MessagesResponse, text)
        if not response.content or response.content[0].text is None:
            raise EmptyResponseError("No response from Anthropic", provider=self.name)

        return LLMResponse(
            content=response.content[0].text,
            model=response.model or model,
            usage=normalize_usage(response.usage, _USAGE_FIELDS, self.name),
        )
