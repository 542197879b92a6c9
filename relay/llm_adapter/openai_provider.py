"""
OpenAI-compatible LLM provider.

Works with any API that speaks the OpenAI Chat Completions protocol:
  - OpenAI      (base_url=https://api.openai.com/v1)
  - Groq        (base_url=https://api.groq.com/openai/v1)
  - OpenRouter  (base_url=https://openrouter.ai/api/v1)

Messages are forwarded verbatim, system role included. Streaming is always
disabled.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from relay.llm_adapter.base import LLMProvider, normalize_usage
from relay.llm_adapter.errors import EmptyResponseError
from relay.llm_adapter.models import LLMConfig, LLMMessage, LLMResponse

_USAGE_FIELDS = {
    "prompt_tokens": "prompt_tokens",
    "completion_tokens": "completion_tokens",
    "total_tokens": "total_tokens",
}


class _ChatMessage(BaseModel):
    role: str
    content: str


class _Choice(BaseModel):
    message: _ChatMessage


class _ChatCompletion(BaseModel):
    choices: list[_Choice]
    usage: dict[str, Any] | None = None
    model: str | None = None


class OpenAIProvider(LLMProvider):

    name = "openai"
    label = "OpenAI"
    default_model = "gpt-4o"
    default_base_url = "https://api.openai.com/v1"

    def endpoint(self, base_url: str, model: str) -> str:
        return f"{base_url}/chat/completions"

    def auth_headers(self, api_key: str | None) -> dict[str, str]:
        return {"Authorization": f"Bearer {api_key}"}

    def build_body(
        self,
        config: LLMConfig,
        messages: Sequence[LLMMessage],
        model: str,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if config.temperature is not None:
            body["temperature"] = config.temperature
        if config.max_tokens is not None:
            body["max_tokens"] = config.max_tokens
        body["stream"] = False
        return body

    def parse_response(self, text: str, model: str) -> LLMResponse:
        completion = self._validate(_ChatCompletion, text)
        if not completion.choices:
            raise EmptyResponseError("No response from OpenAI", provider=self.name)

        return LLMResponse(
            content=completion.choices[0].message.content,
            model=completion.model or model,
            usage=normalize_usage(completion.usage, _USAGE_FIELDS, self.name),
        )
