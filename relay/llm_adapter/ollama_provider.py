"""
Ollama provider for a local model server. No API key is needed.

Ollama's eval counters are not mapped to Usage, so responses carry no usage.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from relay.llm_adapter.base import LLMProvider
from relay.llm_adapter.errors import EmptyResponseError
from relay.llm_adapter.models import LLMConfig, LLMMessage, LLMResponse


class _ChatMessage(BaseModel):
    role: str
    content: str


class _ChatResponse(BaseModel):
    message: _ChatMessage | None = None
    model: str | None = None


class OllamaProvider(LLMProvider):

    name = "ollama"
    label = "Ollama"
    default_model = "llama3.2"
    default_base_url = "http://localhost:11434"
    requires_api_key = False

    def endpoint(self, base_url: str, model: str) -> str:
        return f"{base_url}/api/chat"

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

        options: dict[str, Any] = {}
        if config.temperature is not None:
            options["temperature"] = config.temperature
        if config.max_tokens is not None:
            options["num_predict"] = config.max_tokens
        if options:
            body["options"] = options

        body["stream"] = False
        return body

    def parse_response(self, text: str, model: str) -> LLMResponse:
        response = self._validate(_ChatResponse, text)
        if response.message is None:
            raise EmptyResponseError("No response from Ollama", provider=self.name)

        return LLMResponse(
            content=response.message.content,
            model=response.model or model,
        )
