"""
Google Generative Language (Gemini) provider.

The API key travels as the "key" query parameter rather than a header.
System messages are dropped; "assistant" becomes "model" and every other role
becomes "user". generation_config is only sent when the caller supplied a
temperature or a token cap.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from relay.llm_adapter.base import LLMProvider, normalize_usage
from relay.llm_adapter.errors import EmptyResponseError
from relay.llm_adapter.models import LLMConfig, LLMMessage, LLMResponse

_USAGE_FIELDS = {
    "prompt_tokens": "promptTokenCount",
    "completion_tokens": "candidatesTokenCount",
    "total_tokens": "totalTokenCount",
}


class _Part(BaseModel):
    text: str | None = None


class _Content(BaseModel):
    parts: list[_Part] = Field(default_factory=list)


class _Candidate(BaseModel):
    content: _Content = Field(default_factory=_Content)


class _GenerateContentResponse(BaseModel):
    candidates: list[_Candidate] = Field(default_factory=list)
    usage_metadata: dict[str, Any] | None = Field(default=None, alias="usageMetadata")
    model_version: str | None = Field(default=None, alias="modelVersion")


class GoogleProvider(LLMProvider):

    name = "google"
    label = "Google"
    default_model = "gemini-2.0-flash-exp"
    default_base_url = "https://generativelanguage.googleapis.com/v1beta"

    def endpoint(self, base_url: str, model: str) -> str:
        return f"{base_url}/models/{model}:generateContent"

    def auth_params(self, api_key: str | None) -> dict[str, str]:
        return {"key": api_key or ""}

    def build_body(
        self,
        config: LLMConfig,
        messages: Sequence[LLMMessage],
        model: str,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "contents": [
                {
                    "role": "model" if m.role == "assistant" else "user",
                    "parts": [{"text": m.content}],
                }
                for m in messages
                if m.role != "system"
            ],
        }

        generation_config: dict[str, Any] = {}
        if config.temperature is not None:
            generation_config["temperature"] = config.temperature
        if config.max_tokens is not None:
            generation_config["max_output_tokens"] = config.max_tokens
        if generation_config:
            body["generation_config"] = generation_config
        return body

    def parse_response(self, text: str, model: str) -> LLMResponse:
        response = self._validate(_GenerateContentResponse, text)
        if not response.candidates:
            raise EmptyResponseError("No response from Google", provider=self.name)

        parts = response.candidates[0].content.parts
        if not parts or parts[0].text is None:
            raise EmptyResponseError(
                "No content in Google response", provider=self.name
            )

        return LLMResponse(
            content=parts[0].text,
            model=response.model_version or model,
            usage=normalize_usage(response.usage_metadata, _USAGE_FIELDS, self.name),
        )
