"""
Provider registry -- the single switch point between provider ids and adapters.

Supported providers:

  openai      OpenAI Chat Completions (or any compatible server)  -- needs api_key
  anthropic   Anthropic Messages API                              -- needs api_key
  google      Google Generative Language (Gemini)                 -- needs api_key
  ollama      Local Ollama server                                 -- no key

Matching is exact and case-sensitive. Adding a provider means adding one
entry here plus its adapter module; nothing else changes.
"""

from __future__ import annotations

from relay.llm_adapter.anthropic_provider import AnthropicProvider
from relay.llm_adapter.base import LLMProvider
from relay.llm_adapter.errors import UnsupportedProviderError
from relay.llm_adapter.google_provider import GoogleProvider
from relay.llm_adapter.ollama_provider import OllamaProvider
from relay.llm_adapter.openai_provider import OpenAIProvider

_PROVIDERS: dict[str, type[LLMProvider]] = {
    OpenAIProvider.name: OpenAIProvider,
    AnthropicProvider.name: AnthropicProvider,
    GoogleProvider.name: GoogleProvider,
    OllamaProvider.name: OllamaProvider,
}

SUPPORTED_PROVIDERS: tuple[str, ...] = tuple(_PROVIDERS)


def get_llm_provider(provider_name: str) -> LLMProvider:
    """Return a fresh adapter for provider_name or raise UnsupportedProviderError."""
    provider_cls = _PROVIDERS.get(provider_name)
    if provider_cls is None:
        raise UnsupportedProviderError(provider_name)
    return provider_cls()
