"""Static provider metadata for hosts that render provider pickers."""

from __future__ import annotations

from typing import Any

from relay.llm_adapter.errors import UnsupportedProviderError
from relay.llm_adapter.factory import SUPPORTED_PROVIDERS, get_llm_provider

_FALLBACK_MODEL = "gpt-4o"

_DISPLAY_NAMES: dict[str, str] = {
    "openai": "OpenAI",
    "anthropic": "Anthropic (Claude)",
    "google": "Google (Gemini)",
    "ollama": "Ollama (Local)",
}

_AVAILABLE_MODELS: dict[str, tuple[str, ...]] = {
    "openai": (
        "gpt-4o",
        "gpt-4o-mini",
        "gpt-4-turbo",
        "gpt-4",
        "gpt-3.5-turbo",
    ),
    "anthropic": (
        "claude-3-5-sonnet-20241022",
        "claude-3-5-haiku-20241022",
        "claude-3-opus-20240229",
        "claude-3-sonnet-20240229",
        "claude-3-haiku-20240307",
    ),
    "google": (
        "gemini-2.0-flash-exp",
        "gemini-1.5-pro",
        "gemini-1.5-flash",
        "gemini-1.0-pro",
    ),
    "ollama": (
        "llama3.2",
        "llama3.1",
        "llama3",
        "mistral",
        "mixtral",
        "codellama",
        "phi3",
        "qwen2.5",
    ),
}


def get_default_model(provider: str) -> str:
    try:
        return get_llm_provider(provider).default_model
    except UnsupportedProviderError:
        return _FALLBACK_MODEL


def get_available_models(provider: str) -> list[str]:
    return list(_AVAILABLE_MODELS.get(provider, ()))


def requires_api_key(provider: str) -> bool:
    try:
        return get_llm_provider(provider).requires_api_key
    except UnsupportedProviderError:
        return True


def requires_base_url(provider: str) -> bool:
    """Only the local Ollama server is expected to need a user-supplied URL."""
    return provider == "ollama"


def get_provider_display_name(provider: str) -> str:
    return _DISPLAY_NAMES.get(provider, provider)


def list_providers() -> list[dict[str, Any]]:
    """Describe every supported provider, in registry order."""
    return [
        {
            "id": name,
            "display_name": get_provider_display_name(name),
            "default_model": get_default_model(name),
            "default_base_url": get_llm_provider(name).default_base_url,
            "models": get_available_models(name),
            "requires_api_key": requires_api_key(name),
            "requires_base_url": requires_base_url(name),
        }
        for name in SUPPORTED_PROVIDERS
    ]
