from __future__ import annotations

import pytest

from relay.llm_adapter.models import LLMConfig
from services.relay_service.config import RelayConfig

_ENV_VARS = (
    "LOG_LEVEL",
    "LLM_PROVIDER",
    "LLM_API_KEY",
    "LLM_MODEL",
    "LLM_BASE_URL",
    "LLM_REQUEST_TIMEOUT",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_API_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = RelayConfig.from_env()
    assert cfg.log_level == "INFO"
    assert cfg.llm_provider == "openai"
    assert cfg.request_timeout_s == 120.0
    assert cfg.provider_api_keys == {}


def test_provider_key_fallbacks(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "gem")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant")
    cfg = RelayConfig.from_env()
    assert cfg.provider_api_keys == {"anthropic": "ant", "google": "gem"}
    assert "gem" not in repr(cfg)


def test_google_key_preferred_over_gemini(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "goo")
    monkeypatch.setenv("GEMINI_API_KEY", "gem")
    assert RelayConfig.from_env().provider_api_keys["google"] == "goo"


def test_apply_defaults_for_default_provider(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.setenv("LLM_API_KEY", "generic")
    monkeypatch.setenv("OPENAI_API_KEY", "specific")
    monkeypatch.setenv("LLM_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("LLM_BASE_URL", "http://proxy/v1")

    config = RelayConfig.from_env().apply_defaults(LLMConfig(provider="openai"))

    assert config.api_key == "generic"
    assert config.model == "gpt-4o-mini"
    assert config.base_url == "http://proxy/v1"


def test_apply_defaults_other_provider_only_gets_its_key(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.setenv("LLM_API_KEY", "generic")
    monkeypatch.setenv("LLM_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant")

    config = RelayConfig.from_env().apply_defaults(LLMConfig(provider="anthropic"))

    assert config.api_key == "ant"
    assert config.model is None


def test_caller_values_win(monkeypatch):
    monkeypatch.setenv("LLM_API_KEY", "generic")
    monkeypatch.setenv("LLM_MODEL", "gpt-4o-mini")
    original = LLMConfig(provider="openai", api_key="mine", model="gpt-4")

    assert RelayConfig.from_env().apply_defaults(original) is original
