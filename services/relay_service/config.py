from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from relay.llm_adapter.models import LLMConfig

_PROVIDER_KEY_ENV: dict[str, tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
    "google": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
}


@dataclass(frozen=True)
class RelayConfig:
    log_level: str
    llm_provider: str
    llm_api_key: str
    llm_model: str
    llm_base_url: str
    request_timeout_s: float
    provider_api_keys: Mapping[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    def from_env(cls) -> RelayConfig:
        provider_api_keys: dict[str, str] = {}
        for provider, env_vars in _PROVIDER_KEY_ENV.items():
            for env_var in env_vars:
                value = os.environ.get(env_var, "")
                if value:
                    provider_api_keys[provider] = value
                    break

        return cls(
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            llm_provider=os.environ.get("LLM_PROVIDER", "openai"),
            llm_api_key=os.environ.get("LLM_API_KEY", ""),
            llm_model=os.environ.get("LLM_MODEL", ""),
            llm_base_url=os.environ.get("LLM_BASE_URL", ""),
            request_timeout_s=float(os.environ.get("LLM_REQUEST_TIMEOUT", "120") or 120),
            provider_api_keys=provider_api_keys,
        )

    def apply_defaults(self, config: LLMConfig) -> LLMConfig:
        """
        Fill fields the caller left unset from the environment.

        LLM_API_KEY, LLM_MODEL and LLM_BASE_URL only apply to requests for
        LLM_PROVIDER, where LLM_API_KEY takes precedence over the
        provider-specific key variable. Values the caller supplied always win.
        """
        is_default_provider = config.provider == self.llm_provider
        updates: dict[str, str] = {}

        if not config.api_key:
            api_key = self.llm_api_key if is_default_provider else ""
            api_key = api_key or self.provider_api_keys.get(config.provider, "")
            if api_key:
                updates["api_key"] = api_key

        if is_default_provider:
            if not config.model and self.llm_model:
                updates["model"] = self.llm_model
            if not config.base_url and self.llm_base_url:
                updates["base_url"] = self.llm_base_url

        if not updates:
            return config
        return config.model_copy(update=updates)
