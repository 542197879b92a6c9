"""Config-holding convenience wrapper around dispatch()."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from relay.llm_adapter.dispatcher import dispatch
from relay.llm_adapter.errors import LLMError
from relay.llm_adapter.models import LLMConfig, LLMMessage, LLMResponse

logger = logging.getLogger(__name__)


class LLMService:
    """
    Keeps one LLMConfig between calls for hosts that chat with a single
    provider. The config itself stays immutable; update_config swaps in a copy.
    """

    def __init__(
        self,
        config: LLMConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = client

    async def send_message(self, messages: Sequence[LLMMessage]) -> LLMResponse:
        try:
            return await dispatch(self._config, messages, client=self._client)
        except LLMError as exc:
            logger.error(
                "Failed to get response from %s: %s", self._config.provider, exc
            )
            raise

    def update_config(self, **changes: Any) -> LLMConfig:
        """Replace the held config with a validated copy carrying ``changes``."""
        unknown = sorted(set(changes) - set(LLMConfig.model_fields))
        if unknown:
            raise TypeError(f"Unknown LLMConfig field(s): {', '.join(unknown)}")

        merged = self._config.model_dump()
        merged.update(changes)
        self._config = LLMConfig.model_validate(merged)
        return self._config

    def get_config(self) -> LLMConfig:
        return self._config
