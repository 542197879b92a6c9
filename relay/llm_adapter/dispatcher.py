"""
Dispatch entry point: one generic request in, one normalized response out.

Each call picks exactly one adapter, performs exactly one HTTP exchange and
either returns an LLMResponse or raises one LLMError subclass. Failures are
logged here once and re-raised; nothing is retried.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

import httpx

from relay.llm_adapter.base import LLMProvider
from relay.llm_adapter.errors import LLMError
from relay.llm_adapter.factory import get_llm_provider
from relay.llm_adapter.models import LLMConfig, LLMMessage, LLMResponse
from relay.observability.metrics import llm_request_latency, llm_requests, llm_tokens

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 120.0


async def dispatch(
    config: LLMConfig,
    messages: Sequence[LLMMessage],
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> LLMResponse:
    """
    Send a conversation to the provider named by config.provider.

    Args:
        config:   Provider selection and generation options.
        messages: The conversation, in turn order.
        client:   Shared transport. When omitted a short-lived client is
                  opened for this call only, using ``timeout``.
    """
    try:
        provider = get_llm_provider(config.provider)
    except LLMError as exc:
        logger.warning("LLM dispatch rejected: %s", exc)
        raise

    if client is not None:
        return await _generate(provider, config, messages, client)

    async with httpx.AsyncClient(timeout=timeout) as own_client:
        return await _generate(provider, config, messages, own_client)


async def _generate(
    provider: LLMProvider,
    config: LLMConfig,
    messages: Sequence[LLMMessage],
    client: httpx.AsyncClient,
) -> LLMResponse:
    start = time.monotonic()
    try:
        response = await provider.generate(config, messages, client)
    except LLMError as exc:
        llm_requests.labels(provider=provider.name, outcome=exc.code.lower()).inc()
        logger.warning(
            "LLM request failed: %s",
            exc,
            extra={"_extra": {"provider": provider.name, "code": exc.code}},
        )
        raise
    finally:
        llm_request_latency.labels(provider=provider.name).observe(
            time.monotonic() - start
        )

    llm_requests.labels(provider=provider.name, outcome="success").inc()
    if response.usage is not None:
        llm_tokens.labels(provider=provider.name, direction="prompt").inc(
            response.usage.prompt_tokens
        )
        llm_tokens.labels(provider=provider.name, direction="completion").inc(
            response.usage.completion_tokens
        )

    logger.info(
        "LLM response received (provider=%s, model=%s, messages=%d)",
        provider.name,
        response.model,
        len(messages),
        extra={
            "_extra": {
                "usage": response.usage.model_dump() if response.usage else None,
            }
        },
    )
    return response
