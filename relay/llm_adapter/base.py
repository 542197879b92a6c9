"""Abstract base class that all LLM providers must implement."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from relay.llm_adapter.errors import (
    InvalidCredentialError,
    MalformedResponseError,
    MissingCredentialError,
    ProviderHTTPError,
    TransportFailureError,
)
from relay.llm_adapter.models import LLMConfig, LLMMessage, LLMResponse, Usage

logger = logging.getLogger(__name__)

WireModel = TypeVar("WireModel", bound=BaseModel)


class LLMProvider(ABC):
    """
    Contract for LLM providers.

    The request lifecycle is fixed here: resolve parameters, build the wire
    body, POST it once, then check the status before any JSON parsing so that
    error bodies reach the caller verbatim. Subclasses only describe the
    provider's wire format.

    Every implementation MUST:
    - Never retry; the first failure is raised to the caller
    - Keep the API key out of URLs it returns from endpoint()
    """

    name: str
    label: str
    default_model: str
    default_base_url: str
    requires_api_key: bool = True

    async def generate(
        self,
        config: LLMConfig,
        messages: Sequence[LLMMessage],
        client: httpx.AsyncClient,
    ) -> LLMResponse:
        api_key = self.resolve_api_key(config)
        model = self.resolve_model(config)
        base_url = self.resolve_base_url(config)

        url = self.endpoint(base_url, model)
        body = self.build_body(config, messages, model)
        headers = {"Content-Type": "application/json", **self.auth_headers(api_key)}

        logger.debug("POST %s (provider=%s, model=%s)", url, self.name, model)
        try:
            response = await client.post(
                url,
                headers=headers,
                params=self.auth_params(api_key),
                json=body,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportFailureError(
                f"{self.label} request failed: {exc}", provider=self.name
            ) from exc

        text = response.text
        if not response.is_success:
            raise ProviderHTTPError(
                f"{self.label} API error ({response.status_code}): {text}",
                provider=self.name,
                status_code=response.status_code,
                body=text,
            )
        return self.parse_response(text, model)

    def resolve_api_key(self, config: LLMConfig) -> str | None:
        if self.requires_api_key and not config.api_key:
            raise MissingCredentialError(
                f"{self.label} API key is required", provider=self.name
            )
        if self.requires_api_key and not config.api_key.isascii():
            # httpx can only encode header values as ASCII
            raise InvalidCredentialError(
                f"{self.label} API key must contain only ASCII characters",
                provider=self.name,
            )
        return config.api_key

    def resolve_model(self, config: LLMConfig) -> str:
        return config.model or self.default_model

    def resolve_base_url(self, config: LLMConfig) -> str:
        return (config.base_url or self.default_base_url).rstrip("/")

    def auth_headers(self, api_key: str | None) -> dict[str, str]:
        return {}

    def auth_params(self, api_key: str | None) -> dict[str, str]:
        return {}

    @abstractmethod
    def endpoint(self, base_url: str, model: str) -> str:
        """Return the URL the request is POSTed to."""

    @abstractmethod
    def build_body(
        self,
        config: LLMConfig,
        messages: Sequence[LLMMessage],
        model: str,
    ) -> dict[str, Any]:
        """Translate the generic conversation into the provider's JSON body."""

    @abstractmethod
    def parse_response(self, text: str, model: str) -> LLMResponse:
        """Parse a 2xx body and map it back to the generic response."""

    def _validate(self, wire_model: type[WireModel], text: str) -> WireModel:
        try:
            return wire_model.model_validate_json(text)
        except ValidationError as exc:
            raise MalformedResponseError(
                f"{self.label} response could not be parsed: {exc}",
                provider=self.name,
            ) from exc


def normalize_usage(
    raw: Mapping[str, Any] | None,
    field_map: Mapping[str, str],
    provider: str | None = None,
) -> Usage | None:
    """
    Map a provider usage record onto Usage through an explicit field table.

    field_map goes from the common field name to the provider's field name.
    A total is only taken from the provider when the table names one and the
    record carries it; otherwise it is the sum of the other two.
    """
    if raw is None:
        return None

    prompt = _token_count(raw, field_map["prompt_tokens"], provider)
    completion = _token_count(raw, field_map["completion_tokens"], provider)
    total_field = field_map.get("total_tokens")
    total = None
    if total_field and raw.get(total_field) is not None:
        total = _token_count(raw, total_field, provider)
    return Usage.from_counts(prompt, completion, total)


def _token_count(raw: Mapping[str, Any], field: str, provider: str | None) -> int:
    value = raw.get(field, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MalformedResponseError(
            f"Usage field '{field}' must be a non-negative integer, got {value!r}",
            provider=provider,
        )
    return value
