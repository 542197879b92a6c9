from relay.llm_adapter.base import LLMProvider
from relay.llm_adapter.dispatcher import dispatch
from relay.llm_adapter.errors import (
    EmptyResponseError,
    InvalidCredentialError,
    LLMError,
    MalformedResponseError,
    MissingCredentialError,
    ProviderHTTPError,
    TransportFailureError,
    UnsupportedProviderError,
)
from relay.llm_adapter.factory import SUPPORTED_PROVIDERS, get_llm_provider
from relay.llm_adapter.models import LLMConfig, LLMMessage, LLMResponse, Usage
from relay.llm_adapter.service import LLMService

__all__ = [
    "LLMProvider",
    "LLMConfig",
    "LLMMessage",
    "LLMResponse",
    "Usage",
    "LLMService",
    "LLMError",
    "UnsupportedProviderError",
    "MissingCredentialError",
    "InvalidCredentialError",
    "TransportFailureError",
    "ProviderHTTPError",
    "MalformedResponseError",
    "EmptyResponseError",
    "SUPPORTED_PROVIDERS",
    "dispatch",
    "get_llm_provider",
]
