"""Error taxonomy for the LLM adapter layer. Nothing here is retried."""

from __future__ import annotations


class LLMError(Exception):
    """Base error carrying a machine-readable code and the provider involved."""

    code = "LLM_ERROR"

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider

    def as_dict(self) -> dict[str, str | None]:
        return {"error": str(self), "code": self.code, "provider": self.provider}


class UnsupportedProviderError(LLMError):
    code = "UNSUPPORTED_PROVIDER"

    def __init__(self, provider: str) -> None:
        super().__init__(f"Unsupported provider: {provider}", provider=provider)


class MissingCredentialError(LLMError):
    code = "MISSING_CREDENTIAL"


class InvalidCredentialError(LLMError):
    """The API key is present but cannot be sent (e.g. non-ASCII characters)."""

    code = "INVALID_CREDENTIAL"


class TransportFailureError(LLMError):
    """The HTTP exchange itself could not complete (DNS, connect, read...)."""

    code = "TRANSPORT_FAILURE"


class ProviderHTTPError(LLMError):
    code = "PROVIDER_HTTP_ERROR"

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int,
        body: str,
    ) -> None:
        super().__init__(message, provider=provider)
        self.status_code = status_code
        self.body = body


class MalformedResponseError(LLMError):
    code = "MALFORMED_RESPONSE"


class EmptyResponseError(LLMError):
    code = "EMPTY_RESPONSE"
