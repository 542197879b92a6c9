"""Provider-agnostic data models for the LLM adapter layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LLMConfig(BaseModel):
    """
    Request-level settings for a single call.

    api_key is kept out of repr() so a config can be logged or shown in a
    traceback without leaking the secret.
    """

    model_config = ConfigDict(frozen=True)

    provider: str = Field(min_length=1)
    api_key: str | None = Field(default=None, repr=False)
    model: str | None = None
    base_url: str | None = None
    temperature: float | None = None
    max_tokens: int | None = Field(default=None, ge=0)


class LLMMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    content: str = ""


class Usage(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)

    @classmethod
    def from_counts(
        cls,
        prompt_tokens: int,
        completion_tokens: int,
        total_tokens: int | None = None,
    ) -> Usage:
        """Build a Usage, deriving the total when the provider did not report one."""
        if total_tokens is None:
            total_tokens = prompt_tokens + completion_tokens
        return cls(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=total_tokens,
        )


class LLMResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    model: str | None = None
    usage: Usage | None = None
