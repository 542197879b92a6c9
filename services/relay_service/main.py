"""
Relay Service -- HTTP host for the LLM dispatch layer.

Responsibilities:
1. POST /api/chat      -- dispatch one conversation to the selected provider
2. POST /api/greet     -- connectivity check used by desktop hosts
3. GET  /api/providers -- provider catalog (default models, key requirements)
4. GET  /health, GET /metrics

Request configs are completed from the environment (RelayConfig) before
dispatch. Adapter errors map onto HTTP statuses in one exception handler;
the body always carries the original message and error code.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from relay.logging.logger import setup_logging
from relay.observability.metrics import metrics_response
from relay.llm_adapter import dispatch
from relay.llm_adapter.catalog import list_providers
from relay.llm_adapter.errors import (
    InvalidCredentialError,
    LLMError,
    MissingCredentialError,
    TransportFailureError,
    UnsupportedProviderError,
)
from relay.llm_adapter.models import LLMConfig, LLMMessage, LLMResponse
from services.relay_service.config import RelayConfig

SERVICE_NAME = "relay_service"
http_client: httpx.AsyncClient | None = None
cfg: RelayConfig | None = None

_STATUS_BY_ERROR: dict[type[LLMError], int] = {
    UnsupportedProviderError: 400,
    MissingCredentialError: 400,
    InvalidCredentialError: 400,
    TransportFailureError: 504,
}


@asynccontextmanager
async def lifespan(application: FastAPI):
    global http_client, cfg
    cfg = RelayConfig.from_env()
    logger = setup_logging(SERVICE_NAME, cfg.log_level)

    http_client = httpx.AsyncClient(timeout=cfg.request_timeout_s)
    logger.info(
        "Relay Service ready (default provider=%s, timeout=%ss)",
        cfg.llm_provider,
        cfg.request_timeout_s,
    )
    yield

    logger.info("Shutting down")
    if http_client:
        await http_client.aclose()


app = FastAPI(
    title="LLM Relay - Relay Service",
    version="0.1.0",
    description="Provider-agnostic chat dispatch over OpenAI, Anthropic, Google and Ollama",
    lifespan=lifespan,
)


@app.exception_handler(LLMError)
async def llm_error_handler(request: Request, exc: LLMError) -> JSONResponse:
    status_code = _STATUS_BY_ERROR.get(type(exc), 502)
    return JSONResponse(status_code=status_code, content=exc.as_dict())


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "default_provider": cfg.llm_provider if cfg else None,
    }


@app.get("/metrics")
async def metrics():
    return metrics_response()


@app.get("/api/providers")
async def providers():
    return {"providers": list_providers()}


class GreetRequest(BaseModel):
    name: str


@app.post("/api/greet")
async def greet(req: GreetRequest):
    return {"message": f"Hello, {req.name}! You've been greeted from the relay service!"}


class ChatRequest(BaseModel):
    config: LLMConfig
    messages: list[LLMMessage]


@app.post("/api/chat", response_model=LLMResponse)
async def chat(req: ChatRequest) -> LLMResponse:
    if http_client is None or cfg is None:
        raise HTTPException(status_code=503, detail="Relay not initialized")

    config = cfg.apply_defaults(req.config)
    return await dispatch(config, req.messages, client=http_client)
