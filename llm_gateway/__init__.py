from __future__ import annotations  # Re-export llm_gateway public API

from .llm_gateway import (
    EMPTY_RESPONSE,
    AsyncHttpClient,
    HttpResponse,
    LlmGatewayError,
    LlmRateLimitError,
    complete,
)

__all__ = [
    "EMPTY_RESPONSE",
    "AsyncHttpClient",
    "HttpResponse",
    "LlmGatewayError",
    "LlmRateLimitError",
    "complete",
]
