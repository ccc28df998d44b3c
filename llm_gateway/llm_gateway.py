from __future__ import annotations  # LLM request gateway module

import logging
from typing import Any, Dict, Optional, Protocol, Sequence

import httpx

from config.routes import LlmRoute


logger = logging.getLogger(__name__)  # Module logger setup

EMPTY_RESPONSE = "No response generated."


class AsyncHttpClient(Protocol):  # Minimal async HTTP client protocol
    async def post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str], timeout: float) -> "HttpResponse": ...


class HttpResponse(Protocol):  # Minimal HTTP response protocol
    @property
    def status_code(self) -> int: ...

    def json(self) -> Any: ...

    @property
    def text(self) -> str: ...


class LlmGatewayError(RuntimeError):  # Base gateway error
    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LlmRateLimitError(LlmGatewayError):  # Upstream throttled the request
    def __init__(self, message: str = "LLM rate limited", *, status_code: int = 429) -> None:
        super().__init__(message, status_code=status_code)


async def complete(
    messages: Sequence[Dict[str, str]],
    *,
    route: LlmRoute,
    max_tokens: int,
    client: Optional[AsyncHttpClient] = None,
) -> str:  # Send one chat-completion request and return the generated text
    input_messages = _normalize_messages(messages)
    payload: Dict[str, Any] = {
        "model": route.model,
        "messages": input_messages,
        "temperature": route.temperature,
        "max_tokens": max_tokens,
    }
    headers = {"Content-Type": "application/json"}
    if route.api_key:
        headers["Authorization"] = f"Bearer {route.api_key}"
    headers.update(route.extra_headers)
    preview = _preview(input_messages)
    if len(preview) > 120:
        preview = preview[:117] + "..."
    logger.info(
        "LLM request send route=%s model=%s max_tokens=%d preview=%s",
        route.name,
        route.model,
        max_tokens,
        preview,
    )
    try:
        response = await _post(route.url, payload, headers, route.timeout_s, client)
    except Exception as exc:  # noqa: BLE001
        logger.error("LLM transport failure: %s", exc)
        raise LlmGatewayError("LLM transport failed") from exc
    if response.status_code == 429:
        logger.warning("LLM rate limited route=%s", route.name)
        raise LlmRateLimitError(f"LLM returned status 429: {_clip(response.text)}")
    if response.status_code >= 400:
        logger.error("LLM error status: %s", response.status_code)
        raise LlmGatewayError(
            f"LLM returned status {response.status_code}: {_clip(response.text)}",
            status_code=response.status_code,
        )
    try:
        data = response.json()
    except Exception as exc:  # noqa: BLE001
        logger.error("Invalid JSON payload from LLM: %s", exc)
        raise LlmGatewayError("LLM payload was not JSON") from exc
    content = _extract_content(data)
    logger.info("LLM request done route=%s model=%s chars=%d", route.name, route.model, len(content))
    return content


async def _post(
    url: str,
    payload: Dict[str, Any],
    headers: Dict[str, str],
    timeout: float,
    client: Optional[AsyncHttpClient],
) -> HttpResponse:  # Dispatch HTTP request
    if client is not None:
        return await client.post(url, json=payload, headers=headers, timeout=timeout)
    async with httpx.AsyncClient(timeout=timeout) as http_client:
        return await http_client.post(url, json=payload, headers=headers)


def _normalize_messages(messages: Sequence[Dict[str, str]]) -> list[Dict[str, str]]:  # Ensure message payload shape
    normalized: list[Dict[str, str]] = []
    for item in messages:
        if not isinstance(item, dict):
            raise TypeError("Each chat message must be a dict with role/content")
        role = str(item.get("role", "")).strip()
        content = str(item.get("content", ""))
        if not role:
            raise ValueError("Chat message missing role")
        normalized.append({"role": role, "content": content})
    return normalized


def _preview(messages: Sequence[Dict[str, str]]) -> str:  # Build preview string for logging
    for message in reversed(messages):
        text = message.get("content", "").strip()
        if text:
            return text.splitlines()[0]
    return ""


def _clip(text: str, limit: int = 200) -> str:
    text = (text or "").strip()
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def _extract_content(data: Any) -> str:  # Extract message content from LLM response
    if isinstance(data, dict):
        choices = data.get("choices")
        if isinstance(choices, list):
            if not choices:
                return EMPTY_RESPONSE
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str) and content.strip():
                return content
            return EMPTY_RESPONSE
        if isinstance(data.get("content"), str):
            return data["content"] or EMPTY_RESPONSE
    raise LlmGatewayError("LLM response missing content")
