from __future__ import annotations  # Configuration schema for the completion upstream

from typing import Dict

from pydantic import BaseModel, Field

from .settings import Settings, settings as default_settings


class LlmRoute(BaseModel):  # LLM endpoint configuration
    name: str
    base_url: str
    endpoint: str
    model: str
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    timeout_s: float = Field(default=30.0, ge=0.1)
    api_key: str | None = None
    extra_headers: Dict[str, str] = Field(default_factory=dict)

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.endpoint}"


def route_from_settings(cfg: Settings | None = None) -> LlmRoute:  # Build the interviewer route from env settings
    cfg = cfg or default_settings
    return LlmRoute(
        name="interviewer",
        base_url=cfg.LLM_BASE_URL,
        endpoint=cfg.LLM_ENDPOINT,
        model=cfg.LLM_MODEL,
        temperature=cfg.LLM_TEMPERATURE,
        timeout_s=cfg.LLM_TIMEOUT_S,
        api_key=cfg.LLM_API_KEY,
    )
