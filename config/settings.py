"""Application settings and configuration management."""
from __future__ import annotations

from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/interview.db")

    LLM_BASE_URL: str = "https://api.groq.com/openai/v1"
    LLM_ENDPOINT: str = "/chat/completions"
    LLM_MODEL: str = "llama-3.3-70b-versatile"
    LLM_API_KEY: str | None = Field(default=None, validation_alias=AliasChoices("LLM_API_KEY", "GROQ_API_KEY"))
    LLM_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    LLM_TIMEOUT_S: float = Field(default=30.0, ge=0.1)

    MAX_RETRIES: int = Field(default=3, ge=0)
    BASE_DELAY_MS: int = Field(default=2000, ge=0)
    HISTORY_WINDOW: int = Field(default=8, ge=0)
    SKILLS_CAP: int = Field(default=12, ge=0)
    QUESTION_MAX_TOKENS: int = Field(default=300, ge=1)
    SUMMARY_MAX_TOKENS: int = Field(default=1000, ge=1)

    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:5174"]
    )

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")

    @property
    def retry_budget_ms(self) -> int:
        """Worst-case backoff for one turn, excluding upstream latency."""
        return self.BASE_DELAY_MS * (2 ** (self.MAX_RETRIES + 1) - 1)


settings = Settings()
