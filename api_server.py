from __future__ import annotations  # FastAPI server exposing the interview controller

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Dict, List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from api.routes import router
from config import COMPLETION_KEY, bind_model, is_bound, route_from_settings, settings
from interview import Completion
from llm_gateway import complete
from storage.migrate import migrate


logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):  # Liveness payload with client timeout hint
    status: str
    timestamp: str
    retryBudgetMs: int


def gateway_completion() -> Completion:  # Bind the configured upstream route into a completion callable
    route = route_from_settings(settings)

    async def _complete(messages: List[Dict[str, str]], *, max_tokens: int) -> str:
        return await complete(messages, route=route, max_tokens=max_tokens)

    return _complete


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    migrate(settings.DB_PATH)
    logger.info("Storage ready at %s", settings.DB_PATH)
    yield


def create_app() -> FastAPI:
    if not is_bound(COMPLETION_KEY):
        bind_model(COMPLETION_KEY, gateway_completion())
    application = FastAPI(title="Mock Interview API", lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_origin_regex=r"https://.*\.vercel\.app",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(router)

    @application.get("/api/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat(),
            retryBudgetMs=settings.retry_budget_ms,
        )

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api_server:app", host="0.0.0.0", port=5000)
