"""FastAPI routes for interview turns, completion and profiles."""
from __future__ import annotations

import logging
import sqlite3
from typing import List

from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.concurrency import run_in_threadpool

from api.schemas import (
    ChatReq,
    ChatResp,
    CompleteReq,
    CompleteResp,
    InterviewHistoryItem,
    InterviewSummary,
    ProfileOut,
    ProfileReq,
    ProfileStatusResp,
)
from config.registry import COMPLETION_KEY, get_model
from config.settings import settings
from interview import (
    FatalGatewayError,
    InterviewController,
    NotReadyError,
    Profile,
    RateLimitedError,
    record_completion,
)
from observability import log_event
from storage.interviews import list_interviews
from storage.profiles import get_profile, upsert_profile


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

RATE_LIMITED_MESSAGE = "AI service is rate limited. Please wait a few seconds and try again."
SERVICE_ERROR_MESSAGE = "AI service error. Please try again."


def current_user(x_user_id: str | None = Header(default=None)) -> str:
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()


def _controller() -> InterviewController:
    return InterviewController(get_model(COMPLETION_KEY), config=settings)


def _profile_out(profile: Profile) -> ProfileOut:
    return ProfileOut(
        targetRole=profile.target_role,
        targetCompany=profile.target_company,
        experience=profile.experience_level,
        interviewType=profile.interview_mode,
        skills=profile.skills,
        status=profile.status,
    )


@router.post("/interview/chat", response_model=ChatResp)
async def chat(req: ChatReq, user_id: str = Depends(current_user)) -> ChatResp:
    profile = await run_in_threadpool(get_profile, user_id)
    try:
        result = await _controller().handle_turn(profile, req.conversationHistory, req.message)
    except NotReadyError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RateLimitedError as exc:
        log_event("chat_turn", user_id, outcome="rate_limited", status=429)
        raise HTTPException(status_code=429, detail=RATE_LIMITED_MESSAGE) from exc
    except FatalGatewayError as exc:
        logger.exception("Interview chat failed")
        log_event("chat_turn", user_id, outcome="gateway_error", status=500)
        raise HTTPException(status_code=500, detail=SERVICE_ERROR_MESSAGE) from exc
    return ChatResp(
        message=result.response_text,
        stageIndex=result.stage_index,
        interviewComplete=result.interview_complete,
    )


@router.post("/interview/complete", response_model=CompleteResp)
def complete(req: CompleteReq, user_id: str = Depends(current_user)) -> CompleteResp:
    profile = get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=400, detail="No resume found.")
    try:
        record = record_completion(profile, req.feedbackMessage)
    except sqlite3.Error as exc:
        logger.exception("Unable to save interview results")
        raise HTTPException(status_code=500, detail="Failed to save interview results.") from exc
    return CompleteResp(
        interview=InterviewSummary(
            id=record.id,
            title=record.title,
            score=record.score,
            category=record.category.value,
        )
    )


@router.get("/interview/history", response_model=List[InterviewHistoryItem])
def history(user_id: str = Depends(current_user)) -> List[InterviewHistoryItem]:
    return [
        InterviewHistoryItem(
            id=item.id,
            title=item.title,
            score=item.score,
            category=item.category.value,
            questionsCount=item.question_count,
            createdAt=item.created_at,
        )
        for item in list_interviews(user_id)
    ]


@router.put("/profile", response_model=ProfileOut)
def save_profile(req: ProfileReq, user_id: str = Depends(current_user)) -> ProfileOut:
    profile = upsert_profile(
        user_id=user_id,
        target_role=req.targetRole,
        target_company=req.targetCompany,
        experience_level=req.experience,
        interview_mode=req.interviewType,
        status=req.status,
        skills=req.skills,
    )
    return _profile_out(profile)


@router.get("/profile", response_model=ProfileStatusResp)
def profile_status(user_id: str = Depends(current_user)) -> ProfileStatusResp:
    profile = get_profile(user_id)
    if profile is None:
        return ProfileStatusResp(hasProfile=False)
    return ProfileStatusResp(hasProfile=True, profile=_profile_out(profile))
