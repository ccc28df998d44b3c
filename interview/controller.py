from __future__ import annotations  # Stateless interview progression controller

import asyncio
import logging
import random
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Sequence

from config.settings import Settings, settings as default_settings
from observability import log_event, span

from .errors import NotReadyError
from .models import ConversationTurn, Profile, Role, TurnResult
from .policy import instruction_for, is_complete
from .prompts import assemble
from .retry import Sleep, call_with_retry


logger = logging.getLogger(__name__)


class Completion(Protocol):  # Upstream text generation callable
    def __call__(self, messages: List[Dict[str, str]], *, max_tokens: int) -> Awaitable[str]: ...


def random_session_tag() -> str:
    return str(random.randint(0, 9999))


def stage_index_for(history: Sequence[ConversationTurn]) -> int:
    """Index of the question about to be asked: interviewer turns so far plus one."""
    return sum(1 for turn in history if turn.role == Role.INTERVIEWER) + 1


class InterviewController:
    """Drive one chat turn from the caller-supplied transcript.

    Nothing is stored between calls. The stage is recomputed from ``history`` on
    every turn, so the caller must echo back every interviewer message verbatim.
    A failed turn leaves ``history`` untouched and can be retried as-is.
    """

    def __init__(
        self,
        complete: Completion,
        *,
        config: Optional[Settings] = None,
        session_tag: Callable[[], str] = random_session_tag,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self._complete = complete
        self._config = config or default_settings
        self._session_tag = session_tag
        self._sleep = sleep or asyncio.sleep

    async def handle_turn(
        self,
        profile: Optional[Profile],
        history: Sequence[ConversationTurn],
        message: Optional[str],
    ) -> TurnResult:
        if profile is None or not profile.is_ready:
            raise NotReadyError()
        cfg = self._config
        mode = profile.interview_mode
        stage_index = stage_index_for(history)
        instruction = instruction_for(stage_index, mode, profile.skills_summary(cfg.SKILLS_CAP))
        messages = assemble(
            profile,
            instruction,
            history,
            message,
            session_tag=self._session_tag(),
            window=cfg.HISTORY_WINDOW,
            skills_cap=cfg.SKILLS_CAP,
        )
        max_tokens = cfg.SUMMARY_MAX_TOKENS if instruction.is_terminal else cfg.QUESTION_MAX_TOKENS
        events: List[Dict[str, Any]] = []
        logger.debug("Turn user=%s stage=%d phase=%s", profile.user_id, stage_index, instruction.phase)
        with span(events, "gateway"):
            response_text = await call_with_retry(
                lambda: self._complete(messages, max_tokens=max_tokens),
                max_retries=cfg.MAX_RETRIES,
                base_delay_ms=cfg.BASE_DELAY_MS,
                sleep=self._sleep,
            )
        complete = is_complete(stage_index, mode)
        log_event(
            "chat_turn",
            profile.user_id,
            mode=mode.value,
            stage=stage_index,
            phase=instruction.phase,
            complete=complete,
            ms=events[-1]["ms"],
        )
        return TurnResult(
            response_text=response_text,
            stage_index=stage_index,
            interview_complete=complete,
            phase=instruction.phase,
        )


__all__ = ["Completion", "InterviewController", "random_session_tag", "stage_index_for"]
