from __future__ import annotations  # Score extraction and completed-interview persistence

import re
from typing import Any, Callable, Optional

from observability import log_event

from .models import Category, CompletedInterview, InterviewMode, Profile
from .policy import total_stages


DEFAULT_SCORE = 50

# First "N/10" or "N out of 10" in the feedback; model phrasing varies, so misses fall back.
_SCORE_PATTERN = re.compile(r"(\d+)\s*(?:/|out of)\s*10", re.IGNORECASE)

_CATEGORIES = {
    InterviewMode.TECHNICAL: Category.TECHNICAL,
    InterviewMode.NON_TECHNICAL: Category.BEHAVIORAL,
}

InterviewWriter = Callable[..., CompletedInterview]


def extract_score(feedback: Optional[str]) -> int:
    """Best-effort 0..100 score from free-text feedback; ``DEFAULT_SCORE`` when absent."""
    match = _SCORE_PATTERN.search(feedback or "")
    if match is None:
        return DEFAULT_SCORE
    return min(int(match.group(1)) * 10, 100)


def category_for(mode: InterviewMode | str) -> Category:
    return _CATEGORIES.get(InterviewMode(mode), Category.TECHNICAL)


def title_for(profile: Profile) -> str:
    return f"{profile.target_role} at {profile.target_company}"


def record_completion(
    profile: Profile,
    feedback: Optional[str],
    *,
    writer: Optional[InterviewWriter] = None,
) -> CompletedInterview:
    """Score the final feedback and persist a completed interview.

    Every call writes a new record; callers trigger it once per interview.
    """

    if writer is None:
        from storage.interviews import insert_interview as writer

    score = extract_score(feedback)
    fields: dict[str, Any] = {
        "user_id": profile.user_id,
        "title": title_for(profile),
        "category": category_for(profile.interview_mode),
        "score": score,
        "question_count": total_stages(profile.interview_mode),
    }
    record = writer(**fields)
    log_event(
        "interview_complete",
        profile.user_id,
        mode=profile.interview_mode.value,
        score=score,
        outcome="scored" if _SCORE_PATTERN.search(feedback or "") else "default_score",
    )
    return record


__all__ = ["DEFAULT_SCORE", "category_for", "extract_score", "record_completion", "title_for"]
