from __future__ import annotations  # Interview progression engine public API

from .completion import DEFAULT_SCORE, category_for, extract_score, record_completion, title_for
from .controller import Completion, InterviewController, random_session_tag, stage_index_for
from .errors import FatalGatewayError, InterviewError, NotReadyError, RateLimitedError
from .models import (
    Category,
    CompletedInterview,
    ConversationTurn,
    InstructionSpec,
    InterviewMode,
    Profile,
    ProfileStatus,
    Role,
    TurnResult,
)
from .policy import COMPLETION_SENTINEL, instruction_for, is_complete, script_for, total_stages
from .prompts import DEFAULT_OPENER, assemble, window_history
from .retry import call_with_retry, is_rate_limited

__all__ = [
    "COMPLETION_SENTINEL",
    "Category",
    "CompletedInterview",
    "Completion",
    "ConversationTurn",
    "DEFAULT_OPENER",
    "DEFAULT_SCORE",
    "FatalGatewayError",
    "InstructionSpec",
    "InterviewController",
    "InterviewError",
    "InterviewMode",
    "NotReadyError",
    "Profile",
    "ProfileStatus",
    "RateLimitedError",
    "Role",
    "TurnResult",
    "assemble",
    "call_with_retry",
    "category_for",
    "extract_score",
    "instruction_for",
    "is_complete",
    "is_rate_limited",
    "random_session_tag",
    "record_completion",
    "script_for",
    "stage_index_for",
    "title_for",
    "total_stages",
    "window_history",
]
