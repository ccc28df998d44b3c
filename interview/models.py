from __future__ import annotations  # Interview domain models

from enum import Enum
from typing import Any, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InterviewMode(str, Enum):  # Which progression script applies
    TECHNICAL = "technical"
    NON_TECHNICAL = "non-technical"


class ProfileStatus(str, Enum):  # Resume analysis lifecycle
    UPLOADED = "uploaded"
    ANALYSING = "analysing"
    ANALYSED = "analysed"


class Role(str, Enum):  # Speaker of a transcript entry
    INTERVIEWER = "interviewer"
    CANDIDATE = "candidate"


class Category(str, Enum):  # Stored interview category
    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"
    SYSTEM_DESIGN = "system-design"
    COMMUNICATION = "communication"


_INTERVIEWER_ALIASES = {"interviewer", "ai", "assistant"}
_CANDIDATE_ALIASES = {"candidate", "user", "human"}


class Profile(BaseModel):  # Resume-derived inputs read by the controller
    user_id: str
    target_role: str = ""
    target_company: str = ""
    experience_level: str = ""
    interview_mode: InterviewMode = InterviewMode.TECHNICAL
    status: ProfileStatus = ProfileStatus.UPLOADED
    skills: List[str] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def _flatten_skills(cls, value: Any) -> List[str]:  # Accept flat or categorised skill lists
        return _coerce_skills(value)

    @property
    def is_ready(self) -> bool:
        return self.status == ProfileStatus.ANALYSED

    def skills_summary(self, cap: int = 12) -> str:
        return ", ".join(self.skills[: max(cap, 0)])


class ConversationTurn(BaseModel):  # One chronological transcript entry
    role: Role
    content: str = ""

    @field_validator("role", mode="before")
    @classmethod
    def _resolve_role(cls, value: Any) -> Any:
        if isinstance(value, Role):
            return value
        name = str(value or "").strip().lower()
        if name in _INTERVIEWER_ALIASES:
            return Role.INTERVIEWER
        if name in _CANDIDATE_ALIASES:
            return Role.CANDIDATE
        return value


class InstructionSpec(BaseModel):  # Model instruction for one stage of the script
    model_config = ConfigDict(frozen=True)

    phase: str
    stage_index: int = Field(ge=1)
    total_stages: int = Field(ge=1)
    text: str
    is_terminal: bool = False


class TurnResult(BaseModel):  # Controller output for one chat turn
    response_text: str
    stage_index: int = Field(ge=1)
    interview_complete: bool
    phase: str


class CompletedInterview(BaseModel):  # Persisted result of a finished interview
    model_config = ConfigDict(frozen=True)

    id: int
    user_id: str
    title: str
    category: Category
    score: int = Field(ge=0, le=100)
    question_count: int = Field(ge=1)
    created_at: str


def _coerce_skills(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        raw: List[Any] = value.split(",")
    elif isinstance(value, Mapping):
        raw = []
        for entries in value.values():
            if isinstance(entries, str):
                raw.append(entries)
            else:
                raw.extend(entries or [])
    else:
        raw = list(value)
    tokens: List[str] = []
    seen: set[str] = set()
    for item in raw:
        token = str(item).strip()
        if token and token.lower() not in seen:
            seen.add(token.lower())
            tokens.append(token)
    return tokens


__all__ = [
    "Category",
    "CompletedInterview",
    "ConversationTurn",
    "InstructionSpec",
    "InterviewMode",
    "Profile",
    "ProfileStatus",
    "Role",
    "TurnResult",
]
