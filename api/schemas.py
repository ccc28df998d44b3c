"""Pydantic schemas for the interview API."""
from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from interview.models import ConversationTurn, InterviewMode, ProfileStatus


class ChatReq(BaseModel):
    message: str = ""
    conversationHistory: List[ConversationTurn] = Field(default_factory=list)


class ChatResp(BaseModel):
    message: str
    role: Literal["interviewer"] = "interviewer"
    stageIndex: int
    interviewComplete: bool


class CompleteReq(BaseModel):
    feedbackMessage: str = ""


class InterviewSummary(BaseModel):
    id: int
    title: str
    score: int
    category: str


class CompleteResp(BaseModel):
    message: str = "Interview saved successfully."
    interview: InterviewSummary


class InterviewHistoryItem(InterviewSummary):
    questionsCount: int
    createdAt: str


class ProfileReq(BaseModel):
    targetRole: str
    targetCompany: str
    experience: str
    interviewType: InterviewMode = InterviewMode.TECHNICAL
    skills: Union[List[str], Dict[str, List[str]]] = Field(default_factory=list)
    status: ProfileStatus = ProfileStatus.ANALYSED


class ProfileOut(BaseModel):
    targetRole: str
    targetCompany: str
    experience: str
    interviewType: InterviewMode
    skills: List[str]
    status: ProfileStatus


class ProfileStatusResp(BaseModel):
    hasProfile: bool
    profile: Optional[ProfileOut] = None
