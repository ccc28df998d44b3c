from __future__ import annotations  # Prompt assembly for the interviewer model

import json
from textwrap import dedent
from typing import Dict, List, Sequence

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from .models import ConversationTurn, InstructionSpec, InterviewMode, Profile, Role


DEFAULT_OPENER = "Start the interview."

SYSTEM_TEMPLATE = dedent(  # Interviewer persona shared by every turn
    """
    You are a professional interviewer conducting a {interview_kind} interview for {target_role} at {target_company}.
    Candidate: {experience} experience. Skills: {skills}.
    Session ID: {session_tag} (use this to vary your questions — NEVER repeat questions from previous sessions)

    CURRENT INSTRUCTION: {instruction}

    RULES:
    - Ask ONE question at a time. Keep questions concise (2-3 sentences max).
    - {mode_rule}
    - Give brief feedback on the previous answer before asking the next question.
    - Do NOT number your questions like "Question 1:" — just ask naturally.
    - IMPORTANT: Ask UNIQUE, CREATIVE questions every session. Cover different sub-topics, edge cases, and difficulty levels. Avoid generic or common interview questions.
    """
).strip()

_INTERVIEW_KIND = {
    InterviewMode.TECHNICAL: "TECHNICAL",
    InterviewMode.NON_TECHNICAL: "NON-TECHNICAL behavioral",
}

_MODE_RULES = {
    InterviewMode.TECHNICAL: "If the candidate says they don't know a topic, switch to another skill immediately.",
    InterviewMode.NON_TECHNICAL: "Only behavioral/soft-skill questions. No coding.",
}

_WIRE_ROLES = {Role.INTERVIEWER: "assistant", Role.CANDIDATE: "user"}

PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{system_prompt}"),
        MessagesPlaceholder("history"),
        ("human", "{message}"),
    ]
)


def window_history(history: Sequence[ConversationTurn], size: int) -> List[ConversationTurn]:
    """Keep the most recent ``size`` turns in their original order."""
    if size <= 0:
        return []
    return list(history[-size:])


def system_prompt(profile: Profile, instruction: InstructionSpec, *, session_tag: str, skills_cap: int = 12) -> str:
    mode = profile.interview_mode
    return SYSTEM_TEMPLATE.format(
        interview_kind=_INTERVIEW_KIND[mode],
        target_role=profile.target_role or "the target role",
        target_company=profile.target_company or "the target company",
        experience=profile.experience_level or "unspecified",
        skills=profile.skills_summary(skills_cap) or "N/A",
        session_tag=session_tag,
        instruction=instruction.text,
        mode_rule=_MODE_RULES[mode],
    )


def assemble(
    profile: Profile,
    instruction: InstructionSpec,
    history: Sequence[ConversationTurn],
    message: str | None,
    *,
    session_tag: str,
    window: int = 8,
    skills_cap: int = 12,
) -> List[Dict[str, str]]:
    """Build the ordered chat payload: system prompt, windowed history, new utterance."""

    prompt_value = PROMPT.invoke(
        {
            "system_prompt": system_prompt(profile, instruction, session_tag=session_tag, skills_cap=skills_cap),
            "history": [
                {"role": _WIRE_ROLES[turn.role], "content": turn.content}
                for turn in window_history(history, window)
            ],
            "message": message if message and message.strip() else DEFAULT_OPENER,
        }
    )
    return [_message_dict(item) for item in prompt_value.to_messages()]


def _message_dict(message: BaseMessage) -> Dict[str, str]:  # Map LangChain BaseMessage to role/content dict
    role = message.type
    if role == "human":
        role = "user"
    elif role == "ai":
        role = "assistant"
    content = message.content
    if not isinstance(content, str):
        content = json.dumps(content)
    return {"role": role, "content": content}


__all__ = ["DEFAULT_OPENER", "PROMPT", "SYSTEM_TEMPLATE", "assemble", "system_prompt", "window_history"]
