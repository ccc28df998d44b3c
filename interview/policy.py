from __future__ import annotations  # Table-driven interview progression policy

from dataclasses import dataclass
from textwrap import dedent
from typing import Dict, Tuple

from .models import InstructionSpec, InterviewMode


COMPLETION_SENTINEL = "🎯 Interview complete."
SUMMARY_PHASE = "summary"

SUMMARY_TEMPLATE = dedent(  # Terminal stage instruction shared by every script
    """
    The interview is NOW OVER (all {total} questions done). Do NOT ask another question. Provide a COMPREHENSIVE PERFORMANCE SUMMARY:

    1. Overall Rating: X/10 (give an honest numerical score)
    2. Question-by-Question Analysis: Briefly mention what went well or poorly in each answer
    3. Key Strengths: 2-3 things the candidate did well
    4. Areas to Improve: 2-3 specific weaknesses with actionable advice
    5. Recommended Courses & Certifications: Suggest 2-3 REAL courses from Coursera, Udemy, LinkedIn Learning, or other platforms that would help the candidate improve on their weak areas. Include the course name and platform.
    6. Final Verdict: hire/maybe/no-hire recommendation with reasoning

    End your response with exactly: "{sentinel}"
    """
).strip()


@dataclass(frozen=True)
class StagePhase:  # Contiguous stage range sharing one instruction template
    name: str
    first: int
    last: int
    template: str

    def covers(self, stage_index: int) -> bool:
        return self.first <= stage_index <= self.last


@dataclass(frozen=True)
class InterviewScript:  # Ordered partition of stage indices into phases
    mode: InterviewMode
    phases: Tuple[StagePhase, ...]
    summary_template: str = SUMMARY_TEMPLATE

    def __post_init__(self) -> None:
        expected = 1
        for phase in self.phases:
            if phase.first != expected or phase.last < phase.first:
                raise ValueError(f"Phase '{phase.name}' breaks the stage sequence for {self.mode.value}")
            expected = phase.last + 1

    @property
    def total_stages(self) -> int:
        return self.phases[-1].last if self.phases else 0

    def phase_for(self, stage_index: int) -> StagePhase | None:
        for phase in self.phases:
            if phase.covers(stage_index):
                return phase
        return None


TECHNICAL_SCRIPT = InterviewScript(
    mode=InterviewMode.TECHNICAL,
    phases=(
        StagePhase(
            "concept",
            1,
            3,
            "This is question {stage} of {total}. Ask a TECHNICAL CONCEPT question — theory, architecture, or how "
            "something works. Topics should be based on the candidate's skills: {skills}. Do NOT give code. Just ask "
            "a conceptual question.",
        ),
        StagePhase(
            "code_reading",
            4,
            7,
            "This is question {stage} of {total}. Ask a PSEUDO CODE / OUTPUT question — show a short code snippet "
            "(5-10 lines max) and ask \"What will be the output?\" or \"What does this code do?\" or \"Find the bug.\" "
            "Use languages/frameworks the candidate knows: {skills}.",
        ),
        StagePhase(
            "behavioral",
            8,
            8,
            "This is question {stage} of {total}. Ask ONE behavioral question — teamwork, problem-solving approach, "
            "handling deadlines, or a challenging project experience. This is the only behavioral question in this "
            "interview.",
        ),
        StagePhase(
            "final_technical",
            9,
            9,
            "This is the LAST question ({stage}/{total}). Ask one final technical question — can be system design, "
            "optimization, or a tricky concept.",
        ),
    ),
)

NON_TECHNICAL_SCRIPT = InterviewScript(
    mode=InterviewMode.NON_TECHNICAL,
    phases=(
        StagePhase(
            "behavioral",
            1,
            8,
            "This is question {stage} of {total}. Ask a behavioral/soft-skill question.",
        ),
    ),
)

SCRIPTS: Dict[InterviewMode, InterviewScript] = {
    InterviewMode.TECHNICAL: TECHNICAL_SCRIPT,
    InterviewMode.NON_TECHNICAL: NON_TECHNICAL_SCRIPT,
}


def script_for(mode: InterviewMode | str) -> InterviewScript:
    return SCRIPTS[InterviewMode(mode)]


def total_stages(mode: InterviewMode | str) -> int:
    return script_for(mode).total_stages


def instruction_for(stage_index: int, mode: InterviewMode | str, skills: str = "") -> InstructionSpec:
    """Map a 1-based stage index to the instruction for that point of the script.

    Every index past the last scripted question yields the summary instruction,
    so calls made after the interview ended keep returning the same spec.
    """

    if stage_index < 1:
        raise ValueError(f"stage_index must be >= 1, got {stage_index}")
    script = script_for(mode)
    total = script.total_stages
    values = {"stage": stage_index, "total": total, "skills": skills or "N/A", "sentinel": COMPLETION_SENTINEL}
    phase = script.phase_for(stage_index)
    if phase is None:
        return InstructionSpec(
            phase=SUMMARY_PHASE,
            stage_index=stage_index,
            total_stages=total,
            text=script.summary_template.format(**values),
            is_terminal=True,
        )
    return InstructionSpec(
        phase=phase.name,
        stage_index=stage_index,
        total_stages=total,
        text=phase.template.format(**values),
    )


def is_complete(stage_index: int, mode: InterviewMode | str) -> bool:
    return stage_index >= total_stages(mode) + 1


__all__ = [
    "COMPLETION_SENTINEL",
    "SUMMARY_PHASE",
    "InterviewScript",
    "SCRIPTS",
    "StagePhase",
    "instruction_for",
    "is_complete",
    "script_for",
    "total_stages",
]
