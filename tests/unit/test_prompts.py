from interview.models import ConversationTurn, InterviewMode, Profile, ProfileStatus
from interview.policy import instruction_for
from interview.prompts import DEFAULT_OPENER, assemble, window_history


def _profile(mode=InterviewMode.TECHNICAL) -> Profile:
    return Profile(
        user_id="u1",
        target_role="Backend Engineer",
        target_company="Acme",
        experience_level="3 years",
        interview_mode=mode,
        status=ProfileStatus.ANALYSED,
        skills=["Python", "PostgreSQL", "Docker"],
    )


def _history(count: int) -> list[ConversationTurn]:
    turns = []
    for index in range(count):
        role = "interviewer" if index % 2 == 0 else "candidate"
        turns.append(ConversationTurn(role=role, content=f"turn {index}"))
    return turns


def test_window_keeps_most_recent_turns():
    history = _history(12)
    window = window_history(history, 8)
    assert [turn.content for turn in window] == [f"turn {index}" for index in range(4, 12)]
    assert window_history(history, 0) == []
    assert len(window_history(_history(3), 8)) == 3


def test_assemble_orders_system_history_message():
    history = _history(10)
    instruction = instruction_for(6, InterviewMode.TECHNICAL, "Python")
    messages = assemble(_profile(), instruction, history, "My answer", session_tag="4242", window=8)

    assert len(messages) == 1 + 8 + 1
    assert messages[0]["role"] == "system"
    assert [m["content"] for m in messages[1:-1]] == [f"turn {index}" for index in range(2, 10)]
    assert messages[1]["role"] == "assistant"
    assert messages[2]["role"] == "user"
    assert messages[-1] == {"role": "user", "content": "My answer"}
    assert len(history) == 10


def test_system_prompt_carries_profile_instruction_and_tag():
    instruction = instruction_for(1, InterviewMode.TECHNICAL, "Python")
    system = assemble(_profile(), instruction, [], "hi", session_tag="1234")[0]["content"]
    assert "TECHNICAL interview for Backend Engineer at Acme" in system
    assert "Session ID: 1234" in system
    assert instruction.text in system
    assert "Ask ONE question at a time" in system
    assert "Python, PostgreSQL, Docker" in system


def test_non_technical_rule():
    profile = _profile(InterviewMode.NON_TECHNICAL)
    instruction = instruction_for(1, InterviewMode.NON_TECHNICAL)
    system = assemble(profile, instruction, [], "hi", session_tag="1")[0]["content"]
    assert "NON-TECHNICAL behavioral" in system
    assert "No coding." in system


def test_empty_message_uses_default_opener():
    instruction = instruction_for(1, InterviewMode.TECHNICAL)
    for message in ("", "   ", None):
        messages = assemble(_profile(), instruction, [], message, session_tag="1")
        assert messages[-1] == {"role": "user", "content": DEFAULT_OPENER}


def test_braces_in_content_are_passed_through():
    history = [ConversationTurn(role="candidate", content="def f(): return {'a': 1}")]
    instruction = instruction_for(2, InterviewMode.TECHNICAL)
    messages = assemble(_profile(), instruction, history, "print({x})", session_tag="1")
    assert messages[1]["content"] == "def f(): return {'a': 1}"
    assert messages[-1]["content"] == "print({x})"


def test_only_session_tag_varies_between_calls():
    instruction = instruction_for(2, InterviewMode.TECHNICAL)
    first = assemble(_profile(), instruction, _history(3), "a", session_tag="1")
    second = assemble(_profile(), instruction, _history(3), "a", session_tag="2")
    assert first[1:] == second[1:]
    assert first[0]["content"].replace("Session ID: 1", "Session ID: 2") == second[0]["content"]
