import pytest
from pydantic import ValidationError

from interview.models import ConversationTurn, InterviewMode, Profile, ProfileStatus, Role


def test_profile_flattens_categorised_skills():
    profile = Profile(
        user_id="u1",
        skills={"languages": ["Python", "Go"], "databases": ["PostgreSQL", "python", " "]},
    )
    assert profile.skills == ["Python", "Go", "PostgreSQL"]
    assert profile.skills_summary(2) == "Python, Go"


def test_profile_defaults_are_not_ready():
    profile = Profile(user_id="u1")
    assert profile.status is ProfileStatus.UPLOADED
    assert profile.interview_mode is InterviewMode.TECHNICAL
    assert not profile.is_ready


@pytest.mark.parametrize(
    "raw,role",
    [("ai", Role.INTERVIEWER), ("assistant", Role.INTERVIEWER), ("user", Role.CANDIDATE), ("Candidate", Role.CANDIDATE)],
)
def test_turn_role_aliases(raw, role):
    assert ConversationTurn(role=raw, content="x").role is role


@pytest.mark.parametrize("raw", ["narrator", "system"])
def test_unknown_role_rejected(raw):
    with pytest.raises(ValidationError):
        ConversationTurn(role=raw, content="x")
