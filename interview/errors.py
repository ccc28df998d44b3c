"""Error taxonomy for the interview controller."""
from __future__ import annotations


class InterviewError(RuntimeError):
    """Base class for controller failures surfaced to callers."""

    retryable = False


class NotReadyError(InterviewError):
    """The caller has no analysed profile yet; fixable by the user."""

    def __init__(self, message: str = "Please upload and analyse your resume first.") -> None:
        super().__init__(message)


class RateLimitedError(InterviewError):
    """Upstream throttling persisted after every automatic retry."""

    retryable = True

    def __init__(self, message: str = "AI service is rate limited.", *, attempts: int = 1) -> None:
        super().__init__(message)
        self.attempts = attempts


class FatalGatewayError(InterviewError):
    """Any upstream failure that is not worth retrying automatically."""


__all__ = ["InterviewError", "NotReadyError", "RateLimitedError", "FatalGatewayError"]
