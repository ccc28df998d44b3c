from __future__ import annotations  # Bounded exponential-backoff retry for upstream calls

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from .errors import FatalGatewayError, InterviewError, RateLimitedError


logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]

_RATE_LIMIT_MARKERS = ("429", "rate_limit", "rate limit")


def is_rate_limited(exc: BaseException) -> bool:
    """Return True when ``exc`` carries a rate-limit status or message."""
    for attr in ("status_code", "status"):
        if getattr(exc, attr, None) == 429:
            return True
    text = str(exc).lower()
    return any(marker in text for marker in _RATE_LIMIT_MARKERS)


def backoff_ms(attempt: int, base_delay_ms: int) -> int:
    return base_delay_ms * (2 ** attempt)


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    max_retries: int,
    base_delay_ms: int,
    sleep: Optional[Sleep] = None,
) -> T:
    """Run ``operation`` retrying only rate-limited failures.

    Raises:
        RateLimitedError: When every attempt was throttled.
        FatalGatewayError: On the first failure that is not a rate limit.
    """

    pause = sleep or asyncio.sleep
    attempts = max(max_retries, 0) + 1
    for attempt in range(attempts):
        try:
            return await operation()
        except InterviewError:
            raise
        except Exception as exc:  # noqa: BLE001
            if not is_rate_limited(exc):
                logger.error("Upstream call failed without retry: %s", exc)
                raise FatalGatewayError(str(exc) or exc.__class__.__name__) from exc
            if attempt + 1 >= attempts:
                logger.warning("Rate limited after %d attempt(s), giving up", attempts)
                raise RateLimitedError(attempts=attempts) from exc
            delay = backoff_ms(attempt, base_delay_ms)
            logger.warning(
                "Rate limited, retrying in %.1fs (attempt %d/%d)",
                delay / 1000,
                attempt + 1,
                max_retries,
            )
            await pause(delay / 1000)
    raise AssertionError("unreachable")  # pragma: no cover


__all__ = ["backoff_ms", "call_with_retry", "is_rate_limited"]
