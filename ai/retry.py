# ai/retry.py
"""
Exponential backoff for calls to the hosted model.

Only rate-limit rejections (HTTP 429) are retried. Everything else goes
straight back to the caller so each flow can apply its own error policy.
"""

import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from loguru import logger

T = TypeVar("T")

RATE_LIMIT_STATUS = 429


@dataclass(frozen=True)
class RetryPolicy:
    retries: int = 3
    initial_delay: float = 2.0   # seconds
    backoff_factor: float = 2.0

    def delay_for(self, attempt):
        """Delay before retry number ``attempt`` (0-based): 2s, 4s, 8s with defaults."""
        return self.initial_delay * (self.backoff_factor ** attempt)


def is_rate_limit_error(exc):
    for attr in ("status_code", "status"):
        if getattr(exc, attr, None) == RATE_LIMIT_STATUS:
            return True

    response = getattr(exc, "response", None)
    if response is not None and getattr(response, "status_code", None) == RATE_LIMIT_STATUS:
        return True

    return str(RATE_LIMIT_STATUS) in str(exc)


def call_with_retry(
    operation: Callable[[], T],
    policy: RetryPolicy = RetryPolicy(),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Invoke ``operation`` and retry it while it is rate limited.

    At most ``policy.retries + 1`` calls are made. The last error is
    re-raised as-is once the budget runs out.
    """
    attempt = 0
    while True:
        try:
            return operation()
        except Exception as exc:
            if not is_rate_limit_error(exc) or attempt >= policy.retries:
                raise
            delay = policy.delay_for(attempt)
            logger.warning(
                f"Rate limit hit. Retrying in {delay:.1f}s... "
                f"({policy.retries - attempt} retries left)"
            )
            sleep(delay)
            attempt += 1
