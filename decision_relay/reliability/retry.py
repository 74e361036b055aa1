from __future__ import annotations

import random
from dataclasses import dataclass

from ..config.constants import DEFAULT_MAX_ATTEMPTS, DEFAULT_RETRY_DELAY


@dataclass(frozen=True)
class RetryPolicy:
    """
    Attempt ceiling and optional bounded backoff for the decision call.

    The default retries immediately, up to five attempts in total. A
    non-zero ``initial_delay`` enables exponential backoff capped at
    ``max_delay``; it never changes the number of attempts.
    """
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    initial_delay: float = DEFAULT_RETRY_DELAY
    backoff_factor: float = 2.0
    max_delay: float = 5.0
    jitter_factor: float = 0.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("retry delays must not be negative")

    def should_retry(self, attempt: int, failed: bool) -> bool:
        """Whether another attempt follows ``attempt`` (1-based)."""
        return failed and attempt < self.max_attempts

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed ``attempt`` before the next one."""
        if self.initial_delay <= 0:
            return 0.0
        delay = self.initial_delay * (self.backoff_factor ** (attempt - 1))
        if self.jitter_factor > 0:
            delay += random.uniform(0, self.jitter_factor * delay)
        return min(delay, self.max_delay)
