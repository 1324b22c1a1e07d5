"""Transparent retry of operations that lost an optimistic-concurrency race.

A ConcurrencyConflict means nothing was committed, so the whole unit of
work can safely run again from a fresh read.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from backoffice.domain.exceptions import ConcurrencyConflict
from backoffice.logging_config import get_logger

T = TypeVar("T")

logger = get_logger("application.retry")


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int = 3
    backoff: float = 0.01

    def run(self, operation: Callable[[], T]) -> T:
        """Call *operation*, retrying on ConcurrencyConflict with exponential backoff.

        The last conflict propagates to the caller.
        """
        for attempt in range(1, self.attempts + 1):
            try:
                return operation()
            except ConcurrencyConflict as exc:
                if attempt >= self.attempts:
                    raise
                delay = self.backoff * (2 ** (attempt - 1)) * (1 + random.random())
                logger.warning(
                    "concurrency_conflict_retry",
                    extra={"attempt": attempt, "retry_in": round(delay, 4), "reason": str(exc)},
                )
                time.sleep(delay)
        raise AssertionError("unreachable")


NO_RETRY = RetryPolicy(attempts=1)
