"""
Retry state machine for elevation lookups.

    ATTEMPT --ok--> SUCCEEDED
    ATTEMPT --fail--> BACKOFF (retries left) | FALLBACK (exhausted)
    BACKOFF --> RETRY
    RETRY --ok--> SUCCEEDED
    RETRY --fail--> BACKOFF | FALLBACK

Backoff waits 1s before the first retry and 2s before the second.
A rate-limited failure (HTTP 429) waits an extra 5s first.
FALLBACK raises ElevationUnavailableError; the caller decides what
to substitute.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Tuple, TypeVar

from gpx_synth.config import settings
from gpx_synth.shared.errors import (
    ElevationRateLimitError,
    ElevationServiceError,
    ElevationUnavailableError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryState(str, Enum):
    ATTEMPT = "attempt"
    BACKOFF = "backoff"
    RETRY = "retry"
    SUCCEEDED = "succeeded"
    FALLBACK = "fallback"


TERMINAL_STATES = (RetryState.SUCCEEDED, RetryState.FALLBACK)


@dataclass(frozen=True)
class RetryPolicy:
    """Retry limits and delays (seconds)."""
    max_retries: int = 2
    backoff_s: Tuple[float, ...] = (1.0, 2.0)
    rate_limit_wait_s: float = 5.0

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_retries=settings.elevation_max_retries,
            backoff_s=tuple(settings.elevation_backoff_s),
            rate_limit_wait_s=settings.elevation_rate_limit_wait_s,
        )

    def backoff_for(self, retry_number: int) -> float:
        """Delay before retry number 1, 2, ... (last delay repeats)."""
        if not self.backoff_s:
            return 0.0
        return self.backoff_s[min(retry_number, len(self.backoff_s)) - 1]


def next_state(
    state: RetryState,
    succeeded: bool,
    retries_used: int,
    policy: RetryPolicy
) -> RetryState:
    """
    Transition function.

    Args:
        state: Current state
        succeeded: Outcome of the call made in ATTEMPT/RETRY (ignored otherwise)
        retries_used: Retries already started
        policy: Retry limits

    Raises:
        ValueError: If called from a terminal state
    """
    if state in (RetryState.ATTEMPT, RetryState.RETRY):
        if succeeded:
            return RetryState.SUCCEEDED
        if retries_used < policy.max_retries:
            return RetryState.BACKOFF
        return RetryState.FALLBACK

    if state is RetryState.BACKOFF:
        return RetryState.RETRY

    raise ValueError(f"No transition from terminal state {state.value}")


class RetryStateMachine:
    """
    Drives one operation through the retry states.

    One instance per operation; `history` records the visited states.

    Usage:
        machine = RetryStateMachine(RetryPolicy())
        elevations = await machine.run(lambda: client.lookup(batch))
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.policy = policy or RetryPolicy.from_settings()
        self._sleep = sleep
        self.history: List[RetryState] = []

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        description: str = "elevation lookup"
    ) -> T:
        """
        Run operation until it succeeds or retries are exhausted.

        Only ElevationServiceError is retried; anything else propagates.

        Raises:
            ElevationUnavailableError: On FALLBACK
        """
        state = RetryState.ATTEMPT
        self.history = [state]
        retries_used = 0
        attempt = 0
        last_error: Optional[ElevationServiceError] = None
        result = None

        while state not in TERMINAL_STATES:
            if state in (RetryState.ATTEMPT, RetryState.RETRY):
                attempt += 1
                try:
                    result = await operation()
                    succeeded = True
                except ElevationServiceError as e:
                    last_error = e
                    succeeded = False
                    logger.warning(f"{description} attempt {attempt} failed: {e}")
                state = next_state(state, succeeded, retries_used, self.policy)

            elif state is RetryState.BACKOFF:
                retries_used += 1
                if isinstance(last_error, ElevationRateLimitError):
                    logger.warning(
                        f"{description} rate limited, waiting "
                        f"{self.policy.rate_limit_wait_s}s"
                    )
                    await self._sleep(self.policy.rate_limit_wait_s)
                await self._sleep(self.policy.backoff_for(retries_used))
                state = next_state(state, False, retries_used, self.policy)

            self.history.append(state)

        if state is RetryState.FALLBACK:
            logger.warning(f"All {attempt} {description} attempts failed")
            raise ElevationUnavailableError(
                f"{description} failed after {attempt} attempts",
                last_error=last_error,
            )

        return result
