"""
Tests for the elevation retry state machine.

Sleeps are recorded instead of awaited.
"""

import asyncio

import pytest

from gpx_synth.features.elevation import (
    RetryPolicy,
    RetryState,
    RetryStateMachine,
    next_state,
)
from gpx_synth.shared.errors import (
    ElevationRateLimitError,
    ElevationServiceError,
    ElevationUnavailableError,
)


class RecordingSleep:
    """Async stand-in for asyncio.sleep."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FlakyOperation:
    """Raises the queued errors in order, then returns the value."""

    def __init__(self, errors, value="ok"):
        self.errors = list(errors)
        self.value = value
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.value


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def policy():
    return RetryPolicy(max_retries=2, backoff_s=(1.0, 2.0), rate_limit_wait_s=5.0)


# =============================================================================
# Test Transition Function
# =============================================================================

class TestNextState:
    """Tests for next_state."""

    def test_attempt_success(self, policy):
        assert next_state(RetryState.ATTEMPT, True, 0, policy) is RetryState.SUCCEEDED

    def test_attempt_failure_with_retries_left(self, policy):
        assert next_state(RetryState.ATTEMPT, False, 0, policy) is RetryState.BACKOFF

    def test_backoff_goes_to_retry(self, policy):
        assert next_state(RetryState.BACKOFF, False, 1, policy) is RetryState.RETRY

    def test_retry_failure_exhausted(self, policy):
        assert next_state(RetryState.RETRY, False, 2, policy) is RetryState.FALLBACK

    def test_retry_success(self, policy):
        assert next_state(RetryState.RETRY, True, 2, policy) is RetryState.SUCCEEDED

    @pytest.mark.parametrize("state", [RetryState.SUCCEEDED, RetryState.FALLBACK])
    def test_terminal_states(self, state, policy):
        with pytest.raises(ValueError):
            next_state(state, True, 0, policy)


class TestRetryPolicy:
    """Tests for backoff delays."""

    def test_backoff_sequence(self, policy):
        assert policy.backoff_for(1) == 1.0
        assert policy.backoff_for(2) == 2.0

    def test_last_delay_repeats(self, policy):
        assert policy.backoff_for(5) == 2.0

    def test_no_delays(self):
        assert RetryPolicy(backoff_s=()).backoff_for(1) == 0.0


# =============================================================================
# Test Machine
# =============================================================================

class TestRetryStateMachine:
    """End-to-end runs of RetryStateMachine."""

    def test_first_attempt_succeeds(self, policy, sleep):
        machine = RetryStateMachine(policy, sleep=sleep)
        operation = FlakyOperation([])

        assert asyncio.run(machine.run(operation)) == "ok"
        assert machine.history == [RetryState.ATTEMPT, RetryState.SUCCEEDED]
        assert sleep.delays == []

    def test_retry_then_success(self, policy, sleep):
        machine = RetryStateMachine(policy, sleep=sleep)
        operation = FlakyOperation([ElevationServiceError("500")])

        assert asyncio.run(machine.run(operation)) == "ok"
        assert operation.calls == 2
        assert sleep.delays == [1.0]
        assert machine.history == [
            RetryState.ATTEMPT,
            RetryState.BACKOFF,
            RetryState.RETRY,
            RetryState.SUCCEEDED,
        ]

    def test_exhausted_retries_fall_back(self, policy, sleep):
        machine = RetryStateMachine(policy, sleep=sleep)
        last = ElevationServiceError("third")
        operation = FlakyOperation([
            ElevationServiceError("first"),
            ElevationServiceError("second"),
            last,
        ])

        with pytest.raises(ElevationUnavailableError) as exc_info:
            asyncio.run(machine.run(operation))

        assert exc_info.value.last_error is last
        assert operation.calls == 3
        assert sleep.delays == [1.0, 2.0]
        assert machine.history[-1] is RetryState.FALLBACK
        assert machine.history.count(RetryState.RETRY) == 2

    def test_rate_limit_waits_longer(self, policy, sleep):
        machine = RetryStateMachine(policy, sleep=sleep)
        operation = FlakyOperation([ElevationRateLimitError("429")])

        asyncio.run(machine.run(operation))

        assert sleep.delays == [5.0, 1.0]

    def test_rate_limit_on_last_attempt_does_not_wait(self, policy, sleep):
        machine = RetryStateMachine(policy, sleep=sleep)
        operation = FlakyOperation([
            ElevationServiceError("500"),
            ElevationServiceError("500"),
            ElevationRateLimitError("429"),
        ])

        with pytest.raises(ElevationUnavailableError):
            asyncio.run(machine.run(operation))

        assert sleep.delays == [1.0, 2.0]

    def test_no_retries(self, sleep):
        machine = RetryStateMachine(RetryPolicy(max_retries=0), sleep=sleep)
        operation = FlakyOperation([ElevationServiceError("down")])

        with pytest.raises(ElevationUnavailableError):
            asyncio.run(machine.run(operation))

        assert operation.calls == 1
        assert sleep.delays == []
        assert machine.history == [RetryState.ATTEMPT, RetryState.FALLBACK]

    def test_unexpected_errors_propagate(self, policy, sleep):
        machine = RetryStateMachine(policy, sleep=sleep)
        operation = FlakyOperation([KeyError("bug")])

        with pytest.raises(KeyError):
            asyncio.run(machine.run(operation))

        assert operation.calls == 1
        assert sleep.delays == []
