"""
Pacing of sequential remote calls.

All remote work in spotify-suite is sequential. Batch loops (CSV enrichment,
chunked playlist adds) wait between calls so a long run does not trip the
service's rate limiting. How long to wait is decided by a pacing policy:

    policy(seconds_since_last_call) -> seconds_to_wait

Policies:
    fixed_delay(0.1)       Always wait 100 ms, regardless of elapsed time
    minimum_interval(0.1)  Wait only what remains of a 100 ms interval
    no_delay()             Never wait (tests, small batches)

Usage:
    pacer = Pacer(fixed_delay(0.1))
    for row in rows:
        pacer.pause()      # no wait before the first call
        call_remote(row)
"""

import time
from typing import Callable

from spotify_suite.core.logger import get_logger

logger = get_logger(__name__)


PacingPolicy = Callable[[float], float]

DEFAULT_DELAY_SECONDS = 0.1


def fixed_delay(seconds: float) -> PacingPolicy:
    """Return a policy that always waits `seconds`."""
    if seconds < 0:
        raise ValueError(f"Delay must be non-negative, got {seconds}")

    def policy(_elapsed: float) -> float:
        return seconds

    return policy


def minimum_interval(seconds: float) -> PacingPolicy:
    """Return a policy that keeps at least `seconds` between two calls."""
    if seconds < 0:
        raise ValueError(f"Interval must be non-negative, got {seconds}")

    def policy(elapsed: float) -> float:
        return max(0.0, seconds - elapsed)

    return policy


def no_delay() -> PacingPolicy:
    """Return a policy that never waits."""
    return fixed_delay(0.0)


class Pacer:
    """
    Applies a pacing policy between consecutive remote calls.

    The first pause() after construction (or reset()) returns immediately.
    Each later pause() asks the policy how long to wait given the time
    elapsed since the previous pause().

    Attributes:
        policy: The pacing policy in use.

    Example:
        pacer = Pacer(minimum_interval(0.5), sleep=fake_sleep, clock=fake_clock)
    """

    def __init__(
        self,
        policy: PacingPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.policy = policy if policy is not None else fixed_delay(DEFAULT_DELAY_SECONDS)
        self._sleep = sleep
        self._clock = clock
        self._last_call: float | None = None

    def pause(self) -> float:
        """
        Wait before the next remote call, then mark the call.

        Returns:
            The number of seconds waited (0.0 on the first call).
        """
        waited = 0.0
        if self._last_call is not None:
            waited = self.policy(self._clock() - self._last_call)
            if waited > 0:
                logger.debug(f"Pacing: waiting {waited:.3f}s")
                self._sleep(waited)
        self.mark()
        return waited

    def mark(self) -> None:
        """Record that a remote call is happening now."""
        self._last_call = self._clock()

    def reset(self) -> None:
        """Forget the previous call; the next pause() will not wait."""
        self._last_call = None
