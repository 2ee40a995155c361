"""Provider request rate limiting utilities.

This module provides a continuous token-bucket limiter. One instance guards
each upstream provider and is shared by every task that calls that provider,
so all requests to a provider draw from a single budget while different
providers never contend with each other. Acquire it *before* each request.
"""

import asyncio
import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class TokenBucketRateLimiter:
    """Asynchronous token-bucket rate limiter.

    The bucket holds at most ``max_tokens`` and refills continuously at
    ``max_tokens / window_seconds`` tokens per second. It starts full, so an
    idle provider admits a burst of up to ``max_tokens`` requests and then
    settles to the long-run average rate.

    The limiter is safe to share across tasks in a single event loop. Waiters
    queue on an internal lock and are admitted in arrival order.

    Args:
        max_tokens: Bucket capacity (requests allowed per window).
        window_seconds: Time in which an empty bucket refills completely.
        name: Label used in log messages.
        clock: Monotonic time source in seconds. Injectable for tests.
    """

    def __init__(
        self,
        max_tokens: int,
        window_seconds: float,
        *,
        name: str = "provider",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_tokens < 1:
            raise ValueError("max_tokens must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self._max_tokens = float(max_tokens)
        self._refill_rate = float(max_tokens) / float(window_seconds)
        self._name = name
        self._clock = clock
        self._lock = asyncio.Lock()
        self._tokens = float(max_tokens)
        self._last_refill = clock()

    @property
    def max_tokens(self) -> float:
        return self._max_tokens

    @property
    def refill_rate(self) -> float:
        """Tokens added per second."""
        return self._refill_rate

    @property
    def available_tokens(self) -> float:
        """Current token count including refill since the last acquire.

        Read-only: state is only mutated by `acquire`.
        """
        elapsed = max(0.0, self._clock() - self._last_refill)
        return min(self._max_tokens, self._tokens + elapsed * self._refill_rate)

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._last_refill)
        self._tokens = min(self._max_tokens, self._tokens + elapsed * self._refill_rate)
        self._last_refill = now

    async def acquire(self) -> None:
        """Wait until a token is available, then consume it.

        This method blocks cooperatively (via `asyncio.sleep`) for exactly as
        long as the bucket needs to refill to one token, and is safe to call
        concurrently from multiple tasks.

        Returns:
            None
        """
        async with self._lock:
            self._refill()
            while self._tokens < 1.0:
                wait_seconds = (1.0 - self._tokens) / self._refill_rate
                logger.debug(
                    "%s limiter empty, waiting %.3fs for a token",
                    self._name,
                    wait_seconds,
                )
                await asyncio.sleep(wait_seconds)
                self._refill()
            self._tokens -= 1.0
