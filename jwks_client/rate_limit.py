"""In-process sliding-window throttling of uncached signing-key lookups."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable

import structlog

from jwks_client.exceptions import RateLimitExceededError
from jwks_client.types import SigningKey, SigningKeyProvider

logger = structlog.get_logger(__name__)
_WINDOW_SECONDS = 60.0


class SlidingWindowRateLimiter:
    """Allow at most `requests_per_minute` acquisitions in any trailing window."""

    def __init__(
        self,
        requests_per_minute: int,
        window_seconds: float = _WINDOW_SECONDS,
        now: Callable[[], float] | None = None,
    ) -> None:
        if requests_per_minute < 1:
            raise ValueError("requests_per_minute must be at least 1.")
        self._limit = requests_per_minute
        self._window_seconds = window_seconds
        self._now = now or time.monotonic
        self._timestamps: deque[float] = deque()

    def try_acquire(self) -> bool:
        """Record one call and return True, or return False when the window is full."""
        now = self._now()
        self._evict_expired(now)
        if len(self._timestamps) >= self._limit:
            return False
        self._timestamps.append(now)
        return True

    def remaining(self) -> int:
        """Return how many calls the current window still admits."""
        self._evict_expired(self._now())
        return self._limit - len(self._timestamps)

    def _evict_expired(self, now: float) -> None:
        window_start = now - self._window_seconds
        while self._timestamps and self._timestamps[0] <= window_start:
            self._timestamps.popleft()


class RateLimitedSigningKeyProvider:
    """Reject lookups that exceed the limiter budget before they reach `inner`."""

    def __init__(self, inner: SigningKeyProvider, limiter: SlidingWindowRateLimiter) -> None:
        self._inner = inner
        self._limiter = limiter

    async def get_signing_key(self, kid: str) -> SigningKey:
        """Forward to `inner` when budget allows, else raise RateLimitExceededError."""
        if not self._limiter.try_acquire():
            logger.warning("jwks_rate_limit_exceeded", kid=kid)
            raise RateLimitExceededError("Too many requests to the JWKS endpoint")
        return await self._inner.get_signing_key(kid)
