"""TTL + LRU memoization of per-kid signing-key resolutions."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog
from cachetools import TTLCache

from jwks_client.types import SigningKey, SigningKeyProvider

logger = structlog.get_logger(__name__)


@dataclass
class _PendingLookup:
    """Per-kid lock shared by concurrent callers missing the cache."""

    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    waiters: int = 0


class CachedSigningKeyProvider:
    """Serve signing keys from a bounded TTL cache, resolving misses through `inner`."""

    def __init__(
        self,
        inner: SigningKeyProvider,
        max_entries: int,
        max_age_seconds: float,
        now: Callable[[], float] | None = None,
    ) -> None:
        """Create cache with LRU capacity `max_entries` and per-entry TTL `max_age_seconds`."""
        self._inner = inner
        self._entries: TTLCache[str, SigningKey] = TTLCache(
            maxsize=max_entries, ttl=max_age_seconds, timer=now or time.monotonic
        )
        self._pending: dict[str, _PendingLookup] = {}

    async def get_signing_key(self, kid: str) -> SigningKey:
        """Return a fresh cached key or resolve and cache it; failures are never cached."""
        cached = self._entries.get(kid)
        if cached is not None:
            logger.debug("jwks_signing_key_cache_hit", kid=kid)
            return cached

        pending = self._pending.setdefault(kid, _PendingLookup())
        pending.waiters += 1
        try:
            async with pending.lock:
                cached = self._entries.get(kid)
                if cached is not None:
                    return cached
                signing_key = await self._inner.get_signing_key(kid)
                self._entries[kid] = signing_key
                return signing_key
        finally:
            pending.waiters -= 1
            if pending.waiters == 0:
                del self._pending[kid]

    def clear(self) -> None:
        """Drop every cached signing key."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
