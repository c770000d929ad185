"""JWKS client composing fetch, resolution, caching and rate limiting."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from jwks_client.cache import CachedSigningKeyProvider
from jwks_client.config import JwksClientSettings, load_settings
from jwks_client.exceptions import ArgumentError
from jwks_client.fetcher import KeySetFetcher
from jwks_client.rate_limit import RateLimitedSigningKeyProvider, SlidingWindowRateLimiter
from jwks_client.resolver import SigningKeyResolver
from jwks_client.types import JwksObserver, RawKey, SigningKey, SigningKeyProvider


class JwksClient:
    """Resolve JWKS signing keys by kid with optional caching and rate limiting."""

    def __init__(
        self,
        settings: JwksClientSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        observer: JwksObserver | None = None,
        now: Callable[[], float] | None = None,
        **options: Any,
    ) -> None:
        """Build the lookup pipeline from settings or keyword options (`jwks_uri=...`)."""
        if settings is not None and options:
            raise ArgumentError("Pass either a settings object or keyword options, not both.")
        self.settings = settings if settings is not None else load_settings(**options)

        self._fetcher = KeySetFetcher(self.settings, http_client=http_client, observer=observer)
        self._resolver = SigningKeyResolver(self._fetcher, observer=observer)

        provider: SigningKeyProvider = self._resolver
        if self.settings.rate_limit:
            provider = RateLimitedSigningKeyProvider(
                provider,
                SlidingWindowRateLimiter(self.settings.jwks_requests_per_minute, now=now),
            )
        if self.settings.cache:
            provider = CachedSigningKeyProvider(
                provider,
                max_entries=self.settings.cache_max_entries,
                max_age_seconds=self.settings.cache_max_age,
                now=now,
            )
        self._provider = provider

    async def get_signing_key(self, kid: str) -> SigningKey:
        """Return the signing key matching `kid`."""
        return await self._provider.get_signing_key(kid)

    async def get_keys(self) -> list[RawKey]:
        """Return the raw JWKS entries, bypassing cache and rate limiting."""
        return await self._resolver.get_keys()

    async def list_signing_keys(self) -> list[SigningKey]:
        """Return all RSA signing keys, bypassing cache and rate limiting."""
        return await self._resolver.list_signing_keys()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if owned by this instance."""
        await self._fetcher.aclose()

    async def __aenter__(self) -> JwksClient:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        """Exit async context manager and close managed resources."""
        del exc_type, exc, tb
        await self.aclose()
