"""Async HTTP fetcher for JWKS documents."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from jwks_client.config import JwksClientSettings
from jwks_client.exceptions import ArgumentError, JwksFetchError
from jwks_client.types import JwksObserver, RawKey

logger = structlog.get_logger(__name__)


class KeySetFetcher:
    """Fetch the raw `keys` array from a JWKS endpoint."""

    def __init__(
        self,
        settings: JwksClientSettings,
        http_client: httpx.AsyncClient | None = None,
        observer: JwksObserver | None = None,
    ) -> None:
        """Create fetcher with transport options from settings or an injected client."""
        self._jwks_uri = str(settings.jwks_uri)
        self._observer = observer
        self._owns_client = http_client is None
        if http_client is None:
            try:
                http_client = httpx.AsyncClient(
                    verify=settings.strict_ssl,
                    headers=settings.request_headers,
                    timeout=settings.timeout_seconds,
                    **settings.request_agent_options,
                )
            except TypeError as exc:
                raise ArgumentError(f"Invalid request_agent_options: {exc}") from exc
        self._client = http_client

    async def fetch(self) -> list[RawKey]:
        """GET the JWKS document and return its raw key entries."""
        logger.debug("jwks_fetch_started", jwks_uri=self._jwks_uri)
        self._notify("fetch_started", jwks_uri=self._jwks_uri)
        try:
            keys = await self._fetch_keys()
        except JwksFetchError as exc:
            logger.warning(
                "jwks_fetch_failed",
                jwks_uri=self._jwks_uri,
                status_code=exc.status_code,
                detail=exc.detail,
            )
            self._notify("fetch_failed", error=exc)
            raise

        logger.debug("jwks_keys_fetched", jwks_uri=self._jwks_uri, key_count=len(keys))
        self._notify("keys_fetched", keys=keys)
        return keys

    async def aclose(self) -> None:
        """Close underlying HTTP client if owned by this instance."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> KeySetFetcher:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        """Exit async context manager and close managed resources."""
        del exc_type, exc, tb
        await self.aclose()

    async def _fetch_keys(self) -> list[RawKey]:
        """Execute request and normalize upstream failures."""
        try:
            response = await self._client.get(self._jwks_uri)
        except httpx.RequestError as exc:
            raise JwksFetchError(f"Unable to reach JWKS endpoint: {exc}") from exc

        if not response.is_success:
            raise JwksFetchError(_error_detail(response), response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise JwksFetchError(
                "JWKS endpoint returned invalid JSON.", response.status_code
            ) from exc
        if not isinstance(payload, dict):
            raise JwksFetchError(
                "JWKS endpoint returned invalid JSON object.", response.status_code
            )

        keys = payload.get("keys")
        if not isinstance(keys, list):
            raise JwksFetchError("Invalid JWKS response payload.", response.status_code)
        return keys

    def _notify(self, event: str, **context: Any) -> None:
        if self._observer is not None:
            self._observer(event, context)


def _error_detail(response: httpx.Response) -> str:
    """Pick the most useful upstream message for a non-2xx response."""
    try:
        body: Any = response.json()
    except ValueError:
        body = response.text.strip()

    if isinstance(body, Mapping) and isinstance(body.get("message"), str):
        return body["message"]
    if isinstance(body, str) and body:
        return body
    if body:
        return json.dumps(body)
    return response.reason_phrase or f"Http Error {response.status_code}"
