"""Plain (uncached, unthrottled) signing-key resolution over a JWKS fetcher."""

from __future__ import annotations

from typing import Any

import structlog

from jwks_client.codec import to_public_key
from jwks_client.exceptions import NoKeysError, NoSigningKeysError, SigningKeyNotFoundError
from jwks_client.fetcher import KeySetFetcher
from jwks_client.types import JwksObserver, RawKey, SigningKey

logger = structlog.get_logger(__name__)


def is_signing_key(raw: Any) -> bool:
    """Return True when a JWK entry is a usable RSA signing key."""
    if not isinstance(raw, dict):
        return False
    if raw.get("kty") != "RSA":
        return False
    kid = raw.get("kid")
    if not isinstance(kid, str) or not kid:
        return False
    if "use" in raw and raw["use"] != "sig":
        return False
    chain = raw.get("x5c")
    if isinstance(chain, list) and chain:
        return True
    return bool(raw.get("n")) and bool(raw.get("e"))


class SigningKeyResolver:
    """Filter a JWKS document down to RSA signing keys and look them up by kid."""

    def __init__(self, fetcher: KeySetFetcher, observer: JwksObserver | None = None) -> None:
        self._fetcher = fetcher
        self._observer = observer

    async def get_keys(self) -> list[RawKey]:
        """Return the raw key entries exactly as published."""
        return await self._fetcher.fetch()

    async def list_signing_keys(self) -> list[SigningKey]:
        """Fetch the key set and convert every qualifying entry, preserving source order."""
        keys = await self._fetcher.fetch()
        if not keys:
            raise NoKeysError("The JWKS endpoint did not contain any keys")

        signing_keys = [
            SigningKey(kid=raw["kid"], key_material=to_public_key(raw), nbf=raw.get("nbf"))
            for raw in keys
            if is_signing_key(raw)
        ]
        if not signing_keys:
            raise NoSigningKeysError("The JWKS endpoint did not contain any signing keys")

        logger.debug(
            "jwks_signing_keys_resolved",
            kids=[signing_key.kid for signing_key in signing_keys],
        )
        if self._observer is not None:
            self._observer("signing_keys_resolved", {"signing_keys": signing_keys})
        return signing_keys

    async def get_signing_key(self, kid: str) -> SigningKey:
        """Return the first signing key whose kid matches."""
        signing_keys = await self.list_signing_keys()
        for signing_key in signing_keys:
            if signing_key.kid == kid:
                return signing_key

        logger.info("jwks_signing_key_not_found", kid=kid)
        if self._observer is not None:
            self._observer("signing_key_not_found", {"kid": kid})
        raise SigningKeyNotFoundError(kid)
