"""Data contract types for JWKS keys and resolved signing keys."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol, TypedDict


class RawKey(TypedDict, total=False):
    """JWK entry as received from the JWKS endpoint; every member is untrusted."""

    kty: str
    kid: str
    use: str
    alg: str
    x5c: list[str]
    n: str
    e: str
    nbf: int


class JWKS(TypedDict):
    """JWKS document payload."""

    keys: list[RawKey]


@dataclass(frozen=True, slots=True)
class CertificateKey:
    """PEM-wrapped X.509 certificate taken from the `x5c` chain."""

    pem: str
    kind: Literal["certificate"] = "certificate"


@dataclass(frozen=True, slots=True)
class RsaModulusKey:
    """PKCS#1 RSA public key PEM built from the `n`/`e` members."""

    pem: str
    kind: Literal["rsa_public_key"] = "rsa_public_key"


PublicKeyEncoding = CertificateKey | RsaModulusKey


@dataclass(frozen=True, slots=True)
class SigningKey:
    """RSA signing key resolved from a JWKS document."""

    kid: str
    key_material: PublicKeyEncoding
    nbf: int | float | None = None

    def __post_init__(self) -> None:
        if not self.kid:
            raise ValueError("Signing key requires a non-empty kid.")

    @property
    def public_key(self) -> str | None:
        """Certificate PEM when the key was published with an `x5c` chain."""
        if isinstance(self.key_material, CertificateKey):
            return self.key_material.pem
        return None

    @property
    def rsa_public_key(self) -> str | None:
        """RSA public key PEM when the key was published as modulus/exponent."""
        if isinstance(self.key_material, RsaModulusKey):
            return self.key_material.pem
        return None

    def get_public_key(self) -> str:
        """Return whichever PEM encoding this key carries."""
        return self.key_material.pem


JwksObserver = Callable[[str, Mapping[str, Any]], None]


class SigningKeyProvider(Protocol):
    """Capability shared by the resolver and its cache/rate-limit wrappers."""

    async def get_signing_key(self, kid: str) -> SigningKey:
        """Resolve the signing key identified by `kid`."""
