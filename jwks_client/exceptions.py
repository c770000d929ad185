"""Exception hierarchy for JWKS signing-key resolution."""

from __future__ import annotations


class JwksError(Exception):
    """Base class for all JWKS client exceptions."""

    code = "jwks_error"

    def __init__(self, detail: str) -> None:
        """Initialize with a human-readable detail message."""
        super().__init__(detail)
        self.detail = detail


class ArgumentError(JwksError):
    """Raised when the client is configured with invalid options."""

    code = "invalid_argument"


class JwksFetchError(JwksError):
    """Raised when the JWKS endpoint is unreachable or returns an unusable response."""

    code = "jwks_fetch_failed"

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        """Initialize with optional HTTP status code context."""
        super().__init__(detail)
        self.status_code = status_code


class NoKeysError(JwksError):
    """Raised when the JWKS endpoint returns an empty key set."""

    code = "no_keys"


class NoSigningKeysError(JwksError):
    """Raised when no key in the set qualifies as an RSA signing key."""

    code = "no_signing_keys"


class SigningKeyNotFoundError(JwksError):
    """Raised when no signing key matches the requested key id."""

    code = "signing_key_not_found"

    def __init__(self, kid: str) -> None:
        """Initialize with the key id that could not be resolved."""
        super().__init__(f"Unable to find a signing key that matches '{kid}'")
        self.kid = kid


class KeyFormatError(JwksError):
    """Raised when certificate or modulus/exponent material is malformed."""

    code = "invalid_key_format"


class RateLimitExceededError(JwksError):
    """Raised when uncached lookups exceed the JWKS request budget."""

    code = "rate_limited"
