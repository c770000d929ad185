"""Public JWKS client exports."""

from jwks_client.client import JwksClient
from jwks_client.config import JwksClientSettings, configure_structlog, load_settings
from jwks_client.exceptions import (
    ArgumentError,
    JwksError,
    JwksFetchError,
    KeyFormatError,
    NoKeysError,
    NoSigningKeysError,
    RateLimitExceededError,
    SigningKeyNotFoundError,
)
from jwks_client.types import CertificateKey, RsaModulusKey, SigningKey

__all__ = [
    "ArgumentError",
    "CertificateKey",
    "JwksClient",
    "JwksClientSettings",
    "JwksError",
    "JwksFetchError",
    "KeyFormatError",
    "NoKeysError",
    "NoSigningKeysError",
    "RateLimitExceededError",
    "RsaModulusKey",
    "SigningKey",
    "SigningKeyNotFoundError",
    "configure_structlog",
    "load_settings",
]
