"""Conversion of raw JWK material into canonical PEM public-key encodings."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from jwks_client.exceptions import KeyFormatError
from jwks_client.types import CertificateKey, PublicKeyEncoding, RawKey, RsaModulusKey

_PEM_LINE_LENGTH = 64


def to_public_key(raw: RawKey) -> PublicKeyEncoding:
    """Convert a JWK into a certificate PEM (`x5c`) or RSA public key PEM (`n`/`e`)."""
    chain = raw.get("x5c")
    if isinstance(chain, list) and chain:
        return CertificateKey(pem=cert_to_pem(chain[0]))
    return RsaModulusKey(pem=rsa_public_key_to_pem(raw.get("n"), raw.get("e")))


def cert_to_pem(cert: Any) -> str:
    """Wrap base64 DER certificate bytes with PEM armor and 64-character lines."""
    if not isinstance(cert, str) or not cert:
        raise KeyFormatError("Certificate must be a non-empty base64 string.")
    try:
        base64.b64decode(cert, validate=True)
    except binascii.Error as exc:
        raise KeyFormatError("Certificate is not valid base64.") from exc

    body = "\n".join(
        cert[index : index + _PEM_LINE_LENGTH] for index in range(0, len(cert), _PEM_LINE_LENGTH)
    )
    return f"-----BEGIN CERTIFICATE-----\n{body}\n-----END CERTIFICATE-----\n"


def rsa_public_key_to_pem(modulus_b64: Any, exponent_b64: Any) -> str:
    """Build a PKCS#1 `RSA PUBLIC KEY` PEM from base64url modulus and exponent."""
    modulus = _base64url_to_int(modulus_b64, "modulus")
    exponent = _base64url_to_int(exponent_b64, "exponent")
    try:
        public_key = rsa.RSAPublicNumbers(e=exponent, n=modulus).public_key()
    except ValueError as exc:
        raise KeyFormatError(f"Invalid RSA public key components: {exc}") from exc

    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.PKCS1,
    ).decode("ascii")


def load_public_key(encoding: PublicKeyEncoding) -> rsa.RSAPublicKey:
    """Parse a PEM encoding back into an RSA public key object."""
    data = encoding.pem.encode("ascii")
    try:
        if isinstance(encoding, CertificateKey):
            public_key = x509.load_pem_x509_certificate(data).public_key()
        else:
            public_key = serialization.load_pem_public_key(data)
    except ValueError as exc:
        raise KeyFormatError(f"Unable to load {encoding.kind} PEM.") from exc

    if not isinstance(public_key, rsa.RSAPublicKey):
        raise KeyFormatError(f"Expected an RSA public key in {encoding.kind} PEM.")
    return public_key


def _base64url_to_int(value: Any, name: str) -> int:
    """Decode an unpadded base64url big-endian unsigned integer."""
    if not isinstance(value, str) or not value:
        raise KeyFormatError(f"RSA {name} must be a non-empty base64url string.")
    padded = value + "=" * (-len(value) % 4)
    try:
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
    except binascii.Error as exc:
        raise KeyFormatError(f"RSA {name} is not valid base64url.") from exc
    if not raw:
        raise KeyFormatError(f"RSA {name} is empty.")
    return int.from_bytes(raw, "big")
