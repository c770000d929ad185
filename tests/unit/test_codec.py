"""Unit tests for JWK to PEM conversion."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from jwks_client.codec import (
    cert_to_pem,
    load_public_key,
    rsa_public_key_to_pem,
    to_public_key,
)
from jwks_client.exceptions import KeyFormatError
from jwks_client.types import CertificateKey, RsaModulusKey

_GARBAGE_PEM = "-----BEGIN RSA PUBLIC KEY-----\nAAAA\n-----END RSA PUBLIC KEY-----\n"


def test_rsa_public_key_pem_round_trips_modulus_and_exponent(
    rsa_private_key: rsa.RSAPrivateKey, rsa_jwk: dict[str, str]
) -> None:
    """Modulus/exponent encode to a PKCS#1 PEM that decodes back to the same numbers."""
    pem = rsa_public_key_to_pem(rsa_jwk["n"], rsa_jwk["e"])

    assert pem.startswith("-----BEGIN RSA PUBLIC KEY-----\n")
    assert pem.rstrip().endswith("-----END RSA PUBLIC KEY-----")

    decoded = load_public_key(RsaModulusKey(pem=pem)).public_numbers()
    expected = rsa_private_key.public_key().public_numbers()
    assert decoded.n == expected.n
    assert decoded.e == expected.e == 65537


def test_rsa_public_key_accepts_padded_base64url(rsa_jwk: dict[str, str]) -> None:
    """Padding on base64url members is tolerated and yields the same PEM."""
    padded_n = rsa_jwk["n"] + "=" * (-len(rsa_jwk["n"]) % 4)

    assert rsa_public_key_to_pem(padded_n, "AQAB") == rsa_public_key_to_pem(rsa_jwk["n"], "AQAB")


def test_cert_to_pem_wraps_lines_at_64_characters(certificate_b64: str) -> None:
    """Certificate PEM carries standard armor and 64-character body lines."""
    pem = cert_to_pem(certificate_b64)
    lines = pem.strip().split("\n")

    assert lines[0] == "-----BEGIN CERTIFICATE-----"
    assert lines[-1] == "-----END CERTIFICATE-----"
    body = lines[1:-1]
    assert all(len(line) == 64 for line in body[:-1])
    assert 0 < len(body[-1]) <= 64
    assert "".join(body) == certificate_b64


def test_certificate_pem_loads_the_subject_public_key(
    rsa_private_key: rsa.RSAPrivateKey, certificate_b64: str
) -> None:
    """Certificate PEM parses back into the key it was issued for."""
    public_key = load_public_key(CertificateKey(pem=cert_to_pem(certificate_b64)))

    assert public_key.public_numbers() == rsa_private_key.public_key().public_numbers()


def test_to_public_key_prefers_certificate_chain(
    rsa_jwk: dict[str, str], certificate_b64: str
) -> None:
    """Entries carrying both x5c and n/e are encoded from the certificate."""
    encoding = to_public_key({**rsa_jwk, "x5c": [certificate_b64, "ignored"]})

    assert isinstance(encoding, CertificateKey)
    assert encoding.kind == "certificate"


def test_to_public_key_falls_back_to_modulus_when_chain_empty(rsa_jwk: dict[str, str]) -> None:
    """An empty x5c list does not count as a certificate chain."""
    encoding = to_public_key({**rsa_jwk, "x5c": []})

    assert isinstance(encoding, RsaModulusKey)
    assert encoding.kind == "rsa_public_key"


@pytest.mark.parametrize(
    ("modulus", "exponent"),
    [
        ("!!not-base64!!", "AQAB"),
        ("", "AQAB"),
        (None, "AQAB"),
        ("AQAB", "AQAB"),
        ("sXch", "AA"),
    ],
)
def test_rsa_public_key_rejects_malformed_components(modulus: object, exponent: str) -> None:
    """Malformed or mathematically invalid components raise KeyFormatError."""
    with pytest.raises(KeyFormatError):
        rsa_public_key_to_pem(modulus, exponent)


def test_cert_to_pem_rejects_invalid_base64() -> None:
    """Certificate material that is not base64 raises KeyFormatError."""
    with pytest.raises(KeyFormatError):
        cert_to_pem("not base64 at all!")


def test_load_public_key_rejects_garbage_pem() -> None:
    """Unparseable PEM raises KeyFormatError rather than a library error."""
    with pytest.raises(KeyFormatError):
        load_public_key(RsaModulusKey(pem=_GARBAGE_PEM))
