"""Unit tests for settings loading and structured logging setup."""

from __future__ import annotations

import io
import json

import pytest
import structlog

from jwks_client.config import configure_structlog, load_settings
from jwks_client.exceptions import ArgumentError


def test_load_settings_applies_keyword_overrides() -> None:
    """Keyword options override defaults and the result is immutable."""
    settings = load_settings(
        jwks_uri="https://idp.local/jwks",
        rate_limit=True,
        jwks_requests_per_minute=3,
        request_headers={"User-Agent": "svc"},
    )

    assert settings.rate_limit is True
    assert settings.jwks_requests_per_minute == 3
    assert settings.request_headers == {"User-Agent": "svc"}
    with pytest.raises(ValueError):
        settings.cache = True  # type: ignore[misc]


def test_load_settings_names_every_invalid_field() -> None:
    """ArgumentError detail lists each failing option."""
    with pytest.raises(ArgumentError) as exc_info:
        load_settings(jwks_uri="https://idp.local/jwks", cache_max_entries=0, timeout_seconds=0)

    assert "cache_max_entries" in exc_info.value.detail
    assert "timeout_seconds" in exc_info.value.detail


def test_configure_structlog_emits_json_with_standard_fields() -> None:
    """Configured loggers render JSON with level and component fields, filtered by level."""
    stream = io.StringIO()
    configure_structlog(log_level="INFO", file=stream)
    logger = structlog.get_logger("jwks_client.test")

    logger.debug("jwks_hidden_event")
    logger.info("jwks_keys_fetched", key_count=2)

    lines = stream.getvalue().strip().splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["event"] == "jwks_keys_fetched"
    assert payload["key_count"] == 2
    assert payload["level"] == "info"
    assert payload["component"] == "jwks-client"
    assert "timestamp" in payload


def test_load_settings_rejects_unknown_keyword_options() -> None:
    """Misspelled keyword options are still reported even though .env extras are ignored."""
    with pytest.raises(ArgumentError) as exc_info:
        load_settings(jwks_uri="https://idp.local/jwks", cahce=True)

    assert "cahce" in exc_info.value.detail
