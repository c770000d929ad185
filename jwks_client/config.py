"""Client settings and logging configuration."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, Literal, TextIO

import structlog
from pydantic import AnyHttpUrl, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jwks_client.exceptions import ArgumentError

DEFAULT_CACHE_MAX_ENTRIES = 5
DEFAULT_CACHE_MAX_AGE_SECONDS = 10 * 60 * 60
DEFAULT_JWKS_REQUESTS_PER_MINUTE = 10
_RESERVED_AGENT_OPTIONS = {
    "verify": "strict_ssl",
    "headers": "request_headers",
    "timeout": "timeout_seconds",
}


class JwksClientSettings(BaseSettings):
    """Immutable JWKS client configuration, loadable from `JWKS_*` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="JWKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    jwks_uri: AnyHttpUrl
    cache: bool = False
    cache_max_entries: int = Field(default=DEFAULT_CACHE_MAX_ENTRIES, ge=1)
    cache_max_age: float = Field(default=DEFAULT_CACHE_MAX_AGE_SECONDS, gt=0)
    rate_limit: bool = False
    jwks_requests_per_minute: int = Field(default=DEFAULT_JWKS_REQUESTS_PER_MINUTE, ge=1)
    strict_ssl: bool = True
    request_headers: dict[str, str] = Field(default_factory=dict)
    request_agent_options: dict[str, Any] = Field(default_factory=dict)
    timeout_seconds: float = Field(default=5.0, gt=0)

    @field_validator("request_agent_options")
    @classmethod
    def reject_reserved_agent_options(cls, value: dict[str, Any]) -> dict[str, Any]:
        """Keep transport options that have a dedicated setting out of the passthrough map."""
        for name, setting in _RESERVED_AGENT_OPTIONS.items():
            if name in value:
                raise ValueError(f"'{name}' is configured through '{setting}'.")
        return value


def load_settings(**options: Any) -> JwksClientSettings:
    """Build settings from keyword options and environment, mapping failures to ArgumentError."""
    unknown = sorted(set(options) - set(JwksClientSettings.model_fields))
    if unknown:
        raise ArgumentError(f"Unknown JWKS client options: {', '.join(unknown)}")
    try:
        return JwksClientSettings(**options)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ArgumentError(f"Invalid JWKS client options: {problems}") from exc


def _standard_log_fields(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Inject required structured logging fields."""
    event_dict.setdefault("component", "jwks-client")
    event_dict.setdefault("timestamp", datetime.now(UTC).isoformat())
    return event_dict


def configure_structlog(
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    json_output: bool = True,
    file: TextIO | None = None,
) -> None:
    """Configure structlog for JSON (or console) output with standard fields.

    Loggers are not cached on first use so a host application can reconfigure
    after importing this package.
    """
    renderer: Any = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            _standard_log_fields,
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level, logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=file),
        cache_logger_on_first_use=False,
    )
