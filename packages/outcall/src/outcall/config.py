"""Settings for building a call executor from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

import httpx

from outcall.errors import ConfigurationError


def require_setting(environ: Mapping[str, str], key: str) -> str:
    """Return the value for *key*, raising if it is missing or empty."""
    value = environ.get(key)
    if not value:
        raise ConfigurationError(f"{key} is null or empty in configuration")
    return value


def setting_or_default(environ: Mapping[str, str], key: str, default: str) -> str:
    return environ.get(key) or default


def to_url(value: str) -> httpx.URL:
    """Parse an absolute http(s) URL."""
    if not value:
        raise ConfigurationError("The URL can't be empty")
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"The URL {value} is in wrong format", cause=exc) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"The URL {value} is in wrong format")
    return url


@dataclass(frozen=True)
class ClientSettings:
    """Connection and logging settings for one external service."""

    base_url: str
    timeout: float = 30.0
    component: str = "CallExecutor"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> ClientSettings:
        """Build settings from ``OUTCALL_*`` environment variables."""
        env = environ if environ is not None else os.environ

        base_url = str(to_url(require_setting(env, "OUTCALL_BASE_URL")))

        raw_timeout = setting_or_default(env, "OUTCALL_TIMEOUT", "30")
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"OUTCALL_TIMEOUT must be a number of seconds, got {raw_timeout!r}",
                cause=exc,
            ) from exc

        return cls(
            base_url=base_url,
            timeout=timeout,
            component=setting_or_default(env, "OUTCALL_COMPONENT", "CallExecutor"),
            log_level=setting_or_default(env, "OUTCALL_LOG_LEVEL", "INFO").upper(),
        )
