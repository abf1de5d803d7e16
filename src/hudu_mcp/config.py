"""Process configuration — backend connection and server settings.

Values come from the environment (optionally seeded from a ``.env`` file).
A missing or malformed value is fatal at startup; nothing here is consulted
per request.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, ValidationError, field_validator

DEFAULT_TIMEOUT = 30.0
DEFAULT_PORT = 3000
DEFAULT_KEEPALIVE = 30.0

ENV_BASE_URL = "HUDU_BASE_URL"
ENV_API_KEY = "HUDU_API_KEY"
ENV_TIMEOUT = "HUDU_TIMEOUT"
ENV_PORT = "MCP_SERVER_PORT"
ENV_LOG_LEVEL = "HUDU_MCP_LOG_LEVEL"


class ConfigError(Exception):
    """Configuration is missing or invalid."""


class HuduConfig(BaseModel):
    """Connection settings for the Hudu REST API."""

    model_config = {"frozen": True}

    base_url: HttpUrl
    api_key: str = Field(min_length=1)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("api_key")
    @classmethod
    def _strip_key(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "api_key must not be blank"
            raise ValueError(msg)
        return value

    @property
    def api_root(self) -> str:
        """``{base_url}/api/v1`` with no trailing slash."""
        return str(self.base_url).rstrip("/") + "/api/v1"


class ServerConfig(BaseModel):
    """Listener settings for the HTTP transport."""

    host: str = "0.0.0.0"
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    keepalive_interval: float = Field(default=DEFAULT_KEEPALIVE, gt=0)


def load_config(env: Mapping[str, str] | None = None) -> HuduConfig:
    """Build a :class:`HuduConfig` from environment variables.

    ``HUDU_TIMEOUT`` is expressed in milliseconds. When *env* is omitted the
    process environment is used, after loading a ``.env`` file if present.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    base_url = env.get(ENV_BASE_URL, "")
    api_key = env.get(ENV_API_KEY, "")
    if not base_url:
        msg = f"{ENV_BASE_URL} is not set"
        raise ConfigError(msg)
    if not api_key:
        msg = f"{ENV_API_KEY} is not set"
        raise ConfigError(msg)

    timeout = DEFAULT_TIMEOUT
    raw_timeout = env.get(ENV_TIMEOUT)
    if raw_timeout:
        try:
            timeout = int(raw_timeout) / 1000
        except ValueError as exc:
            msg = f"{ENV_TIMEOUT} must be an integer number of milliseconds, got {raw_timeout!r}"
            raise ConfigError(msg) from exc

    try:
        return HuduConfig(base_url=base_url, api_key=api_key, timeout=timeout)  # type: ignore[arg-type]
    except ValidationError as exc:
        raise ConfigError(_summarize(exc)) from exc


def default_port(env: Mapping[str, str] | None = None) -> int:
    """Return the HTTP port from ``MCP_SERVER_PORT`` or the default."""
    env = os.environ if env is None else env
    raw = env.get(ENV_PORT)
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"{ENV_PORT} must be an integer, got {raw!r}"
        raise ConfigError(msg) from exc


def configure_logging(level: str | None = None) -> None:
    """Route all log output to stderr; stdout carries the stdio protocol."""
    name = (level or os.environ.get(ENV_LOG_LEVEL) or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}")
    return "Invalid configuration — " + "; ".join(parts)
