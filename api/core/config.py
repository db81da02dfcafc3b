"""
Environment-backed settings.

Only the DSN comes from the environment. Pool sizing and the listen address
are fixed for this service.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

LISTEN_HOST = "127.0.0.1"
LISTEN_PORT = 3000

POOL_MAX_SIZE = 5
POOL_MIN_SIZE = 1
POOL_ACQUIRE_TIMEOUT = 30.0
COMMAND_TIMEOUT = 30.0


class ConfigError(RuntimeError):
    """Raised when required configuration is missing; the process must not start."""


@dataclass(frozen=True)
class PoolConfig:
    dsn: str
    max_size: int = POOL_MAX_SIZE
    min_size: int = POOL_MIN_SIZE
    acquire_timeout: float = POOL_ACQUIRE_TIMEOUT
    command_timeout: float = COMMAND_TIMEOUT


def _sanitize_database_url(url: str) -> str:
    # asyncpg does not understand libpq's sslmode query parameter.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise ConfigError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def pool_config() -> PoolConfig:
    return PoolConfig(dsn=database_url())


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
