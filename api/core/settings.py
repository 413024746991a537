"""
Environment-driven settings.

Each value is read when its getter is called, so tests can monkeypatch the
environment without reloading modules.
"""

from __future__ import annotations

import os
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_HTTP_PORT = 8080


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's sslmode query parameter.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def db_pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(1, _env_int("DB_POOL_MAX_SIZE", 5))


def db_command_timeout() -> float:
    timeout = _env_float("DB_COMMAND_TIMEOUT", 30.0)
    return timeout if timeout > 0 else 30.0


def auto_create_schema() -> bool:
    return _env_bool("AUTO_CREATE_SCHEMA", True)


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip() or "INFO"


def http_host() -> str:
    return os.environ.get("HTTP_HOST", "0.0.0.0").strip() or "0.0.0.0"


def http_port() -> int:
    return _env_int("HTTP_PORT", DEFAULT_HTTP_PORT)
