"""Utilities to assemble the async DATABASE_URL used by the repositories."""

from __future__ import annotations

import os
from urllib.parse import quote_plus

_ASYNC_DRIVERS = {
    "postgresql": "postgresql+asyncpg",
    "postgres": "postgresql+asyncpg",
    "postgresql+psycopg2": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def _get_env(name: str) -> str | None:
    """Return the environment variable when it is a non-empty string."""

    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def to_async_url(url: str) -> str:
    """Swap a sync driver prefix (``postgresql://``, ``sqlite://``) for its asyncio twin."""

    scheme, sep, rest = url.partition("://")
    if not sep:
        return url
    return f"{_ASYNC_DRIVERS.get(scheme, scheme)}://{rest}"


def get_database_url() -> str:
    """Build a SQLAlchemy asyncio compatible DATABASE_URL.

    Priority order:

    1. ``DATABASE_URL`` (already complete connection string, driver upgraded to asyncio).
    2. Individual ``POSTGRES_*`` / ``DB_*`` environment variables.
    3. Sensible local defaults.
    """

    explicit_url = _get_env("DATABASE_URL")
    if explicit_url:
        return to_async_url(explicit_url)

    user = _get_env("POSTGRES_USER") or "postgres"
    password = _get_env("POSTGRES_PASSWORD")
    database = _get_env("POSTGRES_DB") or _get_env("DB_NAME") or "tracker"
    host = _get_env("DB_HOST") or _get_env("POSTGRES_HOST") or "localhost"
    port = _get_env("DB_PORT") or _get_env("POSTGRES_PORT") or "5432"

    user_part = quote_plus(user)
    if password is None:
        auth_part = user_part
    else:
        auth_part = f"{user_part}:{quote_plus(password)}"

    return f"postgresql+asyncpg://{auth_part}@{host}:{port}/{database}"


__all__ = ["get_database_url", "to_async_url"]
