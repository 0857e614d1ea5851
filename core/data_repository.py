"""Accès SQL partagé (engine asyncio, lectures en DataFrame, écritures)."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import pandas as pd
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.sql.elements import ClauseElement

from .database_url import get_database_url, to_async_url
from .settings import AppSettings

SETTINGS = AppSettings.load()
DATABASE_URL = to_async_url(SETTINGS.database_url) if SETTINGS.database_url else get_database_url()
POOL_SIZE = SETTINGS.db_pool_size
POOL_MAX_OVERFLOW = SETTINGS.db_pool_max_overflow


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Retourne le moteur SQLAlchemy asyncio, mis en cache via functools."""
    kwargs: dict[str, Any] = {"pool_pre_ping": True, "echo": SETTINGS.sql_echo}
    # SQLite (fichier ou mémoire) n'accepte pas pool_size/max_overflow.
    if not DATABASE_URL.startswith("sqlite"):
        kwargs.update(
            {
                "pool_size": max(1, POOL_SIZE),
                "max_overflow": max(0, POOL_MAX_OVERFLOW),
            }
        )
    return create_async_engine(DATABASE_URL, **kwargs)


def _normalize_statement(sql: str | ClauseElement) -> ClauseElement:
    if isinstance(sql, str):
        return text(sql)
    if isinstance(sql, ClauseElement):
        return sql
    raise TypeError("sql must be a string or SQLAlchemy ClauseElement")


async def query_df(
    sql: str | ClauseElement,
    params: dict[str, Any] | None = None,
    *,
    engine: AsyncEngine | None = None,
) -> pd.DataFrame:
    """Exécute une requête SELECT et retourne le résultat sous forme de DataFrame Pandas."""
    statement = _normalize_statement(sql)
    if params is not None and not isinstance(params, dict):
        raise TypeError("params must be a mapping when provided")

    eng = engine or get_engine()
    async with eng.connect() as conn:
        result = await conn.execute(statement, params or {})
        columns = list(result.keys())
        rows = result.fetchall()

    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([tuple(row) for row in rows], columns=columns)


async def exec_sql(
    sql: str | ClauseElement,
    params: dict[str, Any] | list[dict[str, Any]] | None = None,
    *,
    engine: AsyncEngine | None = None,
) -> int:
    """
    Exécute une requête d'écriture (INSERT, UPDATE, DELETE) et renvoie le nombre de lignes touchées.
    Supporte l'exécution en lot si params est une liste.
    """
    statement = _normalize_statement(sql)
    eng = engine or get_engine()
    async with eng.begin() as conn:
        if params is None:
            result = await conn.execute(statement)
        else:
            result = await conn.execute(statement, params)
        return result.rowcount


def as_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    """Normalize a DataFrame into plain dictionaries, NaN/NaT mapped to None."""

    if df.empty:
        return []
    return [
        {key: (None if _is_missing(value) else value) for key, value in row.items()}
        for row in df.to_dict(orient="records")
    ]


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


__all__ = ["get_engine", "query_df", "exec_sql", "as_records"]
