"""Configuration centralisée (core) chargée depuis l'environnement."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _bool_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class AppSettings:
    app_env: str = os.getenv("APP_ENV", os.getenv("ENV", "development")).lower()
    database_url: str = os.getenv("DATABASE_URL", "")
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "10"))
    db_pool_max_overflow: int = int(os.getenv("DB_POOL_MAX_OVERFLOW", "20"))
    sql_echo: bool = False
    low_stock_threshold: float = 5.0
    cors_allowed_origins: list[str] = None

    @staticmethod
    def load() -> "AppSettings":
        cors_raw = os.getenv("CORS_ALLOWED_ORIGINS")
        cors = [entry.strip() for entry in cors_raw.split(",") if entry.strip()] if cors_raw else []
        return AppSettings(
            app_env=os.getenv("APP_ENV", os.getenv("ENV", "development")).lower(),
            database_url=os.getenv("DATABASE_URL", ""),
            db_pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
            db_pool_max_overflow=int(os.getenv("DB_POOL_MAX_OVERFLOW", "20")),
            sql_echo=_bool_env("SQL_DEBUG"),
            low_stock_threshold=_float_env("LOW_STOCK_THRESHOLD", 5.0),
            cors_allowed_origins=cors,
        )
