"""Configuration applicative backend (API FastAPI) basée sur core.settings.AppSettings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from core.settings import AppSettings as CoreSettings


@dataclass(frozen=True)
class Settings(CoreSettings):
    log_level: str = "INFO"

    @staticmethod
    def load() -> "Settings":
        core = CoreSettings.load()
        return Settings(
            app_env=core.app_env,
            database_url=core.database_url,
            db_pool_size=core.db_pool_size,
            db_pool_max_overflow=core.db_pool_max_overflow,
            sql_echo=core.sql_echo,
            low_stock_threshold=core.low_stock_threshold,
            cors_allowed_origins=core.cors_allowed_origins,
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
