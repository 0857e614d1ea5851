"""FastAPI application exposing the tracker usecases."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.api import activities as activities_router
from backend.api import costs as costs_router
from backend.api import products as products_router
from backend.api import reports as reports_router
from backend.api import statistics as statistics_router
from backend.api import stock as stock_router
from backend.logging_config import setup_logging
from backend.settings import Settings
from core.data_repository import get_engine
from core.errors import (
    ActivityNotFoundError,
    DomainValidationError,
    MonthlyCostNotFoundError,
    ProductNotFoundError,
    TrackerError,
)
from core.schema import ensure_domain_tables

logger = logging.getLogger(__name__)

_DEFAULT_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
]


@asynccontextmanager
async def _lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    if settings.app_env in {"development", "dev", "test"}:
        # Local SQLite/Postgres setups without Alembic
        await ensure_domain_tables(get_engine())
    yield


@lru_cache
def create_app() -> FastAPI:
    """Construit l'application FastAPI ainsi que tous les routeurs de domaine."""

    settings = Settings.load()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Activity Tracker API",
        version="1.0.0",
        description="""
## API de suivi de stock et d'activité

- **Produits** : catalogue, modèles, coloris, stock bas
- **Activités** : créations, ventes, corrections de stock
- **Stock** : mouvements signés par source
- **Rapports** : chiffre d'affaires, coûts matière, marge brute
- **Statistiques** : bénéfices par période, marges par produit
- **Coûts** : frais mensuels (expédition, marketing, généraux)
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=_lifespan,
    )
    app.state.settings = settings

    allowed_origins = settings.cors_allowed_origins or _DEFAULT_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials="*" not in allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DomainValidationError)
    async def _validation_error(request: Request, exc: DomainValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.message, "code": exc.code},
        )

    async def _not_found(request: Request, exc: TrackerError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": exc.message, "code": exc.code},
        )

    app.add_exception_handler(ProductNotFoundError, _not_found)
    app.add_exception_handler(ActivityNotFoundError, _not_found)
    app.add_exception_handler(MonthlyCostNotFoundError, _not_found)

    app.include_router(products_router.router)
    app.include_router(activities_router.router)
    app.include_router(stock_router.router)
    app.include_router(reports_router.router)
    app.include_router(statistics_router.router)
    app.include_router(costs_router.router)

    @app.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    logger.info("API ready (env=%s)", settings.app_env)
    return app


app = create_app()
