"""Business statistics endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from backend.dependencies.repositories import get_activity_repository, get_product_repository
from backend.schemas.statistics import (
    BusinessStatisticsResponse,
    PeriodStatisticsOut,
    ProductMarginOut,
    TotalResponse,
)
from core import activity_service, statistics_service
from core.repositories.activities import ActivityRepository
from core.repositories.products import ProductRepository
from core.statistics_service import StatisticsPeriod

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("/profits", response_model=list[PeriodStatisticsOut])
async def profits_by_period(
    period: StatisticsPeriod = Query(StatisticsPeriod.MONTHLY),
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    activity_repo: ActivityRepository = Depends(get_activity_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
):
    stats = await statistics_service.compute_profits_by_period(
        activity_repo, product_repo, period, start_date, end_date
    )
    return [PeriodStatisticsOut.model_validate(s) for s in stats]


@router.get("/margins", response_model=list[ProductMarginOut])
async def product_margins(
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    activity_repo: ActivityRepository = Depends(get_activity_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
):
    margins = await statistics_service.compute_product_margins(
        activity_repo, product_repo, start_date, end_date
    )
    return [ProductMarginOut.model_validate(m) for m in margins]


@router.get("/summary", response_model=BusinessStatisticsResponse)
async def business_summary(
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    activity_repo: ActivityRepository = Depends(get_activity_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
):
    stats = await statistics_service.compute_business_statistics(
        activity_repo, product_repo, start_date, end_date
    )
    return BusinessStatisticsResponse.model_validate(stats)


@router.get("/sales", response_model=TotalResponse)
async def total_sales(
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    activity_repo: ActivityRepository = Depends(get_activity_repository),
):
    value = await activity_service.compute_total_sales(activity_repo, start_date, end_date)
    return TotalResponse(value=value)


@router.get("/profit", response_model=TotalResponse)
async def total_profit(
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    activity_repo: ActivityRepository = Depends(get_activity_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
):
    value = await activity_service.compute_profit(activity_repo, product_repo, start_date, end_date)
    return TotalResponse(value=value)


@router.get("/creations", response_model=TotalResponse)
async def total_creations(
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    activity_repo: ActivityRepository = Depends(get_activity_repository),
):
    value = await statistics_service.compute_total_creations(activity_repo, start_date, end_date)
    return TotalResponse(value=value)
