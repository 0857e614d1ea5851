"""Revenue report endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from backend.dependencies.repositories import get_activity_repository, get_product_repository
from backend.schemas.reports import RevenueReportResponse
from core.repositories.activities import ActivityRepository
from core.repositories.products import ProductRepository
from core.revenue_service import RevenuePeriod, compute_revenue

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/revenue", response_model=RevenueReportResponse)
async def revenue_report(
    start_date: str = Query(...),
    end_date: str = Query(...),
    period: RevenuePeriod = Query(RevenuePeriod.CUSTOM),
    activity_repo: ActivityRepository = Depends(get_activity_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
):
    report = await compute_revenue(activity_repo, product_repo, period, start_date, end_date)
    return RevenueReportResponse.model_validate(report)
