"""Activity endpoints (journal, pagination, creation, correction)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from backend.dependencies.repositories import get_activity_repository, get_product_repository
from backend.schemas.activities import (
    ActivityCreateRequest,
    ActivityOut,
    ActivityPageResponse,
    ActivityUpdateRequest,
)
from core import activity_service
from core.repositories.activities import Activity, ActivityRepository, ActivityType
from core.repositories.products import ProductRepository

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("", response_model=ActivityPageResponse)
async def list_activities(
    start_date: str | None = Query(default=None),
    end_date: str | None = Query(default=None),
    type: ActivityType | None = Query(default=None),
    product_id: str | None = Query(default=None),
    page: int = Query(1),
    page_size: int = Query(activity_service.DEFAULT_PAGE_SIZE),
    repo: ActivityRepository = Depends(get_activity_repository),
):
    result = await activity_service.list_activities_paginated(
        repo, start_date, end_date, type, product_id, page, page_size
    )
    return ActivityPageResponse(
        items=[ActivityOut.model_validate(a) for a in result.items],
        total=result.total,
        page=result.page,
        page_size=result.per_page,
        total_pages=result.total_pages,
    )


@router.get("/recent", response_model=list[ActivityOut])
async def list_recent_activities(
    limit: int = Query(activity_service.DEFAULT_RECENT_LIMIT, ge=1, le=500),
    repo: ActivityRepository = Depends(get_activity_repository),
):
    activities = await activity_service.list_recent_activities(repo, limit)
    return [ActivityOut.model_validate(a) for a in activities]


@router.get("/stock", response_model=dict[str, float])
async def stock_from_activities(
    product_id: str | None = Query(default=None),
    repo: ActivityRepository = Depends(get_activity_repository),
):
    return await activity_service.compute_stock_from_activities(repo, product_id)


@router.post("", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
async def create_activity(
    payload: ActivityCreateRequest,
    activity_repo: ActivityRepository = Depends(get_activity_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
):
    created = await activity_service.add_activity(
        activity_repo, product_repo, Activity(id=None, **payload.model_dump())
    )
    return ActivityOut.model_validate(created)


@router.patch("/{activity_id}", response_model=ActivityOut)
async def update_activity(
    activity_id: str,
    payload: ActivityUpdateRequest,
    activity_repo: ActivityRepository = Depends(get_activity_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
):
    updated = await activity_service.update_activity(
        activity_repo, product_repo, activity_id, payload.model_dump(exclude_unset=True)
    )
    return ActivityOut.model_validate(updated)
