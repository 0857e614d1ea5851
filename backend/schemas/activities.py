"""Schemas for activity endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from core.repositories.activities import ActivityType


class ActivityOut(BaseModel):
    model_config = dict(from_attributes=True)

    id: str
    date: str
    type: ActivityType
    quantity: float
    amount: float
    product_id: Optional[str] = None
    note: Optional[str] = None


class ActivityCreateRequest(BaseModel):
    date: str
    type: ActivityType
    quantity: float
    amount: float
    product_id: Optional[str] = None
    note: Optional[str] = None


class ActivityUpdateRequest(BaseModel):
    """Partial patch; ``product_id: null`` explicitly clears the product."""

    date: Optional[str] = None
    type: Optional[ActivityType] = None
    quantity: Optional[float] = None
    amount: Optional[float] = None
    product_id: Optional[str] = None
    note: Optional[str] = None


class ActivityPageResponse(BaseModel):
    items: List[ActivityOut]
    total: int
    page: int
    page_size: int
    total_pages: int


__all__ = [
    "ActivityOut",
    "ActivityCreateRequest",
    "ActivityUpdateRequest",
    "ActivityPageResponse",
]
