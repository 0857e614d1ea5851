"""Schemas for product and catalogue endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from core.repositories.products import ProductType


class ProductOut(BaseModel):
    model_config = dict(from_attributes=True, protected_namespaces=())

    id: str
    unit_cost: float
    sale_price: float
    stock: float
    weight: Optional[float] = None
    name: Optional[str] = None
    type: Optional[ProductType] = None
    coloris: Optional[str] = None
    model_id: Optional[str] = None
    coloris_id: Optional[str] = None


class ProductCreateRequest(BaseModel):
    model_config = dict(protected_namespaces=())

    unit_cost: float
    sale_price: float
    stock: float = 0
    weight: Optional[float] = None
    name: Optional[str] = None
    type: Optional[ProductType] = None
    coloris: Optional[str] = None
    model_id: Optional[str] = None
    coloris_id: Optional[str] = None


class ProductUpdateRequest(BaseModel):
    """Partial patch; only the fields sent by the client are applied."""

    model_config = dict(protected_namespaces=())

    unit_cost: Optional[float] = None
    sale_price: Optional[float] = None
    stock: Optional[float] = None
    weight: Optional[float] = None
    name: Optional[str] = None
    type: Optional[ProductType] = None
    coloris: Optional[str] = None
    model_id: Optional[str] = None
    coloris_id: Optional[str] = None


class ProductListResponse(BaseModel):
    items: List[ProductOut]


class ProductModelOut(BaseModel):
    model_config = dict(from_attributes=True)

    id: str
    type: ProductType
    name: str


class ProductColorisOut(BaseModel):
    model_config = dict(from_attributes=True, protected_namespaces=())

    id: str
    model_id: str
    coloris: str


__all__ = [
    "ProductOut",
    "ProductCreateRequest",
    "ProductUpdateRequest",
    "ProductListResponse",
    "ProductModelOut",
    "ProductColorisOut",
]
