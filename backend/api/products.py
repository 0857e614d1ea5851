"""Product & catalogue endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend.dependencies.repositories import get_product_repository
from backend.schemas.products import (
    ProductColorisOut,
    ProductCreateRequest,
    ProductListResponse,
    ProductModelOut,
    ProductOut,
    ProductUpdateRequest,
)
from core import product_service
from core.repositories.products import Product, ProductRepository, ProductType

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(repo: ProductRepository = Depends(get_product_repository)):
    products = await product_service.list_products(repo)
    return ProductListResponse(items=[ProductOut.model_validate(p) for p in products])


@router.get("/low-stock", response_model=ProductListResponse)
async def list_low_stock_products(
    threshold: float | None = Query(default=None, ge=0),
    repo: ProductRepository = Depends(get_product_repository),
):
    products = await product_service.list_low_stock_products(repo, threshold)
    return ProductListResponse(items=[ProductOut.model_validate(p) for p in products])


@router.get("/models", response_model=list[ProductModelOut])
async def list_models(
    type: ProductType = Query(...),
    repo: ProductRepository = Depends(get_product_repository),
):
    models = await product_service.list_models_by_type(repo, type)
    return [ProductModelOut.model_validate(m) for m in models]


@router.get("/models/{model_id}", response_model=ProductModelOut)
async def get_model(model_id: str, repo: ProductRepository = Depends(get_product_repository)):
    model = await product_service.get_model_by_id(repo, model_id)
    if model is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Model {model_id} not found")
    return ProductModelOut.model_validate(model)


@router.get("/models/{model_id}/coloris", response_model=list[ProductColorisOut])
async def list_coloris(model_id: str, repo: ProductRepository = Depends(get_product_repository)):
    coloris = await product_service.list_coloris_by_model(repo, model_id)
    return [ProductColorisOut.model_validate(c) for c in coloris]


@router.get("/coloris/{coloris_id}", response_model=ProductColorisOut)
async def get_coloris(coloris_id: str, repo: ProductRepository = Depends(get_product_repository)):
    coloris = await product_service.get_coloris_by_id(repo, coloris_id)
    if coloris is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Coloris {coloris_id} not found")
    return ProductColorisOut.model_validate(coloris)


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: str, repo: ProductRepository = Depends(get_product_repository)):
    product = await product_service.get_product_by_id(repo, product_id)
    return ProductOut.model_validate(product)


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductCreateRequest,
    repo: ProductRepository = Depends(get_product_repository),
):
    created = await product_service.create_product(repo, Product(id=None, **payload.model_dump()))
    return ProductOut.model_validate(created)


@router.patch("/{product_id}", response_model=ProductOut)
async def update_product(
    product_id: str,
    payload: ProductUpdateRequest,
    repo: ProductRepository = Depends(get_product_repository),
):
    updated = await product_service.update_product(
        repo, product_id, payload.model_dump(exclude_unset=True)
    )
    return ProductOut.model_validate(updated)
