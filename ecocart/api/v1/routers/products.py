# ecocart/api/v1/routers/products.py
from fastapi import APIRouter, Depends, Query
from typing import Literal, Optional
import time
import logging

from ecocart.api.deps import product_service
from ecocart.api.v1.schemas.eco import (
    AlternativesOut,
    ExplanationOut,
    ProductIn,
    ProductListOut,
    ProductUpdate,
)
from ecocart.core.config import get_settings
from ecocart.domain.models.product import Product
from ecocart.domain.services.explanation_svc import explain_product
from ecocart.domain.services.product_svc import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

SortOption = Literal["newest", "eco_desc", "eco_asc", "price_asc", "price_desc"]


@router.get("", response_model=ProductListOut)
async def list_products(
    category: Optional[str] = Query(None),
    label: Optional[Literal["high", "medium", "low"]] = Query(None),
    min_score: Optional[int] = Query(None, ge=0, le=100),
    max_price: Optional[float] = Query(None, ge=0),
    sort: SortOption = Query("newest"),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    svc: ProductService = Depends(product_service),
):
    return await svc.list_products(
        category=category, label=label, min_score=min_score, max_price=max_price,
        sort=sort, page=page, limit=limit,
    )


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, svc: ProductService = Depends(product_service)):
    return await svc.get(product_id)


@router.post("", response_model=Product, status_code=201)
async def create_product(body: ProductIn, svc: ProductService = Depends(product_service)):
    """Create a product; eco_score, breakdown and AI label are computed here, never taken from the body."""
    return await svc.create(body.model_dump())


@router.put("/{product_id}", response_model=Product)
async def update_product(product_id: str, body: ProductUpdate, svc: ProductService = Depends(product_service)):
    """Partial update; derived eco fields are recomputed."""
    return await svc.update(product_id, body.model_dump(exclude_unset=True))


@router.delete("/{product_id}")
async def delete_product(product_id: str, svc: ProductService = Depends(product_service)):
    await svc.delete(product_id)
    return {"message": "Deleted"}


@router.get("/{product_id}/alternatives", response_model=AlternativesOut)
async def product_alternatives(
    product_id: str,
    limit: Optional[int] = Query(None, ge=1, le=get_settings().max_alternatives_limit),
    svc: ProductService = Depends(product_service),
):
    """
    Greener alternatives: same category, higher eco-score, price within +/-20%.
    No alternative is a normal outcome (empty list, 200).
    """
    logger.info("Request: product_alternatives product_id=%s, limit=%s", product_id, limit)
    start_time = time.perf_counter()

    res = await svc.alternatives(product_id, limit)

    logger.info(
        "Response: product_alternatives product_id=%s, count=%s, elapsed_time=%.4fs",
        product_id, res["count"], time.perf_counter() - start_time,
    )
    return res


@router.get("/{product_id}/explanation", response_model=ExplanationOut)
async def product_explanation(
    product_id: str,
    use_llm: bool = Query(False, description="Rewrite the template explanation with the LLM (falls back on failure)"),
    svc: ProductService = Depends(product_service),
):
    product = await svc.get(product_id)
    return await explain_product(product, get_settings(), use_llm=use_llm)
