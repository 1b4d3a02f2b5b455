# ecocart/domain/services/product_svc.py
import logging
import math
import uuid
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ecocart.core.config import get_settings
from ecocart.core.errors import InputValidationError, NotFoundError
from ecocart.domain.models.product import Product
from ecocart.domain.repositories.product_repo import ProductRepo
from ecocart.domain.services.alternatives_svc import find_alternatives, invalidate_categories
from ecocart.domain.services.eco_svc import derive_eco_fields
from ecocart.ml.classifier import ClassifierHandle

logger = logging.getLogger(__name__)

DERIVED_FIELDS = {"eco_score", "eco_breakdown", "ai_label", "ai_confidence", "ai_keywords"}


def _build(data: Dict[str, Any], classifier: Optional[ClassifierHandle]) -> Product:
    """
    Product from caller fields + freshly derived eco fields.
    Caller-supplied derived values are ignored.
    """
    fields = {k: v for k, v in data.items() if k not in DERIVED_FIELDS}
    try:
        return Product.model_validate({**fields, **derive_eco_fields(fields, classifier)})
    except ValidationError as e:
        raise InputValidationError(f"Invalid product: {e.errors(include_url=False)}") from e


class ProductService:
    def __init__(self, prod_repo: ProductRepo, classifier: Optional[ClassifierHandle] = None, redis=None):
        self.repo = prod_repo
        self.classifier = classifier
        self.redis = redis

    async def get(self, product_id: str) -> Product:
        product = await self.repo.get_by_product_id(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    async def list_products(
        self,
        *,
        category: Optional[str] = None,
        label: Optional[str] = None,
        min_score: Optional[int] = None,
        max_price: Optional[float] = None,
        sort: str = "newest",
        page: int = 1,
        limit: int = 12,
    ) -> Dict[str, Any]:
        filters: Dict[str, Any] = {}
        if category:
            filters["category"] = category
        if label:
            filters["ai_label"] = label
        if min_score is not None:
            filters["eco_score"] = {"$gte": min_score}
        if max_price is not None:
            filters["price"] = {"$lte": max_price}

        items, total = await self.repo.list_products(filters, sort=sort, skip=(page - 1) * limit, limit=limit)
        return {
            "page": page,
            "total": total,
            "pages": math.ceil(total / limit) if limit else 0,
            "products": items,
        }

    async def create(self, data: Dict[str, Any]) -> Product:
        data = {**data, "product_id": data.get("product_id") or uuid.uuid4().hex}
        product = _build(data, self.classifier)
        created = await self.repo.insert(product)
        await invalidate_categories(self.redis, created.category)
        logger.info(
            "product created product_id=%s eco_score=%s ai_label=%s",
            created.product_id, created.eco_score, created.ai_label,
        )
        return created

    async def update(self, product_id: str, changes: Dict[str, Any]) -> Product:
        """Partial update; eco fields are recomputed from the merged attributes."""
        current = await self.get(product_id)
        merged = {**current.model_dump(exclude=DERIVED_FIELDS), **changes, "product_id": product_id}
        updated = await self.repo.replace(_build(merged, self.classifier))
        if not updated:
            raise NotFoundError("Product not found")
        await invalidate_categories(self.redis, current.category, updated.category)
        logger.info(
            "product updated product_id=%s eco_score=%s->%s ai_label=%s->%s",
            product_id, current.eco_score, updated.eco_score, current.ai_label, updated.ai_label,
        )
        return updated

    async def delete(self, product_id: str) -> None:
        current = await self.get(product_id)
        if not await self.repo.delete(product_id):
            raise NotFoundError("Product not found")
        await invalidate_categories(self.redis, current.category)

    async def alternatives(self, product_id: str, limit: Optional[int] = None) -> Dict[str, Any]:
        base = await self.get(product_id)
        limit = limit or get_settings().product_alternatives_limit
        items = await find_alternatives(self.repo, base, limit=limit, redis=self.redis)
        return {
            "base": {
                "product_id": base.product_id,
                "name": base.name,
                "price": base.price,
                "eco_score": base.eco_score,
            },
            "alternatives": items,
            "count": len(items),
        }
