# ecocart/domain/repositories/product_repo.py

from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from ecocart.core.errors import ConstraintViolation
from ecocart.domain.models.product import Product

# Catalog sort options exposed by GET /products
SORTS: Dict[str, List[Tuple[str, int]]] = {
    "eco_desc": [("eco_score", DESCENDING), ("product_id", ASCENDING)],
    "eco_asc": [("eco_score", ASCENDING), ("product_id", ASCENDING)],
    "price_asc": [("price", ASCENDING), ("product_id", ASCENDING)],
    "price_desc": [("price", DESCENDING), ("product_id", ASCENDING)],
    "newest": [("created_at", DESCENDING), ("product_id", ASCENDING)],
}

class ProductRepo:
    """
    Product repository backed by the 'products' collection.
    Documents are keyed by `product_id`; Mongo's _id is never exposed.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    async def ensure_indexes(self) -> None:
        await self.col.create_index("product_id", unique=True)
        # Alternatives query: category equality + eco_score range/sort
        await self.col.create_index([("category", ASCENDING), ("eco_score", DESCENDING)])

    async def get_by_product_id(self, product_id: str) -> Optional[Product]:
        doc = await self.col.find_one({"product_id": product_id}, {"_id": 0})
        return Product.model_validate(doc) if doc else None

    async def get_many_by_product_ids(self, ids: List[str]) -> Dict[str, Product]:
        cursor = self.col.find({"product_id": {"$in": ids}}, {"_id": 0})
        return {doc["product_id"]: Product.model_validate(doc) async for doc in cursor}

    async def list_products(
        self,
        filters: Dict[str, Any],
        *,
        sort: str = "newest",
        skip: int = 0,
        limit: int = 12,
    ) -> Tuple[List[Product], int]:
        cursor = self.col.find(filters, {"_id": 0}).sort(SORTS.get(sort, SORTS["newest"])).skip(skip).limit(limit)
        items = [Product.model_validate(doc) async for doc in cursor]
        total = await self.col.count_documents(filters)
        return items, total

    async def insert(self, product: Product) -> Product:
        now = datetime.now(timezone.utc)
        product = product.model_copy(update={"created_at": now, "updated_at": now})
        try:
            await self.col.insert_one(product.model_dump())
        except DuplicateKeyError as e:
            raise ConstraintViolation(f"Product {product.product_id} already exists") from e
        return product

    async def replace(self, product: Product) -> Optional[Product]:
        """Overwrite every field but product_id/created_at. None if the product is gone."""
        data = product.model_dump(exclude={"product_id", "created_at"})
        data["updated_at"] = datetime.now(timezone.utc)
        doc = await self.col.find_one_and_update(
            {"product_id": product.product_id},
            {"$set": data},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
        return Product.model_validate(doc) if doc else None

    async def delete(self, product_id: str) -> bool:
        res = await self.col.delete_one({"product_id": product_id})
        return res.deleted_count == 1

    async def find_by_category_price_range(
        self,
        category: str,
        min_price: float,
        max_price: float,
        *,
        exclude_id: str,
        min_score: int,
        limit: int,
    ) -> List[Product]:
        """
        Candidates for greener alternatives: same category, eco_score > min_score,
        min_price <= price <= max_price, not `exclude_id`.
        Sorted by eco_score desc then product_id asc.
        """
        cursor = (
            self.col.find(
                {
                    "category": category,
                    "eco_score": {"$gt": min_score},
                    "price": {"$gte": min_price, "$lte": max_price},
                    "product_id": {"$ne": exclude_id},
                },
                {"_id": 0},
            )
            .sort([("eco_score", DESCENDING), ("product_id", ASCENDING)])
            .limit(limit)
        )
        return [Product.model_validate(doc) async for doc in cursor]
