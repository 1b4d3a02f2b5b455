# ecocart/domain/repositories/cart_repo.py

from __future__ import annotations
from typing import Optional
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from ecocart.core.errors import CartConflict
from ecocart.domain.models.cart import Cart

class CartRepo:
    """
    Cart repository backed by the 'carts' collection (one document per user).
    Writes are compare-and-swap on `version`:
      - version 0  -> insert, guarded by the unique user_id index
      - version N  -> update_one({user_id, version: N}) setting version N+1
    A lost race raises CartConflict; the service retries from a fresh read.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "carts"):
        self.col = db[collection_name]

    async def ensure_indexes(self) -> None:
        await self.col.create_index("user_id", unique=True)

    async def get(self, user_id: str) -> Optional[Cart]:
        doc = await self.col.find_one({"user_id": user_id}, {"_id": 0})
        return Cart.model_validate(doc) if doc else None

    async def save(self, cart: Cart) -> Cart:
        """
        Persist `cart`, whose `version` is the one it was read at.
        Returns the stored cart (version bumped).
        """
        stored = cart.model_copy(update={"version": cart.version + 1, "updated_at": datetime.now(timezone.utc)})

        if cart.version == 0:
            try:
                await self.col.insert_one(stored.model_dump())
            except DuplicateKeyError as e:
                raise CartConflict(f"Cart for user {cart.user_id} was created concurrently") from e
            return stored

        res = await self.col.update_one(
            {"user_id": cart.user_id, "version": cart.version},
            {
                "$set": {
                    "items": [i.model_dump() for i in stored.items],
                    "cart_eco_score": stored.cart_eco_score,
                    "version": stored.version,
                    "updated_at": stored.updated_at,
                }
            },
        )
        if res.matched_count == 0:
            raise CartConflict(f"Cart for user {cart.user_id} was modified concurrently")
        return stored
