# ecocart/domain/services/cart_svc.py
import logging
from typing import Any, Callable, Dict, List

from ecocart.core.config import get_settings
from ecocart.core.errors import NotFoundError
from ecocart.domain.models.cart import Cart
from ecocart.domain.repositories.cart_repo import CartRepo
from ecocart.domain.repositories.product_repo import ProductRepo
from ecocart.domain.services import cart_ops
from ecocart.domain.services.alternatives_svc import find_alternatives
from ecocart.utils.retry import cart_conflict_retry

logger = logging.getLogger(__name__)


class CartService:
    """
    Cart use cases. Each command is one read-modify-write of the user's cart
    document: read (version N) -> pure cart_ops transition -> conditional save.
    On CartConflict the whole cycle is retried from a fresh read.
    Product lookups happen before the cycle since they do not depend on the cart.
    """

    def __init__(self, cart_repo: CartRepo, prod_repo: ProductRepo, redis=None):
        self.carts = cart_repo
        self.products = prod_repo
        self.redis = redis

    # query
    async def get_cart(self, user_id: str) -> Cart:
        return await self.carts.get(user_id) or Cart(user_id=user_id)

    async def _mutate(self, user_id: str, op: str, transition: Callable[[Cart], Cart], *, create: bool = False) -> Cart:
        @cart_conflict_retry()
        async def attempt() -> Cart:
            current = await self.carts.get(user_id)
            if current is None:
                if not create:
                    raise NotFoundError("Cart not found")
                current = Cart(user_id=user_id)
            return await self.carts.save(transition(current))

        cart = await attempt()
        logger.info(
            "cart %s user_id=%s lines=%s cart_eco_score=%s version=%s",
            op, user_id, len(cart.items), cart.cart_eco_score, cart.version,
        )
        return cart

    # commands
    async def add_item(self, user_id: str, product_id: str, quantity: int = 1) -> Cart:
        product = await self.products.get_by_product_id(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return await self._mutate(user_id, "add", lambda c: cart_ops.add_item(c, product, quantity), create=True)

    async def update_quantity(self, user_id: str, product_id: str, quantity: int) -> Cart:
        return await self._mutate(user_id, "update", lambda c: cart_ops.set_quantity(c, product_id, quantity))

    async def remove_item(self, user_id: str, product_id: str) -> Cart:
        return await self._mutate(user_id, "remove", lambda c: cart_ops.remove_item(c, product_id))

    async def clear(self, user_id: str) -> Cart:
        if await self.carts.get(user_id) is None:
            return Cart(user_id=user_id)
        return await self._mutate(user_id, "clear", cart_ops.clear)

    async def swap(self, user_id: str, old_product_id: str, new_product_id: str) -> Cart:
        found = await self.products.get_many_by_product_ids([old_product_id, new_product_id])
        return await self._mutate(
            user_id,
            "swap",
            lambda c: cart_ops.swap_item(c, old_product_id, found.get(new_product_id), found.get(old_product_id)),
        )

    async def refresh(self, user_id: str, product_id: str) -> Cart:
        """Re-pin a line's snapshots to the product's current price and eco-score."""
        product = await self.products.get_by_product_id(product_id)
        return await self._mutate(user_id, "refresh", lambda c: cart_ops.refresh_item(c, product))

    async def greener_suggestions(self, user_id: str) -> Dict[str, Any]:
        """
        For each cart line, greener same-category alternatives of the live product.
        Lines without any alternative are left out.
        """
        cart = await self.get_cart(user_id)
        if not cart.items:
            return {"count": 0, "suggestions": [], "message": "Cart is empty"}

        limit = get_settings().cart_alternatives_limit
        live = await self.products.get_many_by_product_ids([i.product_id for i in cart.items])

        suggestions: List[Dict[str, Any]] = []
        for line in cart.items:
            current = live.get(line.product_id)
            if current is None:
                logger.warning("greener cart: product_id=%s in cart but not in catalog", line.product_id)
                continue
            alternatives = await find_alternatives(self.products, current, limit=limit, redis=self.redis)
            if not alternatives:
                continue
            suggestions.append({
                "current": {
                    "product_id": current.product_id,
                    "name": current.name,
                    "price": current.price,
                    "eco_score": current.eco_score,
                    "quantity": line.quantity,
                },
                "alternatives": [a.model_dump() for a in alternatives],
            })

        return {"count": len(suggestions), "suggestions": suggestions}
