# ecocart/domain/services/cart_ops.py
"""
Cart state transitions.

Every operation takes the current Cart and returns a new one (models are frozen),
with cart_eco_score recomputed. Validation happens before any change, so a
failing operation leaves the caller's cart untouched. Persistence and
concurrency live in CartService / CartRepo.
"""
from typing import List, Optional

from ecocart.core.errors import ConstraintViolation, InputValidationError, NotFoundError
from ecocart.domain.models.cart import Cart, CartLine
from ecocart.domain.models.product import Product
from ecocart.domain.services.cart_score import cart_score


def _with_items(cart: Cart, items: List[CartLine]) -> Cart:
    return cart.model_copy(update={"items": items, "cart_eco_score": cart_score(items)})


def _snapshot_line(product: Product, quantity: int) -> CartLine:
    return CartLine(
        product_id=product.product_id,
        quantity=quantity,
        locked_price=product.price,
        eco_score_snapshot=product.eco_score,
    )


def _require_positive(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise InputValidationError("Quantity must be a positive integer")


def add_item(cart: Cart, product: Product, quantity: int = 1) -> Cart:
    """
    New line with price/score snapshots, or more quantity on the existing line.
    Existing snapshots are kept as they were pinned.
    """
    _require_positive(quantity)
    existing = cart.line_for(product.product_id)
    if existing:
        items = [
            i.model_copy(update={"quantity": i.quantity + quantity}) if i.product_id == product.product_id else i
            for i in cart.items
        ]
    else:
        items = list(cart.items) + [_snapshot_line(product, quantity)]
    return _with_items(cart, items)


def set_quantity(cart: Cart, product_id: str, quantity: int) -> Cart:
    """quantity <= 0 removes the line."""
    if cart.line_for(product_id) is None:
        raise NotFoundError("Item not found")
    if quantity <= 0:
        return remove_item(cart, product_id)
    items = [i.model_copy(update={"quantity": quantity}) if i.product_id == product_id else i for i in cart.items]
    return _with_items(cart, items)


def remove_item(cart: Cart, product_id: str) -> Cart:
    if cart.line_for(product_id) is None:
        raise NotFoundError("Item not found")
    return _with_items(cart, [i for i in cart.items if i.product_id != product_id])


def clear(cart: Cart) -> Cart:
    return _with_items(cart, [])


def swap_item(
    cart: Cart,
    old_product_id: str,
    new_product: Optional[Product],
    old_product: Optional[Product],
) -> Cart:
    """
    Replace the line of `old_product_id` by `new_product` with the same quantity
    and fresh snapshots. All-or-nothing:
      - replacement product must exist
      - old line must be in the cart
      - original product must still exist
      - both products share a category
    Swapping a product for itself re-pins its line to the current price and score.
    If the replacement already has a line, the quantities are merged into one line
    snapshotted from the replacement's current price and score.
    """
    if new_product is None:
        raise NotFoundError("Replacement product not found")
    old_line = cart.line_for(old_product_id)
    if old_line is None:
        raise NotFoundError("Product not in cart")
    if old_product is None:
        raise NotFoundError("Original product missing")
    if old_product.category != new_product.category:
        raise ConstraintViolation("Replacement must be from the same category")

    items = [i for i in cart.items if i.product_id != old_product_id]
    existing = next((i for i in items if i.product_id == new_product.product_id), None)
    quantity = old_line.quantity + (existing.quantity if existing else 0)
    items = [i for i in items if i.product_id != new_product.product_id]
    items.append(_snapshot_line(new_product, quantity))
    return _with_items(cart, items)


def refresh_item(cart: Cart, product: Optional[Product]) -> Cart:
    """Re-pin one line's price/score snapshots to the product's current values."""
    if product is None:
        raise NotFoundError("Product not found")
    return swap_item(cart, product.product_id, product, product)
