# ecocart/api/v1/routers/cart.py
from fastapi import APIRouter, Depends
import logging

from ecocart.api.deps import cart_service, current_user_id
from ecocart.api.v1.schemas.eco import CartAddIn, CartQuantityIn, CartRefreshIn, SwapIn
from ecocart.domain.models.cart import Cart
from ecocart.domain.services.cart_svc import CartService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])

# Greener-cart routes are declared before "/{product_id}" ones


@router.get("/greener")
async def greener_cart(user_id: str = Depends(current_user_id), svc: CartService = Depends(cart_service)):
    """Up to 3 greener alternatives per cart line (lines without any are omitted)."""
    return await svc.greener_suggestions(user_id)


@router.post("/swap")
async def swap_cart_item(body: SwapIn, user_id: str = Depends(current_user_id), svc: CartService = Depends(cart_service)):
    """Replace a line by a same-category product, keeping its quantity. All-or-nothing."""
    logger.info("Request: swap user_id=%s old=%s new=%s", user_id, body.old_product_id, body.new_product_id)
    cart = await svc.swap(user_id, body.old_product_id, body.new_product_id)
    return {"message": "Item swapped", "cart": cart.model_dump()}


@router.post("/refresh", response_model=Cart)
async def refresh_cart_item(body: CartRefreshIn, user_id: str = Depends(current_user_id), svc: CartService = Depends(cart_service)):
    """Re-pin a line to the product's current price and eco-score (same as swapping it for itself)."""
    return await svc.refresh(user_id, body.product_id)


@router.get("", response_model=Cart)
async def get_cart(user_id: str = Depends(current_user_id), svc: CartService = Depends(cart_service)):
    return await svc.get_cart(user_id)


@router.post("", response_model=Cart, status_code=201)
async def add_to_cart(body: CartAddIn, user_id: str = Depends(current_user_id), svc: CartService = Depends(cart_service)):
    return await svc.add_item(user_id, body.product_id, body.quantity)


@router.patch("", response_model=Cart)
async def update_quantity(body: CartQuantityIn, user_id: str = Depends(current_user_id), svc: CartService = Depends(cart_service)):
    return await svc.update_quantity(user_id, body.product_id, body.quantity)


@router.delete("/{product_id}", response_model=Cart)
async def remove_item(product_id: str, user_id: str = Depends(current_user_id), svc: CartService = Depends(cart_service)):
    return await svc.remove_item(user_id, product_id)


@router.delete("", response_model=Cart)
async def clear_cart(user_id: str = Depends(current_user_id), svc: CartService = Depends(cart_service)):
    return await svc.clear(user_id)
