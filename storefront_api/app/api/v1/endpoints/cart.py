"""
Cart endpoints for API v1.

All routes operate on the cart selected by the ``X-Cart-Session``
header (see ``api.deps.get_cart_session``).  Service errors are mapped
to status codes by the handlers registered in ``main``: a missing
product id is a 400, an unknown product or entry a 404 and a store
failure a 500.
"""

from fastapi import APIRouter, Depends, Path, status

from storefront_api.app.api.deps import get_cart_session
from storefront_api.app.schemas.cart import CartItemCreate, CartRead, CartUpdate
from storefront_api.app.services.cart_service import CartService

router = APIRouter()


@router.get("", response_model=CartRead)
async def get_cart(session_id: str = Depends(get_cart_session)) -> CartRead:
    """Return the cart's line items and total."""
    return await CartService.get_cart(session_id)


@router.post("", response_model=CartUpdate, response_model_exclude_none=True)
async def add_to_cart(item: CartItemCreate, session_id: str = Depends(get_cart_session)) -> CartUpdate:
    """Add a product, merging into the existing entry if present.

    Responds with the affected entry id and the refreshed cart.
    """
    return await CartService.add_item(session_id, item.product_id, item.quantity)


@router.delete("/{entry_id}", response_model=CartUpdate, response_model_exclude_none=True)
async def remove_from_cart(
    entry_id: str = Path(..., description="Cart entry id"),
    session_id: str = Depends(get_cart_session),
) -> CartUpdate:
    """Remove a whole cart entry."""
    return await CartService.remove_item(session_id, entry_id)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(session_id: str = Depends(get_cart_session)) -> None:
    """Empty the cart.  Succeeds on an already empty cart."""
    await CartService.clear_cart(session_id)
    return None
