"""
Checkout endpoint for API v1.
"""

from fastapi import APIRouter, Depends

from storefront_api.app.api.deps import get_cart_session
from storefront_api.app.schemas.checkout import CheckoutRequest, ReceiptRead
from storefront_api.app.services.checkout_service import CheckoutService

router = APIRouter()


@router.post("", response_model=ReceiptRead, response_model_exclude_unset=True)
async def checkout(body: CheckoutRequest, session_id: str = Depends(get_cart_session)) -> ReceiptRead:
    """Process a checkout and return a mock receipt.

    The cart of the current session is emptied as a side effect.  An
    empty ``cartItems`` list or incomplete ``customerInfo`` is a 400.
    Receipt items carry only the keys the client sent, plus
    ``subtotal`` when it was missing.
    """
    return await CheckoutService.checkout(session_id, body.cart_items, body.customer_info)
