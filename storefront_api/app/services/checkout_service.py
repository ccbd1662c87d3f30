"""
Checkout: turn a submitted cart snapshot into a mock receipt.

No payment is taken; every successful checkout is ``completed``.  The
receipt is returned to the caller and not stored.

The total is computed from the prices in the submitted snapshot.  With
``VERIFY_CHECKOUT_PRICES`` enabled, each item that names a product is
re‑priced from the catalog instead, and unknown products are rejected.

Emptying the cart afterwards is best‑effort: if the store fails, the
error is logged, the session is marked for a deferred clear and the
receipt is still returned.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from storefront_api.app.core.config import settings
from storefront_api.app.core.db import get_cursor
from storefront_api.app.core.errors import InvalidArgument, NotFound, StoreError
from storefront_api.app.core.money import line_amount, line_subtotal, sum_money
from storefront_api.app.schemas.checkout import CheckoutItem, CustomerInfo, ReceiptRead
from storefront_api.app.services.cart_service import CartService
from storefront_api.app.services.product_service import ProductService

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CheckoutService:
    """Service class for checkout."""

    @classmethod
    async def checkout(
        cls,
        session_id: str,
        items: Optional[List[CheckoutItem]],
        customer_info: Optional[CustomerInfo],
    ) -> ReceiptRead:
        """Validate the snapshot, build a receipt and clear the cart.

        Raises ``InvalidArgument`` for an empty snapshot or incomplete
        customer details; the cart is not touched in that case.
        """
        if not items:
            raise InvalidArgument("Cart is empty")
        cls._validate_customer(customer_info)

        if settings.verify_checkout_prices:
            items = cls._reprice_from_catalog(items)

        lines = []
        amounts = []
        for item in items:
            amounts.append(line_amount(item.price, item.quantity))
            line = item.model_copy(deep=True)
            if line.subtotal is None or settings.verify_checkout_prices:
                line.subtotal = float(line_subtotal(item.price, item.quantity))
            lines.append(line)

        receipt = ReceiptRead(
            id=str(uuid.uuid4()),
            timestamp=_utc_timestamp(),
            customer_info=customer_info.model_copy(deep=True),
            items=lines,
            # Rounded once over the exact line amounts.
            total=float(sum_money(amounts)),
            status="completed",
        )
        logger.info(
            "Checkout %s for cart %s: %s items, total %.2f",
            receipt.id,
            session_id,
            len(receipt.items),
            receipt.total,
        )

        try:
            await CartService.clear_cart(session_id)
        except StoreError:
            logger.exception("Error clearing cart %s after checkout %s", session_id, receipt.id)
            CartService.defer_clear(session_id)

        return receipt

    @staticmethod
    def _validate_customer(customer_info: Optional[CustomerInfo]) -> None:
        if customer_info is None:
            raise InvalidArgument("Customer info is required")
        name = customer_info.name
        email = customer_info.email
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgument("Customer name is required")
        if not isinstance(email, str) or not email.strip():
            raise InvalidArgument("Customer email is required")
        if "@" not in email:
            raise InvalidArgument("Customer email is invalid")

    @staticmethod
    def _reprice_from_catalog(items: List[CheckoutItem]) -> List[CheckoutItem]:
        repriced = []
        with get_cursor() as cursor:
            for item in items:
                if not item.product_id:
                    repriced.append(item)
                    continue
                row = ProductService.fetch_product(cursor, item.product_id)
                if row is None:
                    raise NotFound(f"Product not found: {item.product_id}")
                repriced.append(item.model_copy(update={"price": row["price"], "name": row["name"]}))
        return repriced
