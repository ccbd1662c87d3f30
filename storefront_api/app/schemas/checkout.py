"""
Pydantic models for checkout and receipts.

The checkout body is a snapshot of the cart as the client sees it
(usually the ``items`` of ``GET /cart``) plus the customer's contact
details.  Unknown keys on items and customer info are kept so the
receipt echoes the snapshot back unchanged.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CustomerInfo(BaseModel):
    """Customer contact details.

    Both fields are optional here; the checkout service decides what
    counts as valid and reports problems as 400 responses.
    """

    name: Optional[str] = Field(None, examples=["Ada Lovelace"])
    email: Optional[str] = Field(None, examples=["ada@example.com"])

    model_config = ConfigDict(extra="allow")


class CheckoutItem(BaseModel):
    """One submitted line item."""

    id: Optional[str] = None
    product_id: Optional[str] = Field(None, alias="productId")
    name: Optional[str] = None
    price: float = Field(..., ge=0)
    quantity: int = Field(..., gt=0)
    image: Optional[str] = None
    subtotal: Optional[float] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)


class CheckoutRequest(BaseModel):
    """Body of ``POST /checkout``."""

    cart_items: Optional[List[CheckoutItem]] = Field(None, alias="cartItems")
    customer_info: Optional[CustomerInfo] = Field(None, alias="customerInfo")

    model_config = ConfigDict(populate_by_name=True)


class ReceiptRead(BaseModel):
    """Mock receipt returned by a successful checkout.  Not persisted."""

    id: str
    timestamp: str = Field(..., examples=["2024-01-01T12:00:00.000Z"])
    customer_info: CustomerInfo = Field(..., alias="customerInfo")
    items: List[CheckoutItem]
    total: float
    status: Literal["completed"] = "completed"

    model_config = ConfigDict(populate_by_name=True)
