"""
Pydantic models for the shopping cart.

Field names follow Python conventions; aliases keep the camelCase JSON
keys (``productId``) that existing clients send and expect.  A
``CartItemRead`` is a cart entry joined with its product and carrying a
computed subtotal; it is never stored.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CartItemCreate(BaseModel):
    """Body of ``POST /cart``.

    ``product_id`` is optional at the schema level so that a missing
    value is reported by the service as a 400 with a readable message.
    """

    product_id: Optional[str] = Field(None, alias="productId", examples=["1"])
    quantity: int = Field(1, examples=[1])

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class CartItemRead(BaseModel):
    """One line of the cart view."""

    id: str
    quantity: int
    product_id: str = Field(..., alias="productId")
    name: str
    price: float
    image: Optional[str] = None
    subtotal: float

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class CartRead(BaseModel):
    """Complete cart view: ordered line items and the rounded total."""

    items: List[CartItemRead] = Field(default_factory=list)
    total: float = 0.0


class CartUpdate(BaseModel):
    """Result of a cart mutation.

    ``message`` and ``id`` keep the shape older clients rely on;
    ``cart`` carries the refreshed view so callers do not need a
    follow‑up ``GET /cart``.
    """

    message: str
    id: Optional[str] = None
    cart: CartRead
