"""
Pydantic models for catalog products.

Products are seeded at startup and read‑only afterwards, so there is
only a read schema.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductRead(BaseModel):
    """Schema for reading a product."""

    id: str = Field(..., examples=["1"])
    name: str = Field(..., examples=["Wireless Headphones"])
    price: float = Field(..., ge=0, examples=[99.99])
    image: Optional[str] = Field(None, description="Image URL")

    model_config = ConfigDict(from_attributes=True)
