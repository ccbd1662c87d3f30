"""
Top‑level router for version 1 of the API.

Aggregates the domain routers (products, cart, checkout).  When a new
domain is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import cart, checkout, products

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(cart.router, prefix="/cart", tags=["cart"])
router.include_router(checkout.router, prefix="/checkout", tags=["checkout"])
