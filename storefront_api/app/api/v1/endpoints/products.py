"""
Catalog endpoints for API v1.
"""

from typing import List

from fastapi import APIRouter

from storefront_api.app.core.errors import NotFound
from storefront_api.app.schemas.product import ProductRead
from storefront_api.app.services.product_service import ProductService

router = APIRouter()


@router.get("", response_model=List[ProductRead])
async def list_products() -> List[ProductRead]:
    """Return the whole catalog."""
    return await ProductService.list_products()


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: str) -> ProductRead:
    """Retrieve a single product.  Returns HTTP 404 if it does not exist."""
    product = await ProductService.get_product(product_id)
    if product is None:
        raise NotFound("Product not found")
    return product
