"""
Application package.

The API is split by domain: catalog products, carts and checkout.
Each domain has a schema module, a service module and a router in
``api/v1/endpoints``.  ``main`` assembles them into the FastAPI app.
"""

from .main import app  # noqa: F401
