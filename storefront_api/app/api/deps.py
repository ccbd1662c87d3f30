"""
Shared FastAPI dependencies.
"""

from typing import Optional

from fastapi import Header

from storefront_api.app.core.config import settings
from storefront_api.app.core.errors import InvalidArgument

MAX_SESSION_LENGTH = 128


def get_cart_session(
    x_cart_session: Optional[str] = Header(
        None,
        description="Identifier of the cart to operate on; defaults to the shared cart",
    ),
) -> str:
    """Resolve the cart session for the current request.

    Clients that send no ``X-Cart-Session`` header use the configured
    default session, which matches the single shared cart older
    clients expect.
    """
    if x_cart_session is None:
        return settings.default_cart_session
    session_id = x_cart_session.strip()
    if not session_id or len(session_id) > MAX_SESSION_LENGTH:
        raise InvalidArgument("Invalid cart session")
    return session_id
