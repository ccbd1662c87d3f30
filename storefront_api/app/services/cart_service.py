"""
Service layer for shopping carts.

Carts are keyed by a session identifier supplied by the API layer.  A
cart is a set of entries, each binding one product to a positive
quantity; adding a product that is already in the cart increments the
existing entry instead of creating a second one.  The merge runs inside
a single ``get_cursor`` transaction, which holds the store lock, so
concurrent adds of the same product never lose an update.

Mutations return the refreshed cart view so callers do not have to
issue a separate read.

A session can be marked for deferred clearing when checkout fails to
empty it.  Every later operation on that session clears it first, so
items bought in a completed checkout never show up again.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
import uuid
from typing import Optional, Set

from storefront_api.app.core.db import get_cursor
from storefront_api.app.core.errors import InvalidArgument, NotFound
from storefront_api.app.core.money import line_amount, line_subtotal, sum_money
from storefront_api.app.schemas.cart import CartItemRead, CartRead, CartUpdate
from storefront_api.app.services.product_service import ProductService

logger = logging.getLogger(__name__)


class CartService:
    """Service class for cart entries."""

    _pending_clears: Set[str] = set()
    _pending_lock = threading.Lock()

    @classmethod
    async def add_item(cls, session_id: str, product_id: Optional[str], quantity: int = 1) -> CartUpdate:
        """Add ``quantity`` units of a product to the session's cart.

        Raises ``InvalidArgument`` when ``product_id`` is missing or
        ``quantity`` is not positive, and ``NotFound`` when the product
        is not in the catalog.
        """
        if not product_id:
            raise InvalidArgument("Product ID is required")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidArgument("Quantity must be a positive integer")

        cls._settle_pending_clear(session_id)
        with get_cursor() as cursor:
            if ProductService.fetch_product(cursor, product_id) is None:
                raise NotFound("Product not found")

            existing = cursor.execute(
                "SELECT id, quantity FROM cart_items WHERE session_id = ? AND product_id = ?",
                (session_id, product_id),
            ).fetchone()
            if existing:
                entry_id = existing["id"]
                new_quantity = existing["quantity"] + quantity
                cursor.execute(
                    "UPDATE cart_items SET quantity = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (new_quantity, entry_id),
                )
                message = "Cart updated successfully"
                logger.info("Cart %s: entry %s now holds %s x product %s", session_id, entry_id, new_quantity, product_id)
            else:
                entry_id = str(uuid.uuid4())
                cursor.execute(
                    "INSERT INTO cart_items (id, session_id, product_id, quantity) VALUES (?, ?, ?, ?)",
                    (entry_id, session_id, product_id, quantity),
                )
                message = "Item added to cart"
                logger.info("Cart %s: added entry %s (%s x product %s)", session_id, entry_id, quantity, product_id)
            cart = cls._read_cart(cursor, session_id)
        return CartUpdate(message=message, id=entry_id, cart=cart)

    @classmethod
    async def remove_item(cls, session_id: str, entry_id: str) -> CartUpdate:
        """Delete a whole cart entry.

        Raises ``NotFound`` if the session has no entry with that id;
        the cart is left unchanged in that case.
        """
        cls._settle_pending_clear(session_id)
        with get_cursor() as cursor:
            cursor.execute(
                "DELETE FROM cart_items WHERE id = ? AND session_id = ?",
                (entry_id, session_id),
            )
            if cursor.rowcount == 0:
                raise NotFound("Cart item not found")
            logger.info("Cart %s: removed entry %s", session_id, entry_id)
            cart = cls._read_cart(cursor, session_id)
        return CartUpdate(message="Item removed from cart", cart=cart)

    @classmethod
    async def get_cart(cls, session_id: str) -> CartRead:
        """Return the enriched cart view for a session."""
        cls._settle_pending_clear(session_id)
        with get_cursor() as cursor:
            return cls._read_cart(cursor, session_id)

    @classmethod
    async def clear_cart(cls, session_id: str) -> int:
        """Remove every entry of the session's cart.

        Idempotent; returns the number of deleted entries.
        """
        with get_cursor() as cursor:
            deleted = cls._delete_all(cursor, session_id)
        with cls._pending_lock:
            cls._pending_clears.discard(session_id)
        if deleted:
            logger.info("Cart %s: cleared %s entries", session_id, deleted)
        return deleted

    @classmethod
    def defer_clear(cls, session_id: str) -> None:
        """Mark a session whose cart must be emptied before its next use."""
        with cls._pending_lock:
            cls._pending_clears.add(session_id)
        logger.warning("Cart %s: clear deferred to the next cart operation", session_id)

    @classmethod
    def has_pending_clear(cls, session_id: str) -> bool:
        with cls._pending_lock:
            return session_id in cls._pending_clears

    @classmethod
    def reset_pending_clears(cls) -> None:
        with cls._pending_lock:
            cls._pending_clears.clear()

    @classmethod
    def _settle_pending_clear(cls, session_id: str) -> None:
        # Own transaction, committed before the caller's work starts, so a
        # later rollback in the caller cannot bring the items back.  The
        # mark is dropped only after the commit; on StoreError it stays
        # and the next call retries.
        if not cls.has_pending_clear(session_id):
            return
        with get_cursor() as cursor:
            deleted = cls._delete_all(cursor, session_id)
        with cls._pending_lock:
            cls._pending_clears.discard(session_id)
        logger.info("Cart %s: deferred clear removed %s entries", session_id, deleted)

    @staticmethod
    def _delete_all(cursor: sqlite3.Cursor, session_id: str) -> int:
        cursor.execute("DELETE FROM cart_items WHERE session_id = ?", (session_id,))
        return cursor.rowcount

    @staticmethod
    def _read_cart(cursor: sqlite3.Cursor, session_id: str) -> CartRead:
        rows = cursor.execute(
            """
            SELECT c.id, c.quantity, p.id AS product_id, p.name, p.price, p.image
            FROM cart_items c
            JOIN products p ON c.product_id = p.id
            WHERE c.session_id = ?
            ORDER BY c.rowid
            """,
            (session_id,),
        ).fetchall()
        items = []
        amounts = []
        for row in rows:
            amounts.append(line_amount(row["price"], row["quantity"]))
            subtotal = line_subtotal(row["price"], row["quantity"])
            items.append(
                CartItemRead(
                    id=row["id"],
                    quantity=row["quantity"],
                    product_id=row["product_id"],
                    name=row["name"],
                    price=row["price"],
                    image=row["image"],
                    subtotal=float(subtotal),
                )
            )
        return CartRead(items=items, total=float(sum_money(amounts)))
