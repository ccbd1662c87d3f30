"""
Service layer for the product catalog.

The catalog is seeded once when the database is initialised and is
never modified afterwards.  All queries use parameterized statements.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from storefront_api.app.core.db import get_cursor
from storefront_api.app.schemas.product import ProductRead

logger = logging.getLogger(__name__)

_IMAGE_QUERY = "?w=300&h=300&fit=crop"

DEMO_PRODUCTS: list[tuple[str, str, float, str]] = [
    ("1", "Wireless Headphones", 99.99, "https://images.unsplash.com/photo-1505740420928-5e560c06d30e" + _IMAGE_QUERY),
    ("2", "Smartphone Case", 24.99, "https://images.unsplash.com/photo-1601593346740-925612772716" + _IMAGE_QUERY),
    ("3", "Bluetooth Speaker", 79.99, "https://images.unsplash.com/photo-1608043152269-423dbba4e7e1" + _IMAGE_QUERY),
    ("4", "USB-C Cable", 19.99, "https://images.unsplash.com/photo-1558618666-fcd25c85cd64" + _IMAGE_QUERY),
    ("5", "Laptop Stand", 49.99, "https://images.unsplash.com/photo-1527864550417-7fd91fc51a46" + _IMAGE_QUERY),
    ("6", "Wireless Mouse", 34.99, "https://images.unsplash.com/photo-1615663245857-ac93bb7c39e7" + _IMAGE_QUERY),
    ("7", "Mechanical Keyboard", 89.99, "https://images.unsplash.com/photo-1541140532154-b024d705b90a" + _IMAGE_QUERY),
    ("8", "4K Monitor", 299.99, "https://images.unsplash.com/photo-1527443224154-c4a3942d3acf" + _IMAGE_QUERY),
]


class ProductService:
    """Read access to the catalog."""

    @staticmethod
    def seed_products(cursor: sqlite3.Cursor) -> None:
        """Insert the demo catalog.  Existing ids are left untouched."""
        cursor.executemany(
            "INSERT OR IGNORE INTO products (id, name, price, image) VALUES (?, ?, ?, ?)",
            DEMO_PRODUCTS,
        )
        if cursor.rowcount:
            logger.info("Seeded %s products", cursor.rowcount)

    @classmethod
    async def list_products(cls) -> List[ProductRead]:
        """Return every product.

        Ids are short numeric strings, so they are ordered by length
        first to keep ``"10"`` after ``"9"``.
        """
        with get_cursor() as cursor:
            rows = cursor.execute(
                "SELECT id, name, price, image FROM products ORDER BY LENGTH(id), id"
            ).fetchall()
        return [cls._row_to_product(row) for row in rows]

    @classmethod
    async def get_product(cls, product_id: str) -> Optional[ProductRead]:
        """Retrieve a single product by id, or ``None``."""
        with get_cursor() as cursor:
            row = cls.fetch_product(cursor, product_id)
        return cls._row_to_product(row) if row else None

    @staticmethod
    def fetch_product(cursor: sqlite3.Cursor, product_id: str) -> Optional[sqlite3.Row]:
        """Look up a product row inside an already open transaction."""
        return cursor.execute(
            "SELECT id, name, price, image FROM products WHERE id = ?",
            (product_id,),
        ).fetchone()

    @staticmethod
    def _row_to_product(row: sqlite3.Row) -> ProductRead:
        return ProductRead(id=row["id"], name=row["name"], price=row["price"], image=row["image"])
