"""
SQLite store and simple migration system.

The storefront keeps its catalog and carts in SQLite, in process
memory by default (``DATABASE_URL=:memory:``).  An in‑memory database
only lives as long as its connection, so the module owns one
process‑wide connection instead of opening a new one per call.

Every read or write goes through :func:`get_cursor`, which holds a
re‑entrant lock for the whole transaction.  This serializes
read‑modify‑write sequences such as merging a quantity into an existing
cart entry, so concurrent requests cannot lose updates.

Applied migration versions are stored in the ``migrations`` table and
new migrations are executed in order by :func:`init_db`.
"""

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings
from .errors import StoreError

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_connection: Optional[sqlite3.Connection] = None

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: catalog and cart tables
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS products (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            price REAL NOT NULL CHECK (price >= 0),
            image TEXT
        );

        CREATE TABLE IF NOT EXISTS cart_items (
            id TEXT PRIMARY KEY,
            session_id TEXT NOT NULL,
            product_id TEXT NOT NULL,
            quantity INTEGER NOT NULL CHECK (quantity > 0),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(product_id) REFERENCES products(id),
            UNIQUE(session_id, product_id)
        );
        """,
    ),
    # Migration 2: lookups by session
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_cart_items_session_id ON cart_items(session_id);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the SQLite path from ``settings.database_url``.

    ``:memory:`` and absolute paths are used as is; relative paths are
    resolved against the project root.
    """
    db_url = settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Return the process‑wide connection, opening it on first use.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name, and foreign keys are enforced.
    """
    global _connection
    with _lock:
        if _connection is None:
            path = get_database_path()
            try:
                conn = sqlite3.connect(path, check_same_thread=False)
                conn.row_factory = sqlite3.Row
                conn.execute("PRAGMA foreign_keys = ON")
            except sqlite3.Error as exc:
                raise StoreError(f"Could not open database {path}: {exc}") from exc
            logger.debug("Opened SQLite database %s", path)
            _connection = conn
        return _connection


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Yield a cursor inside a locked transaction.

    Commits on success.  On any exception the transaction is rolled
    back; ``sqlite3.Error`` is re‑raised as :class:`StoreError`, other
    exceptions propagate unchanged.
    """
    with _lock:
        conn = get_connection()
        try:
            cursor = conn.cursor()
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        try:
            yield cursor
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.error("Store operation failed: %s", exc)
            raise StoreError(str(exc)) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()


def close_db() -> None:
    """Close the process‑wide connection.

    With an in‑memory database this discards all data; the next
    :func:`init_db` starts from an empty store.
    """
    global _connection
    with _lock:
        if _connection is not None:
            _connection.close()
            _connection = None


def init_db() -> None:
    """Create the schema, apply pending migrations and seed the catalog."""
    from ..services.product_service import ProductService

    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) AS version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                # executescript commits implicitly; each migration is
                # written to be idempotent.
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                logger.info("Applied migration %s", version)
                current_version = version

        ProductService.seed_products(cursor)
