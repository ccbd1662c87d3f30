"""Pytest configuration for the storefront API tests.

Every test starts from a freshly seeded in-memory store and no
pending cart clears.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from storefront_api.app.core import db
from storefront_api.app.main import app
from storefront_api.app.services.cart_service import CartService


@pytest.fixture(autouse=True)
def fresh_store():
    db.close_db()
    CartService.reset_pending_clears()
    db.init_db()
    yield
    db.close_db()
    CartService.reset_pending_clears()


@pytest.fixture
def test_client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def run():
    """Run a service coroutine to completion."""
    return asyncio.run
