"""
API tests for the catalog and cart endpoints

Requests go through the real FastAPI app, service layer and in-memory
store.  The JSON shapes checked here are the ones the browser client
relies on.
"""
import pytest
from fastapi.testclient import TestClient

from storefront_api.app.core import db


class TestProducts:

    def test_list_products_returns_seeded_catalog(self, test_client: TestClient):
        response = test_client.get("/api/products")

        assert response.status_code == 200
        products = response.json()
        assert len(products) == 8
        assert products[0] == {
            "id": "1",
            "name": "Wireless Headphones",
            "price": 99.99,
            "image": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=300&h=300&fit=crop",
        }
        assert [p["id"] for p in products] == [str(i) for i in range(1, 9)]

    def test_get_single_product(self, test_client: TestClient):
        response = test_client.get("/api/products/8")

        assert response.status_code == 200
        assert response.json()["name"] == "4K Monitor"

    def test_unknown_product_is_404(self, test_client: TestClient):
        response = test_client.get("/api/products/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_versioned_prefix_serves_same_routes(self, test_client: TestClient):
        assert test_client.get("/api/v1/products").json() == test_client.get("/api/products").json()

    def test_store_failure_is_500(self, test_client: TestClient):
        db.get_connection().close()

        response = test_client.get("/api/products")

        assert response.status_code == 500
        assert "error" in response.json()


class TestAddToCart:

    def test_add_returns_message_id_and_cart(self, test_client: TestClient):
        response = test_client.post("/api/cart", json={"productId": "1", "quantity": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Item added to cart"
        assert data["id"]
        assert data["cart"]["total"] == 199.98
        item = data["cart"]["items"][0]
        assert set(item) == {"id", "quantity", "productId", "name", "price", "image", "subtotal"}
        assert item["id"] == data["id"]

    def test_response_has_no_null_fields(self, test_client: TestClient):
        entry_id = test_client.post("/api/cart", json={"productId": "1"}).json()["id"]
        again = test_client.post("/api/cart", json={"productId": "1"}).json()
        removed = test_client.delete(f"/api/cart/{entry_id}").json()

        assert set(again) == {"message", "id", "cart"}
        assert set(removed) == {"message", "cart"}

    def test_quantity_defaults_to_one(self, test_client: TestClient):
        test_client.post("/api/cart", json={"productId": "2"})

        cart = test_client.get("/api/cart").json()

        assert cart["items"][0]["quantity"] == 1
        assert cart["total"] == 24.99

    def test_repeated_add_merges(self, test_client: TestClient):
        first = test_client.post("/api/cart", json={"productId": "1", "quantity": 2}).json()
        second = test_client.post("/api/cart", json={"productId": "1", "quantity": 1}).json()

        assert second["message"] == "Cart updated successfully"
        assert second["id"] == first["id"]
        cart = test_client.get("/api/cart").json()
        assert len(cart["items"]) == 1
        assert cart["items"][0]["quantity"] == 3
        assert cart["total"] == 299.97

    def test_missing_product_id_is_400(self, test_client: TestClient):
        response = test_client.post("/api/cart", json={"quantity": 1})

        assert response.status_code == 400
        assert response.json() == {"error": "Product ID is required"}

    def test_unknown_product_is_404(self, test_client: TestClient):
        response = test_client.post("/api/cart", json={"productId": "999"})

        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}
        assert test_client.get("/api/cart").json() == {"items": [], "total": 0.0}

    @pytest.mark.parametrize("quantity", [0, -3, "many"])
    def test_bad_quantity_is_400(self, test_client: TestClient, quantity):
        response = test_client.post("/api/cart", json={"productId": "1", "quantity": quantity})

        assert response.status_code == 400
        assert "error" in response.json()


class TestRemoveFromCart:

    def test_remove_entry(self, test_client: TestClient):
        entry_id = test_client.post("/api/cart", json={"productId": "3"}).json()["id"]

        response = test_client.delete(f"/api/cart/{entry_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Item removed from cart", "cart": {"items": [], "total": 0.0}}

    def test_remove_unknown_entry_is_404_and_cart_unchanged(self, test_client: TestClient):
        test_client.post("/api/cart", json={"productId": "3", "quantity": 2})
        before = test_client.get("/api/cart").json()

        response = test_client.delete("/api/cart/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Cart item not found"}
        assert test_client.get("/api/cart").json() == before

    def test_clear_cart(self, test_client: TestClient):
        test_client.post("/api/cart", json={"productId": "3"})

        response = test_client.delete("/api/cart")

        assert response.status_code == 204
        assert test_client.get("/api/cart").json()["items"] == []


class TestCartSessions:

    def test_session_header_selects_cart(self, test_client: TestClient):
        test_client.post("/api/cart", json={"productId": "1"}, headers={"X-Cart-Session": "alice"})
        test_client.post("/api/cart", json={"productId": "2"})

        alice = test_client.get("/api/cart", headers={"X-Cart-Session": "alice"}).json()
        shared = test_client.get("/api/cart").json()

        assert [i["productId"] for i in alice["items"]] == ["1"]
        assert [i["productId"] for i in shared["items"]] == ["2"]

    def test_blank_session_header_is_400(self, test_client: TestClient):
        response = test_client.get("/api/cart", headers={"X-Cart-Session": "   "})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid cart session"}
