"""
Tests for the storefront client

The client's requests session is bridged onto the FastAPI TestClient,
so these run the real API end to end.  Network failures are simulated
with a session that raises.
"""
import requests
from fastapi.testclient import TestClient

from storefront_client import StorefrontAPI, StorefrontSession

BASE_URL = "http://testserver/api"
CUSTOMER = {"name": "Ada Lovelace", "email": "ada@example.com"}


class BridgeSession:
    """Minimal ``requests.Session`` stand-in that forwards to a TestClient."""

    def __init__(self, client: TestClient):
        self.client = client

    def request(self, method, url, json=None, headers=None, timeout=None):
        result = self.client.request(method, url, json=json, headers=headers)
        response = requests.Response()
        response.status_code = result.status_code
        response._content = result.content
        response.url = url
        response.reason = result.reason_phrase
        return response


class DownSession:
    def request(self, method, url, **kwargs):
        raise requests.ConnectionError("connection refused")


def _shop(test_client: TestClient, cart_session=None) -> StorefrontSession:
    api = StorefrontAPI(base_url=BASE_URL, cart_session=cart_session, session=BridgeSession(test_client))
    return StorefrontSession(api)


class TestStorefrontAPI:

    def test_list_products(self, test_client: TestClient):
        api = StorefrontAPI(base_url=BASE_URL, session=BridgeSession(test_client))

        products, error = api.list_products()

        assert error is None
        assert len(products) == 8

    def test_http_error_is_returned_not_raised(self, test_client: TestClient):
        api = StorefrontAPI(base_url=BASE_URL, session=BridgeSession(test_client))

        data, error = api.add_to_cart("999")

        assert data is None
        assert error == {"status_code": 404, "message": "Product not found"}

    def test_network_error_is_returned_not_raised(self):
        api = StorefrontAPI(base_url=BASE_URL, session=DownSession())

        products, error = api.list_products()

        assert products == []
        assert error["status_code"] is None
        assert "connection refused" in error["message"]


class TestStorefrontSession:

    def test_shopping_flow(self, test_client: TestClient):
        shop = _shop(test_client)
        assert shop.load()

        first = shop.add("1", 2)
        second = shop.add("1", 1)
        shop.add("4")

        assert first == second
        assert shop.item_count == 2
        assert shop.cart_total == 319.96

        assert shop.remove(shop.cart_items[1]["id"])
        assert shop.cart_total == 299.97

        receipt = shop.checkout(CUSTOMER)

        assert receipt["status"] == "completed"
        assert receipt["total"] == 299.97
        assert shop.cart_items == []
        assert shop.cart_total == 0.0
        assert shop.refresh_cart()
        assert shop.cart_items == []

    def test_failed_add_leaves_state_unchanged(self, test_client: TestClient):
        shop = _shop(test_client)
        shop.add("2", 2)
        items, total = list(shop.cart_items), shop.cart_total

        assert shop.add("999") is None

        assert shop.cart_items == items
        assert shop.cart_total == total
        assert shop.last_error["status_code"] == 404

    def test_failed_checkout_keeps_cart(self, test_client: TestClient):
        shop = _shop(test_client)
        shop.add("2")

        assert shop.checkout({"name": "Ada", "email": "not-an-email"}) is None

        assert shop.item_count == 1
        assert shop.last_error["status_code"] == 400

    def test_sessions_have_separate_carts(self, test_client: TestClient):
        alice = _shop(test_client, cart_session="alice")
        bob = _shop(test_client, cart_session="bob")

        alice.add("1")
        bob.refresh_cart()

        assert alice.item_count == 1
        assert bob.item_count == 0

    def test_network_failure_leaves_state_unchanged(self):
        shop = StorefrontSession(StorefrontAPI(base_url=BASE_URL, session=DownSession()))
        shop.cart_items = [{"id": "x"}]
        shop.cart_total = 5.0

        assert not shop.load()
        assert not shop.remove("x")

        assert shop.cart_items == [{"id": "x"}]
        assert shop.cart_total == 5.0
        assert shop.products == []
