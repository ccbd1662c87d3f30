"""Storefront API client.

A thin wrapper around the storefront REST API using ``requests``, plus
:class:`StorefrontSession`, which keeps the view state a shop front end
needs (catalog, cart lines, cart total) and updates it from the API's
responses.

Operations exposed by :class:`StorefrontAPI`:

* :meth:`StorefrontAPI.list_products` – the catalog.
* :meth:`StorefrontAPI.get_cart` – current cart lines and total.
* :meth:`StorefrontAPI.add_to_cart` – add a product (merging quantities).
* :meth:`StorefrontAPI.remove_from_cart` – drop a cart entry.
* :meth:`StorefrontAPI.checkout` – submit the cart and get a receipt.

Every call returns a tuple ``(data, error)``.  On failure ``data`` is
``None`` (or an empty list) and ``error`` is a dictionary with
``status_code`` and ``message``; failures are logged and never raised.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class StorefrontAPI:
    """Client for the storefront API.

    ``base_url`` is the API root including its prefix, e.g.
    ``http://localhost:5000/api``.  When ``cart_session`` is given it is
    sent as the ``X-Cart-Session`` header so the client gets its own
    cart instead of the shared default one.
    """

    def __init__(
        self,
        *,
        base_url: str = "http://localhost:5000/api",
        cart_session: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.cart_session = cart_session
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns ``(data, None)`` with the parsed JSON body on success and
        ``(None, error)`` on failure.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.cart_session:
            headers["X-Cart-Session"] = self.cart_session
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request %s %s failed (%s): %s", method, path, status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request %s %s failed: %s", method, path, exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------
    def list_products(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/products")
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    # ------------------------------------------------------------------
    # Cart
    # ------------------------------------------------------------------
    def get_cart(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/cart")

    def add_to_cart(self, product_id: str, quantity: int = 1) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Add a product.  The result holds ``message``, ``id`` and ``cart``."""
        return self._request("POST", "/cart", json_body={"productId": product_id, "quantity": quantity})

    def remove_from_cart(self, entry_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("DELETE", f"/cart/{entry_id}")

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------
    def checkout(
        self, cart_items: List[Dict[str, Any]], customer_info: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Submit the cart snapshot and return the receipt."""
        return self._request(
            "POST",
            "/checkout",
            json_body={"cartItems": cart_items, "customerInfo": customer_info},
        )


class StorefrontSession:
    """Local shop state kept in sync with the API.

    Mutations use the cart returned by the API directly; no follow‑up
    ``GET /cart`` is issued.  When a call fails, the error is logged
    and the local state is left exactly as it was.
    """

    def __init__(self, api: StorefrontAPI) -> None:
        self.api = api
        self.products: List[Dict[str, Any]] = []
        self.cart_items: List[Dict[str, Any]] = []
        self.cart_total: float = 0.0
        self.last_error: Optional[Error] = None

    @property
    def item_count(self) -> int:
        return len(self.cart_items)

    def load(self) -> bool:
        """Fetch the catalog and the cart.  Returns ``True`` if both succeeded."""
        products, error = self.api.list_products()
        if error:
            return self._fail("fetching products", error)
        self.products = products
        return self.refresh_cart()

    def refresh_cart(self) -> bool:
        cart, error = self.api.get_cart()
        if error or cart is None:
            return self._fail("fetching cart", error)
        self._apply_cart(cart)
        return True

    def add(self, product_id: str, quantity: int = 1) -> Optional[str]:
        """Add a product; returns the affected cart entry id."""
        result, error = self.api.add_to_cart(product_id, quantity)
        if error or result is None:
            self._fail("adding to cart", error)
            return None
        self._apply_result(result)
        return result.get("id")

    def remove(self, entry_id: str) -> bool:
        result, error = self.api.remove_from_cart(entry_id)
        if error or result is None:
            return self._fail("removing from cart", error)
        self._apply_result(result)
        return True

    def checkout(self, customer_info: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Check out the current cart; on success the local cart is emptied."""
        receipt, error = self.api.checkout(self.cart_items, customer_info)
        if error or receipt is None:
            self._fail("during checkout", error)
            return None
        self.cart_items = []
        self.cart_total = 0.0
        self.last_error = None
        return receipt

    def _apply_result(self, result: Dict[str, Any]) -> None:
        cart = result.get("cart")
        if isinstance(cart, dict):
            self._apply_cart(cart)
        else:
            # Servers that do not return the cart with the mutation.
            self.refresh_cart()

    def _apply_cart(self, cart: Dict[str, Any]) -> None:
        self.cart_items = list(cart.get("items") or [])
        self.cart_total = float(cart.get("total") or 0.0)
        self.last_error = None

    def _fail(self, action: str, error: Optional[Error]) -> bool:
        self.last_error = error or {"status_code": None, "message": "Empty response"}
        logger.error("Error %s: %s", action, self.last_error["message"])
        return False
