"""Checkout Request Builder — posts the cart to the checkout endpoint over httpx.

Invariants:
    - An empty item list raises CartEmptyError before any network call
    - Exactly one POST per attempt, no automatic retry
    - Non-2xx: server "error" message if present, else "Request failed (<status>)"
    - 2xx without "url" is a failure; success returns the URL for a full redirect
"""

import logging
from typing import Mapping

import httpx

from storefront.core.cart_rules import cart_to_request_items
from storefront.core.domain_types import CartRequestItem
from storefront.schemas.catalog import CatalogView

logger = logging.getLogger(__name__)

CHECKOUT_ENDPOINT = "/api/create-checkout-session"
CATALOG_ENDPOINT = "/api/catalog"
NETWORK_FAILURE_MESSAGE = (
    "Checkout failed. Make sure the checkout service is running "
    "and STRIPE_SECRET_KEY is set."
)


class CheckoutClientError(Exception):
    """Base for failures shown to the shopper verbatim."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CartEmptyError(CheckoutClientError):
    def __init__(self):
        super().__init__("Your cart is empty.")


class CheckoutRequestError(CheckoutClientError):
    """Request reached no usable answer: HTTP error, bad JSON or missing URL."""


def build_request_items(cart: Mapping[str, int]) -> list[CartRequestItem]:
    return cart_to_request_items(cart)


def _json_object(response: httpx.Response) -> dict:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class CheckoutRequestBuilder:
    def __init__(self, http: httpx.AsyncClient, endpoint: str = CHECKOUT_ENDPOINT):
        self.http = http
        self.endpoint = endpoint

    async def start_checkout(self, cart: Mapping[str, int]) -> str:
        """POST the cart and return the hosted checkout URL."""
        items = build_request_items(cart)
        if not items:
            raise CartEmptyError()

        try:
            response = await self.http.post(self.endpoint, json={"items": items})
        except httpx.HTTPError as e:
            logger.error(f"Checkout request failed: {e}")
            raise CheckoutRequestError(NETWORK_FAILURE_MESSAGE) from e

        data = _json_object(response)
        if not response.is_success:
            raise CheckoutRequestError(
                data.get("error") or f"Request failed ({response.status_code})",
                response.status_code,
            )
        url = data.get("url")
        if not url:
            raise CheckoutRequestError("Missing Checkout URL.", response.status_code)
        return str(url)


async def fetch_catalog(
    http: httpx.AsyncClient, endpoint: str = CATALOG_ENDPOINT,
) -> CatalogView:
    """Load the served catalog view the cart is validated against."""
    response = await http.get(endpoint)
    response.raise_for_status()
    return CatalogView.model_validate(response.json())
