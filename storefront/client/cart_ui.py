"""Cart UI — headless cart component driving quantity changes and checkout.

Invariants:
    - Every mutation goes through _set_cart: sanitize, persist, then expose
    - Lines whose key or sku no longer resolves are skipped when listing
    - checkout() disables the button for the whole request and restores it on
      every exit path; failures reach the shopper through notify() only
    - A successful checkout hands control to navigate(url) (full redirect)

Design Decisions:
    - Element references (button state) and callbacks (notify, navigate) are
      injected so the component never looks anything up globally
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from storefront.client.cart_store import CartStore
from storefront.client.checkout_client import (
    CartEmptyError,
    CheckoutClientError,
    CheckoutRequestBuilder,
    build_request_items,
)
from storefront.core.cart_rules import clamp_int, make_cart_key, parse_cart_key
from storefront.core.domain_types import CartKey, Size
from storefront.schemas.catalog import CatalogView, ProductView

logger = logging.getLogger(__name__)

LOADING_LABEL = "Loading…"


@dataclass
class ButtonState:
    """The checkout control as the component sees it."""
    label: str = "Checkout"
    enabled: bool = True


@contextmanager
def busy(button: ButtonState, label: str = LOADING_LABEL) -> Iterator[ButtonState]:
    """Disable the control and show `label` until the block exits."""
    original_label = button.label
    button.enabled = False
    button.label = label
    try:
        yield button
    finally:
        button.enabled = True
        button.label = original_label or "Checkout"


@dataclass(frozen=True)
class CartLineView:
    key: CartKey
    sku: str
    size: str
    label: str
    unit_amount: int
    quantity: int

    @property
    def line_total(self) -> int:
        return self.unit_amount * self.quantity


def format_money(minor_units: int) -> str:
    """USD with 0–2 fraction digits: 4500 → "$45", 4550 → "$45.50"."""
    dollars, cents = divmod(abs(int(minor_units)), 100)
    sign = "-" if minor_units < 0 else ""
    if cents:
        return f"{sign}${dollars:,}.{cents:02d}"
    return f"{sign}${dollars:,}"


def step_quantity(current: object, delta: int) -> int:
    """Quantity picker +/- step, always landing inside [1, 99]."""
    return clamp_int(clamp_int(current) + delta)


class CartController:
    def __init__(
        self,
        store: CartStore,
        catalog: CatalogView,
        checkout_builder: CheckoutRequestBuilder,
        notify: Callable[[str], None],
        navigate: Callable[[str], None],
    ):
        self.store = store
        self.products: dict[str, ProductView] = catalog.by_sku()
        self.checkout_builder = checkout_builder
        self.notify = notify
        self.navigate = navigate
        self.cart: dict[CartKey, int] = store.load_sanitized()

    def _set_cart(self, next_cart: dict) -> None:
        self.cart = self.store.sanitize(next_cart)
        self.store.save(self.cart)

    def _known_key(self, key: str) -> bool:
        parsed = parse_cart_key(key)
        return parsed is not None and parsed[0] in self.products

    # ─── Mutations ───────────────────────────────────────────────

    def add(self, sku: str, size: str, quantity: object = 1) -> bool:
        """Add from the product picker. Returns False when nothing was added."""
        product = self.products.get(sku)
        parsed_size = Size.parse(size)
        if product is None or not product.available or parsed_size is None:
            return False
        key = make_cart_key(sku, parsed_size)
        next_cart = dict(self.cart)
        next_cart[key] = next_cart.get(key, 0) + clamp_int(quantity)
        self._set_cart(next_cart)
        return True

    def increment(self, key: str) -> None:
        self._adjust(key, 1)

    def decrement(self, key: str) -> None:
        self._adjust(key, -1)

    def _adjust(self, key: str, delta: int) -> None:
        if not self._known_key(key):
            return
        next_cart = dict(self.cart)
        qty = next_cart.get(key, 0) + delta
        if qty <= 0:
            next_cart.pop(key, None)
        else:
            next_cart[key] = qty
        self._set_cart(next_cart)

    def remove(self, key: str) -> None:
        if not self._known_key(key):
            return
        next_cart = dict(self.cart)
        next_cart.pop(key, None)
        self._set_cart(next_cart)

    def clear(self) -> None:
        self._set_cart({})

    # ─── Views ───────────────────────────────────────────────────

    def count(self) -> int:
        return sum(self.cart.values())

    def lines(self) -> list[CartLineView]:
        views = []
        for key, qty in self.cart.items():
            parsed = parse_cart_key(key)
            if parsed is None:
                continue
            sku, size = parsed
            product = self.products.get(sku)
            if product is None:
                continue
            views.append(CartLineView(
                key=key, sku=sku, size=size.value,
                label=f"{product.name} / {size.value}",
                unit_amount=product.unit_amount, quantity=qty,
            ))
        return views

    def total(self) -> int:
        return sum(line.line_total for line in self.lines())

    def total_display(self) -> str:
        return format_money(self.total())

    # ─── Checkout ────────────────────────────────────────────────

    async def checkout(self, button: ButtonState) -> str | None:
        """Start checkout; returns the URL navigated to, or None on failure."""
        if not build_request_items(self.cart):
            self.notify(CartEmptyError().message)
            return None

        with busy(button):
            try:
                url = await self.checkout_builder.start_checkout(self.cart)
            except CheckoutClientError as e:
                logger.error(f"Checkout failed: {e.message}")
                self.notify(e.message)
                return None

        self.navigate(url)
        return url
