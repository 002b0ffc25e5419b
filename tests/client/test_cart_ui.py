"""Cart UI — headless controller mutations, views and checkout button handling."""

import pytest

from storefront.client.cart_store import STORAGE_KEY, CartStore
from storefront.client.cart_ui import (
    LOADING_LABEL,
    ButtonState,
    CartController,
    busy,
    format_money,
    step_quantity,
)
from storefront.client.checkout_client import CheckoutRequestError
from storefront.client.storage import MemoryStorage
from storefront.core.catalog import catalog_view
from storefront.schemas.catalog import CatalogView


class StubBuilder:
    """Stands in for CheckoutRequestBuilder; records the button state it saw."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []
        self.seen_button = None
        self.button = None

    async def start_checkout(self, cart):
        self.calls.append(dict(cart))
        if self.button is not None:
            self.seen_button = (self.button.enabled, self.button.label)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def catalog():
    return CatalogView.model_validate(catalog_view())


@pytest.fixture
def harness(catalog):
    def build(raw_cart=None, builder=None):
        storage = MemoryStorage({STORAGE_KEY: raw_cart} if raw_cart else {})
        notices, visits = [], []
        builder = builder or StubBuilder(result="https://pay.example/cs_1")
        controller = CartController(
            CartStore(storage, catalog.purchasable_skus()),
            catalog, builder, notices.append, visits.append,
        )
        return controller, storage, builder, notices, visits
    return build


# ─── helpers ─────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "minor, expected",
    [(4500, "$45"), (4550, "$45.50"), (0, "$0"), (123456, "$1,234.56"), (5, "$0.05")],
)
def test_format_money(minor, expected):
    assert format_money(minor) == expected


def test_step_quantity_stays_in_bounds():
    assert step_quantity("1", -1) == 1
    assert step_quantity(99, 1) == 99
    assert step_quantity("abc", 1) == 2


# ─── mutations ───────────────────────────────────────────────────

def test_startup_sanitizes_and_persists(harness):
    controller, storage, *_ = harness('{"MERCH-02": 1, "GONE::M": 2}')
    assert controller.cart == {"MERCH-02::M": 1}
    assert storage.get_item(STORAGE_KEY) == '{"MERCH-02::M": 1}'


def test_add_accumulates_and_clamps(harness):
    controller, *_ = harness()
    assert controller.add("MERCH-01", "m", "3")
    assert controller.add("MERCH-01", "M", 200)
    assert controller.cart == {"MERCH-01::M": 99}


def test_add_rejects_unknown_sku_or_size(harness):
    controller, *_ = harness()
    assert controller.add("MERCH-404", "M") is False
    assert controller.add("MERCH-01", "XXL") is False
    assert controller.cart == {}


def test_increment_decrement_and_remove(harness):
    controller, *_ = harness('{"MERCH-01::S": 1, "MERCH-02::L": 2}')
    controller.increment("MERCH-01::S")
    assert controller.cart["MERCH-01::S"] == 2

    controller.decrement("MERCH-02::L")
    controller.decrement("MERCH-02::L")
    assert "MERCH-02::L" not in controller.cart

    controller.remove("MERCH-01::S")
    assert controller.cart == {}


def test_mutations_ignore_unknown_keys(harness):
    controller, *_ = harness('{"MERCH-01::S": 1}')
    controller.increment("NOPE::S")
    controller.remove("not-a-key")
    assert controller.cart == {"MERCH-01::S": 1}


def test_clear_persists(harness):
    controller, storage, *_ = harness('{"MERCH-01::S": 1}')
    controller.clear()
    assert controller.cart == {}
    assert storage.get_item(STORAGE_KEY) == "{}"


# ─── views ───────────────────────────────────────────────────────

def test_lines_count_and_total(harness):
    controller, *_ = harness('{"MERCH-03::L": 2, "MERCH-01::S": 1}')
    lines = controller.lines()

    assert [line.label for line in lines] == ["CHSN-T2 / L", "CHSN-T1 / S"]
    assert lines[0].line_total == 9000
    assert controller.count() == 3
    assert controller.total() == 13000
    assert controller.total_display() == "$130"


# ─── checkout ────────────────────────────────────────────────────

async def test_checkout_navigates_and_restores_button(harness):
    controller, _, builder, notices, visits = harness('{"MERCH-03::L": 2}')
    button = ButtonState(label="Checkout")
    builder.button = button

    url = await controller.checkout(button)

    assert url == "https://pay.example/cs_1"
    assert visits == [url]
    assert notices == []
    assert builder.seen_button == (False, LOADING_LABEL)
    assert button == ButtonState(label="Checkout", enabled=True)


async def test_empty_cart_alerts_without_request(harness):
    controller, _, builder, notices, visits = harness()
    button = ButtonState()

    assert await controller.checkout(button) is None
    assert notices == ["Your cart is empty."]
    assert builder.calls == []
    assert button.enabled is True


async def test_failed_checkout_alerts_and_reenables(harness):
    builder = StubBuilder(error=CheckoutRequestError("Request failed (500)", 500))
    controller, _, _, notices, visits = harness('{"MERCH-01::M": 1}', builder)
    button = ButtonState(label="Pay now")

    assert await controller.checkout(button) is None
    assert notices == ["Request failed (500)"]
    assert visits == []
    assert button == ButtonState(label="Pay now", enabled=True)


async def test_unexpected_error_still_reenables_button(harness):
    builder = StubBuilder(error=RuntimeError("bug"))
    controller, *_ = harness('{"MERCH-01::M": 1}', builder)
    button = ButtonState()

    with pytest.raises(RuntimeError):
        await controller.checkout(button)
    assert button.enabled is True
    assert button.label == "Checkout"


def test_busy_restores_on_exception():
    button = ButtonState(label="Go")
    with pytest.raises(ValueError):
        with busy(button):
            assert button.enabled is False
            raise ValueError
    assert button == ButtonState(label="Go", enabled=True)
