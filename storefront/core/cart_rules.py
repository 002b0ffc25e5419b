"""Cart Rules — pure sanitization and normalization shared by cart store and checkout service.

Invariants:
    - Every function is PURE: inputs are never mutated, no IO
    - sanitize_cart output keys are canonical "<sku>::<SIZE>" with a purchasable sku
    - sanitize_cart output quantities are ints in [MIN_QUANTITY, MAX_QUANTITY]
    - Legacy bare-sku keys collapse into DEFAULT_SIZE, summing with existing lines
    - normalize_cart_items never trusts client quantities: always re-clamped

Design Decisions:
    - One module used by both the browser-side store and the server: the two
      validation passes cannot drift apart
    - Numeric coercion follows JavaScript Number() so carts written by the
      storefront script sanitize identically here
"""

import builtins
import math
import re
from typing import Collection, Iterable, Mapping

from storefront.core.domain_types import (
    CART_KEY_SEPARATOR,
    DEFAULT_SIZE,
    MAX_QUANTITY,
    MIN_QUANTITY,
    CartKey,
    CartRequestItem,
    Size,
)


_DECIMAL_LITERAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_RADIX_LITERAL = re.compile(r"0([xX][0-9a-fA-F]+|[bB][01]+|[oO][0-7]+)")
_INFINITY_LITERAL = re.compile(r"[+-]?Infinity")


def _int_to_number(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _string_to_number(text: str) -> float:
    text = text.strip()
    if not text:
        return 0.0
    if _DECIMAL_LITERAL.fullmatch(text) or _INFINITY_LITERAL.fullmatch(text):
        return float(text)
    if _RADIX_LITERAL.fullmatch(text):
        return _int_to_number(int(text, 0))
    return math.nan


def _to_number(value: object) -> float:
    """Coerce like JavaScript Number(); NaN when there is no numeric reading."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int):
        return _int_to_number(value)
    if isinstance(value, float):
        return value
    if value is None:
        return 0.0
    if isinstance(value, str):
        return _string_to_number(value)
    return math.nan


def clamp_int(
    value: object, *, min: int = MIN_QUANTITY, max: int = MAX_QUANTITY,
) -> int:
    """Floor then clamp into [min, max]; anything non-finite becomes min."""
    number = _to_number(value)
    if not math.isfinite(number):
        return min
    return builtins.min(max, builtins.max(min, math.floor(number)))


def make_cart_key(sku: str, size: Size | str) -> CartKey:
    size_value = size.value if isinstance(size, Size) else size
    return CartKey(f"{sku}{CART_KEY_SEPARATOR}{size_value}")


def parse_cart_key(key: object) -> tuple[str, Size] | None:
    """Split "<sku>::<size>" into (sku, Size). None for anything else."""
    parts = str(key if key is not None else "").split(CART_KEY_SEPARATOR)
    if len(parts) != 2:
        return None
    sku = parts[0].strip()
    size = Size.parse(parts[1])
    if not sku or size is None:
        return None
    return sku, size


def sanitize_cart(
    cart: Mapping[object, object], purchasable: Collection[str],
) -> dict[CartKey, int]:
    """Self-healing pass over a persisted cart mapping.

    Drops unknown or unavailable skus, unparseable keys and non-positive or
    non-finite quantities. Floors fractional quantities. Bare legacy skus are
    coerced to size M. Lines that land on the same key are summed, then capped.
    """
    result: dict[CartKey, int] = {}
    for raw_key, raw_qty in cart.items():
        qty = _to_number(raw_qty)
        if not math.isfinite(qty) or qty < MIN_QUANTITY:
            continue

        parsed = parse_cart_key(raw_key)
        if parsed is not None:
            sku, size = parsed
        else:
            sku, size = str(raw_key).strip(), DEFAULT_SIZE
            if CART_KEY_SEPARATOR in sku:
                continue
        if not sku or sku not in purchasable:
            continue

        key = make_cart_key(sku, size)
        merged = result.get(key, 0) + math.floor(qty)
        result[key] = min(MAX_QUANTITY, merged)
    return result


def cart_count(cart: Mapping[str, object]) -> int:
    """Total units across all lines; non-numeric quantities count as zero."""
    total = 0
    for qty in cart.values():
        number = _to_number(qty)
        if math.isfinite(number):
            total += int(number)
    return total


def cart_to_request_items(cart: Mapping[str, int]) -> list[CartRequestItem]:
    """Wire items in cart order; keys that do not parse are skipped."""
    items: list[CartRequestItem] = []
    for key, qty in cart.items():
        parsed = parse_cart_key(key)
        if parsed is None:
            continue
        sku, size = parsed
        items.append({"sku": sku, "size": size.value, "quantity": qty})
    return items


def normalize_cart_items(
    raw_items: object, purchasable: Collection[str],
) -> list[CartRequestItem]:
    """Server-side re-validation of the client's item list.

    Non-list payloads and non-object entries yield nothing. Unknown skus and
    invalid sizes are dropped; quantities are re-clamped into [1, 99].
    """
    if not isinstance(raw_items, list):
        return []
    return list(_iter_normalized(raw_items, purchasable))


def _iter_normalized(
    raw_items: Iterable[object], purchasable: Collection[str],
) -> Iterable[CartRequestItem]:
    for item in raw_items:
        if not isinstance(item, dict):
            continue
        sku = str(item.get("sku") or "").strip()
        size = Size.parse(item.get("size") or "")
        if sku not in purchasable or size is None:
            continue
        yield {
            "sku": sku,
            "size": size.value,
            "quantity": clamp_int(item.get("quantity")),
        }
