"""Domain Types — rich types that replace bare primitives across the storefront.

Invariants:
    - Sku and CartKey wrap str — CartKey is always "<sku>::<SIZE>" once canonical
    - MinorUnits is an integer amount of cents, never a float price
    - Size is the closed set S..3XL; DEFAULT_SIZE is what legacy keys collapse into
    - Quantities live in [MIN_QUANTITY, MAX_QUANTITY]
"""

from enum import Enum
from typing import NewType, TypedDict


# ─── Identity Types ──────────────────────────────────────────────

Sku = NewType("Sku", str)
CartKey = NewType("CartKey", str)


# ─── Value Types ─────────────────────────────────────────────────

MinorUnits = NewType("MinorUnits", int)   # cents


# ─── Enums ───────────────────────────────────────────────────────

class Size(str, Enum):
    """Garment sizes offered for every product. Order is display order."""
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "2XL"
    XXXL = "3XL"

    @classmethod
    def parse(cls, raw: object) -> "Size | None":
        """Trim and upper-case; None when the token is not a known size."""
        token = str(raw if raw is not None else "").strip().upper()
        try:
            return cls(token)
        except ValueError:
            return None


# ─── Constants ───────────────────────────────────────────────────

SIZES: tuple[str, ...] = tuple(s.value for s in Size)
DEFAULT_SIZE = Size.M
CART_KEY_SEPARATOR = "::"
MIN_QUANTITY = 1
MAX_QUANTITY = 99
CURRENCY = "usd"


# ─── Wire Shapes ─────────────────────────────────────────────────

class CartRequestItem(TypedDict):
    """One normalized cart line as sent to, and re-checked by, the checkout service."""
    sku: str
    size: str
    quantity: int
