"""Cart Store — persisted "sku::SIZE" → quantity mapping with a self-healing load.

Invariants:
    - load() never raises: missing, corrupt or non-object data reads as {}
    - load_sanitized() rewrites storage with the sanitized cart (self-healing)
    - save() overwrites unconditionally (single-tab assumption)
"""

import json
import logging
from typing import Collection

from storefront.core.cart_rules import sanitize_cart
from storefront.core.domain_types import CartKey
from storefront.client.storage import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "bw_cart_v1"


class CartStore:
    def __init__(self, storage: KeyValueStorage, purchasable: Collection[str]):
        self.storage = storage
        self.purchasable = purchasable

    def load(self) -> dict:
        """Raw persisted mapping, unsanitized."""
        try:
            raw = self.storage.get_item(STORAGE_KEY)
            if not raw:
                return {}
            parsed = json.loads(raw)
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Discarding unreadable cart: {e}")
            return {}
        return parsed if isinstance(parsed, dict) else {}

    def sanitize(self, cart: dict) -> dict[CartKey, int]:
        return sanitize_cart(cart, self.purchasable)

    def save(self, cart: dict[CartKey, int]) -> None:
        self.storage.set_item(STORAGE_KEY, json.dumps(cart))

    def load_sanitized(self) -> dict[CartKey, int]:
        cart = self.sanitize(self.load())
        self.save(cart)
        return cart

    def clear(self) -> None:
        self.save({})
