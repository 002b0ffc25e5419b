"""Page Preferences — promo panel dismissal and last active nav selection.

Invariants:
    - Best effort: corrupt or missing values read as defaults, failed writes are logged
"""

import logging

from storefront.client.storage import KeyValueStorage

logger = logging.getLogger(__name__)

PROMO_DISMISSED_KEY = "bw_promo_dismissed"
ACTIVE_NAV_KEY = "bw_active_nav"


class Preferences:
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def _get(self, key: str) -> str | None:
        try:
            return self.storage.get_item(key)
        except OSError as e:
            logger.warning(f"Could not read preference {key}: {e}")
            return None

    def _set(self, key: str, value: str) -> None:
        try:
            self.storage.set_item(key, value)
        except OSError as e:
            logger.warning(f"Could not save preference {key}: {e}")

    @property
    def promo_dismissed(self) -> bool:
        return (self._get(PROMO_DISMISSED_KEY) or "").strip() == "1"

    def dismiss_promo(self) -> None:
        self._set(PROMO_DISMISSED_KEY, "1")

    @property
    def active_nav(self) -> str | None:
        value = (self._get(ACTIVE_NAV_KEY) or "").strip()
        return value or None

    def set_active_nav(self, selection: str) -> None:
        self._set(ACTIVE_NAV_KEY, selection.strip())
