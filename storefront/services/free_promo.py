"""Free Promo Provisioning — ensure-once creation of a 100%-off sandbox promotion code.

Invariants:
    - At most one ensure operation per provisioner: the first caller starts it,
      every later caller awaits the same pending task (single slot, reset only if
      the task itself was cancelled)
    - Callers await the slot through asyncio.shield: a cancelled request never
      cancels the shared task
    - Lookup is case-insensitive over active promotion codes (first 100)
    - Failures are logged and resolve to None — checkout never fails because of them
    - The guarantee is per-process; separate workers may each create once

Design Decisions:
    - Memoized asyncio.Task over a lock: concurrent first requests converge on
      one upstream creation without serializing unrelated requests
"""

import asyncio
import logging
from collections.abc import Awaitable

from storefront.core.gateway_protocols import PaymentGateway, PromotionCodeLike

logger = logging.getLogger(__name__)

PROMO_LOOKUP_LIMIT = 100


async def ensure_free_promotion_code(
    gateway: PaymentGateway, code: str,
) -> PromotionCodeLike | None:
    """Return the active promotion code matching `code`, creating it if absent."""
    normalized = str(code or "").strip()
    if not normalized:
        return None
    target = normalized.upper()

    existing = await gateway.list_active_promotion_codes(limit=PROMO_LOOKUP_LIMIT)
    for promo in existing:
        if str(getattr(promo, "code", "") or "").upper() == target:
            return promo

    coupon = await gateway.create_coupon(
        percent_off=100, duration="once", name=f"{normalized} (100% off)",
    )
    promo = await gateway.create_promotion_code(coupon_id=coupon.id, code=normalized)
    logger.info("Created free promotion code", extra={"promo_code": normalized})
    return promo


class FreePromoProvisioner:
    """Process-wide single slot holding the pending ensure operation."""

    def __init__(self, code: str | None):
        self.code = (code or "").strip()
        self._pending: asyncio.Task | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.code)

    def ensure_once(
        self, gateway: PaymentGateway,
    ) -> Awaitable[PromotionCodeLike | None] | None:
        """Start the ensure operation on first call; later calls share it."""
        if not self.enabled:
            return None
        if self._pending is None or self._pending.cancelled():
            self._pending = asyncio.ensure_future(self._ensure_quietly(gateway))
        return self._pending

    async def _ensure_quietly(
        self, gateway: PaymentGateway,
    ) -> PromotionCodeLike | None:
        try:
            return await ensure_free_promotion_code(gateway, self.code)
        except Exception as e:
            logger.error(
                f"Failed to ensure free promo code: {e}",
                extra={"promo_code": self.code},
                exc_info=True,
            )
            return None
