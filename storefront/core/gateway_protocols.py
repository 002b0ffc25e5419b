"""Boundary Protocols — contracts between checkout logic and the payment provider.

Invariants:
    - Core and services NEVER import the stripe SDK — only these Protocols
    - Implementations provided by the shell via dependency injection
    - All gateway failures surface as PaymentProviderError

Design Decisions:
    - Protocol over ABC: tests pass plain fakes, no inheritance hierarchy
    - Async in Protocol: implementations do network IO
"""

from typing import Protocol


class CheckoutSessionLike(Protocol):
    """Only the hosted page URL is consumed."""
    url: str | None


class PromotionCodeLike(Protocol):
    id: str
    code: str


class CouponLike(Protocol):
    id: str


class PaymentGateway(Protocol):
    """Contract for the hosted-checkout provider — implemented by infrastructure."""
    async def create_checkout_session(self, params: dict) -> CheckoutSessionLike: ...
    async def list_active_promotion_codes(
        self, limit: int = 100,
    ) -> list[PromotionCodeLike]: ...
    async def create_coupon(
        self, *, percent_off: int, duration: str, name: str,
    ) -> CouponLike: ...
    async def create_promotion_code(
        self, *, coupon_id: str, code: str,
    ) -> PromotionCodeLike: ...
