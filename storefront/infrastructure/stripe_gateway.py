"""Stripe Gateway — wraps the stripe SDK behind the PaymentGateway protocol.

Invariants:
    - The secret key is passed per call (api_key=...), never set on the global module
    - SDK calls are blocking and run in a worker thread (asyncio.to_thread)
    - Every stripe.StripeError is mapped to PaymentProviderError with type/code
    - No timeout or retry is layered on top of the SDK defaults
"""

import asyncio
import logging

import stripe

from storefront.core.errors import ErrorContext, PaymentProviderError

logger = logging.getLogger(__name__)

# Fallback classification when the error carries no error object
_ERROR_TYPES: tuple[tuple[type[stripe.StripeError], str], ...] = (
    (stripe.CardError, "card_error"),
    (stripe.InvalidRequestError, "invalid_request_error"),
    (stripe.AuthenticationError, "authentication_error"),
    (stripe.PermissionError, "permission_error"),
    (stripe.RateLimitError, "rate_limit_error"),
    (stripe.APIConnectionError, "api_connection_error"),
)


def _classify(e: stripe.StripeError) -> str:
    error_object = getattr(e, "error", None)
    error_type = getattr(error_object, "type", None)
    if error_type:
        return str(error_type)
    for cls, name in _ERROR_TYPES:
        if isinstance(e, cls):
            return name
    return "api_error"


def map_stripe_error(
    e: stripe.StripeError, context: ErrorContext | None = None,
) -> PaymentProviderError:
    """Translate an SDK error into the domain error (message stays generic)."""
    return PaymentProviderError(
        str(e.user_message or e),
        provider_type=_classify(e),
        provider_code=e.code,
        context=context,
    )


class StripeGateway:
    """PaymentGateway backed by the Stripe API."""

    def __init__(self, api_key: str):
        self.api_key = api_key

    async def _call(self, fn, **params):
        try:
            return await asyncio.to_thread(fn, api_key=self.api_key, **params)
        except stripe.StripeError as e:
            logger.warning(
                f"Stripe call {fn.__qualname__} failed: {e}",
                extra={
                    "provider_error_type": _classify(e),
                    "provider_error_code": e.code,
                },
            )
            raise map_stripe_error(e)

    async def create_checkout_session(self, params: dict):
        return await self._call(stripe.checkout.Session.create, **params)

    async def list_active_promotion_codes(self, limit: int = 100):
        result = await self._call(
            stripe.PromotionCode.list, active=True, limit=limit,
        )
        return list(result.data)

    async def create_coupon(self, *, percent_off: int, duration: str, name: str):
        return await self._call(
            stripe.Coupon.create,
            percent_off=percent_off, duration=duration, name=name,
        )

    async def create_promotion_code(self, *, coupon_id: str, code: str):
        return await self._call(
            stripe.PromotionCode.create,
            promotion={"type": "coupon", "coupon": coupon_id},
            code=code, active=True,
        )
