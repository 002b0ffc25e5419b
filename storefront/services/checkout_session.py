"""Checkout Session Service — turns a posted cart into a hosted Stripe Checkout URL.

Invariants:
    - Stateless per request; the free promo slot is the only shared state
    - Guard order is fixed: method → kill-switch → credential → body → cart → domain
    - The client's item list is re-normalized against the server catalog, never trusted
    - Every failure leaves as a StorefrontError; unexpected exceptions become
      CheckoutFailedError (generic message, details only in logs)
"""

import asyncio
import json
import logging
from collections.abc import Callable
from typing import Mapping

from storefront.config import Settings
from storefront.core.cart_rules import normalize_cart_items
from storefront.core.catalog import CATALOG, Product, purchasable_skus
from storefront.core.checkout_payload import (
    build_line_items,
    build_session_params,
    resolve_base_url,
)
from storefront.core.errors import (
    CheckoutFailedError,
    EmptyCartError,
    ErrorContext,
    FeatureDisabledError,
    MethodNotAllowedError,
    MissingCredentialError,
    StorefrontError,
)
from storefront.core.gateway_protocols import PaymentGateway
from storefront.services.free_promo import FreePromoProvisioner

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[str], PaymentGateway]


def parse_body(raw_body: bytes | str | None) -> dict:
    """Decode the JSON request body. Malformed JSON raises CheckoutFailedError."""
    if raw_body is None or raw_body in (b"", ""):
        return {}
    try:
        body = json.loads(raw_body)
    except (ValueError, UnicodeDecodeError) as e:
        logger.warning(f"Malformed checkout body: {e}")
        raise CheckoutFailedError() from e
    return body if isinstance(body, dict) else {}


class CheckoutSessionService:
    """One instance per request; collaborators injected by the route."""

    def __init__(
        self,
        settings: Settings,
        gateway_factory: GatewayFactory,
        provisioner: FreePromoProvisioner | None = None,
        catalog: Mapping[str, Product] = CATALOG,
    ):
        self.settings = settings
        self.gateway_factory = gateway_factory
        self.provisioner = provisioner
        self.catalog = catalog

    def check_guards(self, method: str) -> str:
        """Steps that reject before the body is read. Returns the secret key."""
        if method.upper() != "POST":
            raise MethodNotAllowedError(method)
        if not self.settings.checkout_enabled:
            raise FeatureDisabledError()
        if not self.settings.stripe_secret_key:
            raise MissingCredentialError()
        return self.settings.stripe_secret_key

    async def create(
        self,
        method: str,
        raw_body: bytes | str | None,
        headers: Mapping[str, str],
        path: str | None = None,
    ) -> str:
        """Run the full request state machine and return the hosted checkout URL."""
        secret_key = self.check_guards(method)
        context = ErrorContext(path=path)
        try:
            return await self._create_session(secret_key, raw_body, headers, context)
        except StorefrontError:
            raise
        except Exception as e:
            logger.error(
                f"Unexpected checkout failure: {e}",
                extra={"path": path},
                exc_info=True,
            )
            raise CheckoutFailedError(context) from e

    async def _create_session(
        self,
        secret_key: str,
        raw_body: bytes | str | None,
        headers: Mapping[str, str],
        context: ErrorContext,
    ) -> str:
        body = parse_body(raw_body)
        items = normalize_cart_items(body.get("items"), purchasable_skus(self.catalog))
        context.sku_count = len(items)
        if not items:
            raise EmptyCartError(context)

        base_url = resolve_base_url(self.settings.domain, headers)
        gateway = self.gateway_factory(secret_key)

        if self.provisioner is not None:
            pending = self.provisioner.ensure_once(gateway)
            if pending is not None:
                await asyncio.shield(pending)

        line_items = build_line_items(
            items, base_url, self.settings.stripe_price_ids, self.catalog,
        )
        session = await gateway.create_checkout_session(
            build_session_params(items, line_items, base_url),
        )
        url = getattr(session, "url", None)
        if not url:
            raise CheckoutFailedError(context)

        logger.info(
            "Checkout session created",
            extra={"sku_count": len(items), "path": context.path},
        )
        return url
