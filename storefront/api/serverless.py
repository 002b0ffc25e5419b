"""Serverless Adapter — Netlify/Lambda-style entry point for the checkout service.

Invariants:
    - Same semantics as POST /api/create-checkout-session, same error bodies
    - Event headers are matched case-insensitively
    - Always returns a {"statusCode", "headers", "body"} dict, never raises
"""

import asyncio
import json
import logging

from storefront.api.dependencies import build_checkout_service, provisioner_for
from storefront.api.error_handlers import log_storefront_error
from storefront.config import get_settings
from storefront.core.errors import CheckoutFailedError, StorefrontError
from storefront.infrastructure.stripe_gateway import StripeGateway
from storefront.services.checkout_session import CheckoutSessionService

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def _response(status_code: int, payload: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(payload),
    }


def default_service() -> CheckoutSessionService:
    settings = get_settings()
    return build_checkout_service(
        settings, StripeGateway, provisioner_for(settings.auto_free_promo_code or ""),
    )


async def handle_event(
    event: dict, service: CheckoutSessionService | None = None,
) -> dict:
    """Handle one function invocation."""
    service = service or default_service()
    method = str(event.get("httpMethod") or "GET")
    headers = {str(k).lower(): str(v) for k, v in (event.get("headers") or {}).items()}
    path = event.get("path")
    try:
        url = await service.create(method, event.get("body"), headers, path=path)
    except StorefrontError as exc:
        log_storefront_error(exc, path)
        return _response(exc.http_status, exc.to_response())
    except Exception as exc:
        logger.error(f"Unhandled exception in function: {exc}", exc_info=True)
        failure = CheckoutFailedError()
        return _response(failure.http_status, failure.to_response())
    return _response(200, {"url": url})


def handler(event: dict, context: object = None) -> dict:
    """Synchronous entry point for runtimes that call handler(event, context)."""
    return asyncio.run(handle_event(event))
