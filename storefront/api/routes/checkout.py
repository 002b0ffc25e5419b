"""Checkout Route — POST /api/create-checkout-session.

Invariants:
    - Route is thin: method, raw body and headers are handed to CheckoutSessionService
    - Other methods on the same path answer 405 {"error": "Method Not Allowed"}
      instead of the framework default
    - CORS preflights (OPTIONS with Origin and Access-Control-Request-Method)
      are answered by the CORS middleware before reaching the route
    - Success body is exactly {"url": ...}
"""

import logging

from fastapi import APIRouter, Depends, Request

from storefront.api.dependencies import get_checkout_service
from storefront.schemas.checkout import CheckoutSessionResponse, ErrorResponse
from storefront.services.checkout_session import CheckoutSessionService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["checkout"])

CHECKOUT_PATH = "/create-checkout-session"


@router.api_route(
    CHECKOUT_PATH,
    methods=["POST", "GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"],
    response_model=CheckoutSessionResponse,
    responses={
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def create_checkout_session(
    request: Request,
    service: CheckoutSessionService = Depends(get_checkout_service),
):
    """Create a hosted checkout session for the posted cart."""
    url = await service.create(
        request.method,
        await request.body(),
        request.headers,
        path=request.url.path,
    )
    return CheckoutSessionResponse(url=url)
