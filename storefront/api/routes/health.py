"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 if checkout cannot succeed
      (missing Stripe key or kill-switch off)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from storefront import __version__
from storefront.config import Settings, get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "merch-storefront",
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    checks = {
        "stripe_credential": "configured" if settings.stripe_secret_key else "missing",
        "checkout": "enabled" if settings.checkout_enabled else "disabled",
    }
    if not settings.stripe_secret_key or not settings.checkout_enabled:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
