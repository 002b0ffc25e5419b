"""Merch Storefront API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StorefrontError → flat {"error": ...} JSON
    - CORS configured from settings (not hardcoded)
    - Logging configured once on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront import __version__
from storefront.api.error_handlers import register_error_handlers
from storefront.api.routes import catalog, checkout, health
from storefront.config import get_settings
from storefront.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if not settings.stripe_secret_key:
        logger.warning("STRIPE_SECRET_KEY is not set; checkout requests will fail")
    logger.info("Storefront API started")
    yield
    logger.info("Storefront API shutting down")


app = FastAPI(
    title="Merch Storefront API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(catalog.router)
app.include_router(checkout.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("storefront.main:app", host="0.0.0.0", port=get_settings().port)


if __name__ == "__main__":
    run()
