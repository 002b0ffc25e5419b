"""Root conftest — shared test configuration."""

import os

import pytest

# Ensure tests don't accidentally use real API keys
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_fake-key")
os.environ.setdefault("LOG_FORMAT", "text")

from storefront.config import Settings  # noqa: E402


def build_settings(**overrides) -> Settings:
    """Settings isolated from the process environment and any .env file."""
    values = {
        "stripe_secret_key": "sk_live_fake-key",
        "domain": None,
        "checkout_enabled": True,
        "auto_free_promo_code": None,
        "stripe_price_ids": {},
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def make_settings():
    return build_settings


@pytest.fixture
def settings():
    return build_settings()
