"""API test fixtures — FastAPI test client with settings, gateway and promo slot overridden.

Invariants:
    - Every test gets a fresh FakeGateway and a fresh FreePromoProvisioner
    - Tests mutate `api_state["settings"]` to change configuration per request
    - Overrides are cleared after each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from storefront.api.dependencies import (
    get_free_promo_provisioner,
    get_gateway_factory,
)
from storefront.config import get_settings
from storefront.main import app
from storefront.services.free_promo import FreePromoProvisioner
from tests.mock_stripe import FakeGateway


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def api_state(settings, gateway):
    """Mutable holder read by the dependency overrides on every request."""
    return {
        "settings": settings,
        "gateway": gateway,
        "provisioner": FreePromoProvisioner(None),
        "gateway_keys": [],
    }


@pytest.fixture
async def client(api_state):
    def gateway_factory(api_key):
        api_state["gateway_keys"].append(api_key)
        return api_state["gateway"]

    app.dependency_overrides[get_settings] = lambda: api_state["settings"]
    app.dependency_overrides[get_gateway_factory] = lambda: gateway_factory
    app.dependency_overrides[get_free_promo_provisioner] = lambda: api_state["provisioner"]

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
