"""Service test fixtures — a CheckoutSessionService wired to a FakeGateway.

Invariants:
    - gateway_keys records the secret key each gateway was built with
    - make_service accepts Settings overrides and an optional provisioner
"""

import pytest

from storefront.services.checkout_session import CheckoutSessionService
from tests.mock_stripe import FakeGateway


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def gateway_keys():
    return []


@pytest.fixture
def make_service(make_settings, gateway, gateway_keys):
    def factory(provisioner=None, **overrides):
        def gateway_factory(api_key):
            gateway_keys.append(api_key)
            return gateway

        return CheckoutSessionService(
            make_settings(**overrides), gateway_factory, provisioner,
        )

    return factory
