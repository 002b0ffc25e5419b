"""Route Dependencies — wiring of settings, gateway and promo slot into the service.

Invariants:
    - Every collaborator reaches routes through Depends(): tests override them
    - One FreePromoProvisioner per promo code per process (lru_cache)
"""

from functools import lru_cache

from fastapi import Depends

from storefront.config import Settings, get_settings
from storefront.infrastructure.stripe_gateway import StripeGateway
from storefront.services.checkout_session import CheckoutSessionService, GatewayFactory
from storefront.services.free_promo import FreePromoProvisioner


def get_gateway_factory() -> GatewayFactory:
    return StripeGateway


@lru_cache
def provisioner_for(code: str) -> FreePromoProvisioner:
    return FreePromoProvisioner(code)


def get_free_promo_provisioner(
    settings: Settings = Depends(get_settings),
) -> FreePromoProvisioner:
    return provisioner_for(settings.auto_free_promo_code or "")


def build_checkout_service(
    settings: Settings,
    gateway_factory: GatewayFactory,
    provisioner: FreePromoProvisioner,
) -> CheckoutSessionService:
    return CheckoutSessionService(settings, gateway_factory, provisioner)


def get_checkout_service(
    settings: Settings = Depends(get_settings),
    gateway_factory: GatewayFactory = Depends(get_gateway_factory),
    provisioner: FreePromoProvisioner = Depends(get_free_promo_provisioner),
) -> CheckoutSessionService:
    return build_checkout_service(settings, gateway_factory, provisioner)
