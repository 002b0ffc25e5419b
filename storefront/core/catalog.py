"""Product Catalog — the single source of truth for names, prices and images.

Invariants:
    - Catalog is immutable after import (frozen dataclasses in a MappingProxyType)
    - unit_amount is in minor units (cents); currency is always CURRENCY
    - Unavailable products stay listed but are never purchasable
    - The storefront script consumes catalog_view(), never its own copy
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from storefront.core.domain_types import CURRENCY, SIZES, MinorUnits, Sku


@dataclass(frozen=True)
class Product:
    sku: Sku
    name: str
    unit_amount: MinorUnits
    image_paths: tuple[str, ...] = ()
    available: bool = True
    price_id: str | None = None   # pre-registered Stripe price, if any


def _build(*products: Product) -> Mapping[str, Product]:
    return MappingProxyType({p.sku: p for p in products})


CATALOG: Mapping[str, Product] = _build(
    Product(
        sku=Sku("MERCH-01"), name="CHSN-T1", unit_amount=MinorUnits(4000),
        image_paths=("assets/chsn-t1.jpg", "assets/chsn-t1-2.png"),
    ),
    Product(
        sku=Sku("MERCH-02"), name="CHSN-H1", unit_amount=MinorUnits(8500),
        image_paths=("assets/chsn-h1.jpg", "assets/chsn-h1-2.png"),
    ),
    Product(
        sku=Sku("MERCH-03"), name="CHSN-T2", unit_amount=MinorUnits(4500),
        image_paths=("assets/chsn-t2.png",),
    ),
)


def get_product(sku: str, catalog: Mapping[str, Product] = CATALOG) -> Product | None:
    return catalog.get(sku)


def purchasable_skus(catalog: Mapping[str, Product] = CATALOG) -> frozenset[str]:
    """Skus that may appear in a cart."""
    return frozenset(sku for sku, p in catalog.items() if p.available)


def catalog_view(catalog: Mapping[str, Product] = CATALOG) -> dict:
    """Public, serializable view of the catalog for the storefront script."""
    return {
        "currency": CURRENCY,
        "sizes": list(SIZES),
        "products": [
            {
                "sku": p.sku,
                "name": p.name,
                "unit_amount": p.unit_amount,
                "images": list(p.image_paths),
                "available": p.available,
            }
            for p in catalog.values()
        ],
    }
