"""Catalog Schemas — the public catalog view served to the storefront script."""

from pydantic import BaseModel, Field


class ProductView(BaseModel):
    sku: str
    name: str
    unit_amount: int = Field(ge=0)
    images: list[str] = []
    available: bool = True


class CatalogView(BaseModel):
    currency: str
    sizes: list[str]
    products: list[ProductView]

    def purchasable_skus(self) -> frozenset[str]:
        return frozenset(p.sku for p in self.products if p.available)

    def by_sku(self) -> dict[str, ProductView]:
        return {p.sku: p for p in self.products}
