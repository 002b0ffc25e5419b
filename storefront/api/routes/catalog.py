"""Catalog Route — GET /api/catalog, the generated view the storefront script renders from."""

from fastapi import APIRouter

from storefront.core.catalog import catalog_view
from storefront.schemas.catalog import CatalogView

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/catalog", response_model=CatalogView)
async def get_catalog():
    return catalog_view()
