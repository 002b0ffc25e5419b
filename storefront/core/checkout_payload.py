"""Checkout Payload — pure construction of the Stripe Checkout Session request.

Invariants:
    - resolve_base_url returns an absolute http(s) origin without trailing slash, or raises
    - Image URLs that cannot be made absolute are dropped, never fatal
    - A configured price id replaces inline price_data for that sku
    - Session params are one-time payment mode with promotion codes allowed
"""

import json
from typing import Mapping
from urllib.parse import urljoin, urlsplit

from storefront.core.catalog import CATALOG, Product
from storefront.core.domain_types import CURRENCY, CartRequestItem
from storefront.core.errors import UnresolvableDomainError


SUCCESS_PATH = "/success.html"
CANCEL_PATH = "/cancel.html"


def _is_absolute_http_url(url: str) -> bool:
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def infer_origin(headers: Mapping[str, str]) -> str:
    """Origin as seen by the visitor, from proxy headers. Empty without a host.

    Header names are matched case-insensitively; a comma-separated
    x-forwarded-proto contributes its first entry.
    """
    lowered = {str(k).lower(): str(v) for k, v in headers.items()}
    proto = lowered.get("x-forwarded-proto", "").split(",")[0].strip() or "https"
    host = lowered.get("host", "").strip()
    return f"{proto}://{host}" if host else ""


def resolve_base_url(override: str | None, headers: Mapping[str, str]) -> str:
    """DOMAIN override wins; otherwise infer from the inbound request."""
    candidate = (override or "").strip() or infer_origin(headers)
    if not _is_absolute_http_url(candidate):
        raise UnresolvableDomainError(candidate)
    return candidate.rstrip("/")


def absolute_asset_url(base_url: str, asset_path: str) -> str:
    """Resolve a site-relative asset path against the base URL ("" on failure)."""
    cleaned = str(asset_path or "").lstrip("/")
    if not cleaned:
        return ""
    base = base_url if base_url.endswith("/") else f"{base_url}/"
    try:
        url = urljoin(base, cleaned)
    except ValueError:
        return ""
    return url if _is_absolute_http_url(url) else ""


def build_line_item(
    item: CartRequestItem,
    product: Product,
    base_url: str,
    price_id: str | None = None,
) -> dict:
    if price_id:
        return {"price": price_id, "quantity": item["quantity"]}

    product_data: dict = {
        "name": product.name,
        "description": f"Size: {item['size']}",
    }
    images = [
        url for url in (absolute_asset_url(base_url, p) for p in product.image_paths)
        if url
    ]
    if images:
        product_data["images"] = images

    return {
        "price_data": {
            "currency": CURRENCY,
            "unit_amount": product.unit_amount,
            "product_data": product_data,
        },
        "quantity": item["quantity"],
    }


def build_line_items(
    items: list[CartRequestItem],
    base_url: str,
    price_ids: Mapping[str, str] | None = None,
    catalog: Mapping[str, Product] = CATALOG,
) -> list[dict]:
    """One line item per normalized item. Items must already be normalized."""
    price_ids = price_ids or {}
    line_items = []
    for item in items:
        product = catalog[item["sku"]]
        price_id = price_ids.get(item["sku"]) or product.price_id
        line_items.append(build_line_item(item, product, base_url, price_id))
    return line_items


def serialize_items(items: list[CartRequestItem]) -> str:
    """Compact JSON used as reconciliation metadata on the session."""
    return json.dumps(items, separators=(",", ":"))


def build_session_params(
    items: list[CartRequestItem],
    line_items: list[dict],
    base_url: str,
) -> dict:
    return {
        "mode": "payment",
        "line_items": line_items,
        "allow_promotion_codes": True,
        "success_url": f"{base_url}{SUCCESS_PATH}",
        "cancel_url": f"{base_url}{CANCEL_PATH}",
        "metadata": {"items": serialize_items(items)},
    }
