"""Storefront Client — the cart state and checkout flow of the storefront page.

Invariants:
    - Shares cart_rules with the server: client and server sanitize identically
    - Catalog data comes from the served catalog view, never a local copy
"""
