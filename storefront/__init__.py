"""Merch Storefront — catalog, cart rules and Stripe Checkout session service.

Invariants:
    - Package root contains no executable code beyond the version string
"""

__version__ = "1.0.0"
