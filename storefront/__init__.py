"""
storefront — dual-channel checkout and order reconciliation.

    from storefront import checkout as Co   # Gateway session / delivery order
    from storefront import orders as Or     # Reconciled newest-first feed
    from storefront import coupons as Cp    # Validation and administration
    from storefront.api import create_app   # HTTP surface
"""

from storefront import store
from storefront import catalog
from storefront import coupons
from storefront import pricing
from storefront import gateway
from storefront import orders
from storefront import checkout
from storefront._errors import (
    ErrorKind,
    StorefrontError,
    ValidationError,
    NotFoundError,
    AuthorizationError,
    UpstreamError,
    PartialProcessingError,
)
from storefront.config import Settings

__version__ = "0.1.0"

__all__ = (
    "store",
    "catalog",
    "coupons",
    "pricing",
    "gateway",
    "orders",
    "checkout",
    "ErrorKind",
    "StorefrontError",
    "ValidationError",
    "NotFoundError",
    "AuthorizationError",
    "UpstreamError",
    "PartialProcessingError",
    "Settings",
)
