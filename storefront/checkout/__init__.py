"""
Checkout — the two ways an order comes into existence.

    from storefront import checkout as Co

    request = Co.CheckoutRequest(
        product_id=pid,
        contact=Co.Contact(email="a@b.co"),
        selection=Co.Selection(color="Black", size="M", quantity=2),
        coupon_code="save20",
    )

    match await Co.create_checkout_session(request, store=store, gateway=gw, settings=s):
        case Ok(handle):
            redirect(handle.url)
        case Error(e):
            respond(e.status, e.message)

Both channels share product resolution, coupon validation and pricing;
only the gateway session / delivery document step differs.
"""

from storefront.checkout._types import (
    Contact,
    Selection,
    CheckoutRequest,
    DeliveryPreferences,
    DeliveryReceipt,
    GATEWAY_REQUIRED,
    DELIVERY_REQUIRED,
)
from storefront.checkout._nodes import (
    CheckoutNode,
    ProductNode,
    CouponNode,
    QuoteNode,
)
from storefront.checkout._gateway import MetadataNode, SessionNode
from storefront.checkout._delivery import delivery_document, DeliveryOrderNode
from storefront.checkout._initiate import create_checkout_session, create_delivery_order

__all__ = (
    "Contact",
    "Selection",
    "CheckoutRequest",
    "DeliveryPreferences",
    "DeliveryReceipt",
    "GATEWAY_REQUIRED",
    "DELIVERY_REQUIRED",
    "CheckoutNode",
    "ProductNode",
    "CouponNode",
    "QuoteNode",
    "MetadataNode",
    "SessionNode",
    "delivery_document",
    "DeliveryOrderNode",
    "create_checkout_session",
    "create_delivery_order",
)
