"""
Delivery channel — the order document is written at checkout time.

No gateway round trip and no metadata bag: this channel owns its storage,
so the full canonical document goes straight in with status "pending".
"""

import logging
from datetime import UTC, datetime

from kungfu import Error, Ok

import combinators as C
from storefront import catalog as Cat
from storefront import coupons as Cp
from storefront import graph as G
from storefront import pricing as P
from storefront._errors import UpstreamError
from storefront.checkout._nodes import CheckoutNode, CouponNode, ProductNode, QuoteNode
from storefront.checkout._types import CheckoutRequest, DeliveryPreferences
from storefront.orders import Channel, DeliveryStatus
from storefront.store import Collection, Document, DocumentStore

logger = logging.getLogger(__name__)


def delivery_document(
    request: CheckoutRequest,
    product: Cat.Product,
    quote: P.Quote,
    coupon: Cp.CouponVerdict,
    preferences: DeliveryPreferences,
    now: datetime,
) -> Document:
    selection, contact = request.selection, request.contact
    document: Document = {
        "paymentMethod": Channel.DELIVERY.value,
        "preferredMethod": preferences.preferred_method or "cash",
        "additionalNotes": preferences.additional_notes or "",
        "customer": {
            "name": contact.name,
            "email": contact.email,
            "phone": contact.phone,
            "address": contact.address,
        },
        "product": {
            "id": product.id,
            "name": product.name,
            "price": product.price,
            "category": product.category,
            "isCustomProduct": product.is_custom,
            "customText": selection.custom_text or "",
            "customImage": product.custom_image if isinstance(product, Cat.CustomProduct) else None,
            "designImageId": selection.design_image_id or product.design_image,
        },
        "selectedColor": selection.color,
        "selectedSize": selection.size,
        "quantity": quote.quantity,
        "amount_total": quote.total_minor,
        "created": now,
        "status": DeliveryStatus.PENDING.value,
    }
    if isinstance(coupon, Cp.Accepted):
        document |= {
            "couponCode": coupon.code,
            "discountPercentage": coupon.discount_percentage,
            "originalPrice": float(quote.original_total),
            "finalPrice": float(quote.total_major),
        }
    return document


@G.node
class DeliveryOrderNode:
    """Persisted delivery order id."""

    def __init__(self, data: str) -> None:
        self.data = data

    @classmethod
    async def __compose__(
        cls,
        checkout: CheckoutNode,
        product: ProductNode,
        quote: QuoteNode,
        coupon: CouponNode,
        preferences: DeliveryPreferences,
        store: DocumentStore,
    ) -> "DeliveryOrderNode":
        document = delivery_document(
            checkout.data,
            product.data,
            quote.data,
            coupon.data,
            preferences,
            datetime.now(UTC),
        )
        inserted = await C.catching_async(
            lambda: store.insert_one(Collection.ORDERS, document),
            on_error=lambda e: UpstreamError.wrap(e, "Database error"),
        )
        match inserted:
            case Ok(order_id):
                logger.info(
                    "delivery order %s for product %s x%d (%d minor)",
                    order_id,
                    product.data.id,
                    quote.data.quantity,
                    quote.data.total_minor,
                )
                return cls(order_id)
            case Error(e):
                logger.error("delivery order for product %s failed: %s", product.data.id, e)
                raise e


__all__ = ("delivery_document", "DeliveryOrderNode")
