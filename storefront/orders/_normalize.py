"""
Normalization — each channel's native record into the canonical Order.

Delivery documents are mapped field by field with NA defaults so legacy
and partial records still render. Gateway sessions are rebuilt from the
metadata bag plus an optional resolved product.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from storefront.catalog import Product
from storefront.gateway import DecodedMetadata, GatewaySession
from storefront.orders._timestamps import to_seconds
from storefront.orders._types import (
    GATEWAY_STATUS,
    NA,
    Channel,
    Customer,
    DeliveryStatus,
    Order,
    ProductSnapshot,
)
from storefront.store import Document

ADDRESS_PARTS = ("line1", "city", "state", "postal_code", "country")


def _text(value: object) -> str:
    if value is None or value == "":
        return NA
    return str(value)


def _number(value: object) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def _minor(value: object) -> int:
    """Stored amount is already minor units; only coerce, never rescale."""
    if value is None or value == "" or isinstance(value, bool):
        return 0
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _quantity(value: object) -> int:
    try:
        quantity = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return 1
    return quantity if quantity >= 1 else 1


def flatten_address(address: Mapping[str, Any] | None) -> str:
    """Gateway structured address to "line1, city, state, postal_code, country"."""
    if not address:
        return NA
    return ", ".join(str(address.get(part) or "") for part in ADDRESS_PARTS).strip()


# ═══════════════════════════════════════════════════════════════════════════════
# Delivery channel
# ═══════════════════════════════════════════════════════════════════════════════

def order_from_delivery(doc: Document, now: float | None = None) -> Order:
    customer: Mapping[str, Any] = doc.get("customer") or {}
    product: Mapping[str, Any] = doc.get("product") or {}
    price = _number(product.get("price"))
    return Order(
        id=str(doc["_id"]),
        channel=Channel.DELIVERY,
        customer=Customer(
            name=_text(customer.get("name")),
            email=_text(customer.get("email")),
            phone=_text(customer.get("phone")),
            address=_text(customer.get("address")),
        ),
        product=ProductSnapshot(
            id=_text(product.get("id")),
            name=_text(product.get("name")),
            category=_text(product.get("category")),
            is_custom_product=bool(product.get("isCustomProduct", False)),
            custom_text=_text(product.get("customText")),
            design_image=product.get("designImageId") or product.get("customImage") or None,
            price=price,
        ),
        selected_color=_text(doc.get("selectedColor")),
        selected_size=_text(doc.get("selectedSize")),
        quantity=_quantity(doc.get("quantity", 1)),
        amount_total=_minor(doc.get("amount_total")),
        created=to_seconds(doc.get("created"), now),
        status=str(doc.get("status") or DeliveryStatus.PENDING),
        coupon=_text(doc.get("couponCode")),
        discount_percentage=_number(doc.get("discountPercentage")) or 0.0,
        original_price=_number(doc.get("originalPrice")) or price,
        final_price=_number(doc.get("finalPrice")) or price,
        preferred_method=str(doc.get("preferredMethod") or "cash"),
        additional_notes=str(doc.get("additionalNotes") or ""),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Gateway channel
# ═══════════════════════════════════════════════════════════════════════════════

def order_from_session(
    session: GatewaySession,
    decoded: DecodedMetadata,
    product: Product | None = None,
) -> Order:
    """
    Rebuild a gateway order.

    Without a resolved product the name falls back to the line item's
    description and the category to NA.
    """
    meta = decoded.metadata
    details = session.customer_details
    address = details.get("address")
    return Order(
        id=session.id,
        channel=Channel.GATEWAY,
        customer=Customer(
            # Guest checkouts carry the name only in metadata
            name=_text(meta.customer_name or details.get("name")),
            email=_text(details.get("email")),
            phone=_text(meta.phone or details.get("phone")),
            address=flatten_address(address) if address else _text(meta.address),
        ),
        product=ProductSnapshot(
            id=_text(meta.product_id),
            name=_text(product.name if product else session.line_item_description),
            category=_text(product.category if product else None),
            is_custom_product=meta.is_custom_product,
            custom_text=_text(meta.custom_text),
            design_image=meta.design_image_id or (product.design_image if product else None),
            price=product.price if product else None,
        ),
        selected_color=_text(meta.color),
        selected_size=_text(meta.size),
        quantity=meta.quantity,
        amount_total=_minor(session.amount_total),
        created=to_seconds(session.created),
        status=GATEWAY_STATUS,
        coupon=_text(meta.coupon),
        discount_percentage=_number(meta.discount_percentage) or 0.0,
        original_price=_number(meta.original_price),
        final_price=_number(meta.final_price),
    )


__all__ = ("flatten_address", "order_from_delivery", "order_from_session")
