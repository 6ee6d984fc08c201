"""
Gateway channel — hosted card checkout session.

The metadata bag is encoded here and nowhere else. Every field the order
list will ever show for this order has to be in it.
"""

import logging
from decimal import Decimal

from kungfu import Error, Ok

import combinators as C
from storefront import gateway as Gw
from storefront import graph as G
from storefront._errors import UpstreamError
from storefront.checkout._nodes import CheckoutNode, CouponNode, ProductNode, QuoteNode
from storefront.config import Settings

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")


def _money(value: Decimal) -> str:
    return str(value.quantize(_CENTS))


@G.node
class MetadataNode:
    def __init__(self, data: dict[str, str]) -> None:
        self.data = data

    @classmethod
    def __compose__(
        cls,
        checkout: CheckoutNode,
        product: ProductNode,
        quote: QuoteNode,
        coupon: CouponNode,
    ) -> "MetadataNode":
        request, q = checkout.data, quote.data
        selection, contact = request.selection, request.contact
        accepted = coupon.accepted
        return cls(
            Gw.encode(
                Gw.CheckoutMetadata(
                    product_id=request.product_id,
                    is_custom_product=product.data.is_custom,
                    quantity=q.quantity,
                    color=selection.color,
                    size=selection.size,
                    custom_text=selection.custom_text,
                    design_image_id=selection.design_image_id or product.data.design_image,
                    customer_name=contact.name,
                    phone=contact.phone,
                    address=contact.address,
                    coupon=accepted.code if accepted else None,
                    discount_percentage=str(accepted.discount_percentage) if accepted else None,
                    original_price=_money(q.original_total) if accepted else None,
                    final_price=_money(q.charged_major) if accepted else None,
                )
            )
        )


@G.node
class SessionNode:
    """Hosted session created with exactly one line item."""

    def __init__(self, data: Gw.SessionHandle) -> None:
        self.data = data

    @classmethod
    async def __compose__(
        cls,
        checkout: CheckoutNode,
        product: ProductNode,
        quote: QuoteNode,
        metadata: MetadataNode,
        settings: Settings,
        gateway: Gw.Gateway,
    ) -> "SessionNode":
        request = checkout.data
        session_request = Gw.build_session_request(
            settings,
            product_id=request.product_id,
            label=Gw.line_item_label(
                product.data.name, request.selection.color, request.selection.size
            ),
            unit_amount=quote.data.unit_amount_minor,
            quantity=quote.data.quantity,
            customer_email=request.contact.email,
            metadata=metadata.data,
        )
        created = await C.catching_async(
            lambda: gateway.create_session(session_request),
            on_error=lambda e: UpstreamError.wrap(e, "Could not reach payment processing"),
        )
        match created:
            case Ok(handle):
                logger.info(
                    "gateway session %s for product %s x%d (%d minor)",
                    handle.id,
                    request.product_id,
                    quote.data.quantity,
                    quote.data.total_minor,
                )
                return cls(handle)
            case Error(e):
                logger.error("gateway session for product %s failed: %s", request.product_id, e)
                raise e


__all__ = ("MetadataNode", "SessionNode")
