"""
Shared checkout nodes.

    CheckoutNode ──┬── ProductNode ──┐
                   └── CouponNode ───┴── QuoteNode

Product resolution and coupon validation run concurrently; the quote waits
for both. A rejected coupon prices at 0% and never stops the graph.
"""

from kungfu import Error, Ok

from storefront import catalog as Cat
from storefront import coupons as Cp
from storefront import graph as G
from storefront import pricing as P
from storefront.checkout._types import CheckoutRequest
from storefront.store import DocumentStore


@G.node
class CheckoutNode:
    """Entry point: the already-validated request."""

    def __init__(self, data: CheckoutRequest) -> None:
        self.data = data

    @classmethod
    def __compose__(cls, request: CheckoutRequest) -> "CheckoutNode":
        return cls(request)


@G.node
class ProductNode:
    """Authoritative product from the collection the request names."""

    def __init__(self, data: Cat.Product) -> None:
        self.data = data

    @classmethod
    async def __compose__(cls, checkout: CheckoutNode, store: DocumentStore) -> "ProductNode":
        request = checkout.data
        source = Cat.source_for(request.is_custom_product)
        match await Cat.resolve(store, request.product_id, source):
            case Ok(product):
                return cls(product)
            case Error(e):
                raise e


@G.node
class CouponNode:
    """Coupon verdict; re-checked on every checkout, never cached."""

    def __init__(self, data: Cp.CouponVerdict) -> None:
        self.data = data

    @property
    def accepted(self) -> Cp.Accepted | None:
        return self.data if isinstance(self.data, Cp.Accepted) else None

    @classmethod
    async def __compose__(cls, checkout: CheckoutNode, store: DocumentStore) -> "CouponNode":
        return cls(await Cp.validate(store, checkout.data.coupon_code))


@G.node
class QuoteNode:
    def __init__(self, data: P.Quote) -> None:
        self.data = data

    @classmethod
    def __compose__(
        cls, checkout: CheckoutNode, product: ProductNode, coupon: CouponNode
    ) -> "QuoteNode":
        return cls(
            P.price(
                product.data.price,
                checkout.data.selection.quantity,
                coupon.data.discount_percentage,
            )
        )


__all__ = ("CheckoutNode", "ProductNode", "CouponNode", "QuoteNode")
