"""
Request/response models for the HTTP surface.

Request models accept the storefront's camelCase JSON names and turn
themselves into ops, taking path parameters and the forwarded identity from
the RouteContext. Nothing is required at this layer, so a missing field
surfaces as the core's MissingField rather than a schema error. Response
models are built from the Ok value of an op.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel
from pydantic.alias_generators import to_camel

from storefront import checkout as Co
from storefront import coupons as Cp
from storefront import orders as Or
from storefront.api import _ops as ops
from storefront.auth import Caller
from storefront.gateway import SessionHandle
from storefront.wire import RouteContext


class _Camel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _caller(ctx: RouteContext) -> Caller:
    return Caller.from_headers(ctx.headers)


# ═══════════════════════════════════════════════════════════════════════════════
# Checkout
# ═══════════════════════════════════════════════════════════════════════════════

class CheckoutIn(_Camel):
    product_id: str | None = None
    is_custom_product: bool = False
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    color: str | None = None
    size: str | None = None
    quantity: Any = 1
    custom_text: str | None = None
    design_image_id: str | None = None
    coupon_code: str | None = None

    def checkout_request(self) -> Co.CheckoutRequest:
        return Co.CheckoutRequest(
            product_id=self.product_id or "",
            is_custom_product=self.is_custom_product,
            contact=Co.Contact(
                name=self.name or "",
                email=self.email or "",
                phone=self.phone or "",
                address=self.address or "",
            ),
            selection=Co.Selection(
                color=self.color or "",
                size=self.size or "",
                quantity=1 if self.quantity is None else self.quantity,
                custom_text=self.custom_text or "",
                design_image_id=self.design_image_id or None,
            ),
            coupon_code=self.coupon_code,
        )

    def to_domain(self, ctx: RouteContext) -> ops.CreateCheckoutSession:
        return ops.CreateCheckoutSession(self.checkout_request())


class DeliveryOrderIn(CheckoutIn):
    # a client-side price is accepted for compatibility and ignored
    price: Any = None
    preferred_method: str | None = None
    additional_notes: str | None = None

    def to_domain(self, ctx: RouteContext) -> ops.CreateDeliveryOrder:  # type: ignore[override]
        return ops.CreateDeliveryOrder(
            self.checkout_request(),
            Co.DeliveryPreferences(
                preferred_method=self.preferred_method or "cash",
                additional_notes=self.additional_notes or "",
            ),
        )


class SessionOut(_Camel):
    id: str
    url: str | None = None

    @classmethod
    def from_domain(cls, dom: SessionHandle) -> SessionOut:
        return cls(id=dom.id, url=dom.url)


class DeliveryOrderOut(_Camel):
    id: str
    status: str

    @classmethod
    def from_domain(cls, dom: Co.DeliveryReceipt) -> DeliveryOrderOut:
        return cls(id=dom.id, status=dom.status)


# ═══════════════════════════════════════════════════════════════════════════════
# Orders
# ═══════════════════════════════════════════════════════════════════════════════

class CustomerOut(_Camel):
    name: str
    email: str
    phone: str
    address: str


class ProductOut(_Camel):
    id: str
    name: str
    category: str
    is_custom_product: bool
    custom_text: str
    design_image: str | None
    price: float | None


class OrderOut(_Camel):
    id: str
    channel: str
    customer: CustomerOut
    product: ProductOut
    selected_color: str
    selected_size: str
    quantity: int
    amount_total: int = Field(alias="amount_total")
    created: float
    status: str
    coupon: str
    discount_percentage: float
    original_price: float | None
    final_price: float | None
    preferred_method: str | None
    additional_notes: str

    @classmethod
    def from_domain(cls, dom: Or.Order) -> OrderOut:
        return cls.model_validate(
            {
                "id": dom.id,
                "channel": dom.channel.value,
                "customer": CustomerOut(
                    name=dom.customer.name,
                    email=dom.customer.email,
                    phone=dom.customer.phone,
                    address=dom.customer.address,
                ),
                "product": ProductOut(
                    id=dom.product.id,
                    name=dom.product.name,
                    category=dom.product.category,
                    is_custom_product=dom.product.is_custom_product,
                    custom_text=dom.product.custom_text,
                    design_image=dom.product.design_image,
                    price=dom.product.price,
                ),
                "selected_color": dom.selected_color,
                "selected_size": dom.selected_size,
                "quantity": dom.quantity,
                "amount_total": dom.amount_total,
                "created": dom.created,
                "status": dom.status,
                "coupon": dom.coupon,
                "discount_percentage": dom.discount_percentage,
                "original_price": dom.original_price,
                "final_price": dom.final_price,
                "preferred_method": dom.preferred_method,
                "additional_notes": dom.additional_notes,
            }
        )


class OrdersOut(RootModel[list[OrderOut]]):
    @classmethod
    def from_domain(cls, dom: Or.OrderFeed) -> OrdersOut:
        return cls([OrderOut.from_domain(o) for o in dom.orders])


class ListOrdersIn(_Camel):
    def to_domain(self, ctx: RouteContext) -> ops.ListOrders:
        return ops.ListOrders.for_caller(_caller(ctx))


class OrderDetailsIn(BaseModel):
    # query string names are snake_case: ?session_id=... or ?order_id=...
    session_id: str | None = None
    order_id: str | None = None

    def to_domain(self, ctx: RouteContext) -> ops.GetOrderDetails:
        return ops.GetOrderDetails(session_id=self.session_id, order_id=self.order_id)


class StatusIn(_Camel):
    status: str | None = None

    def to_domain(self, ctx: RouteContext) -> ops.UpdateOrderStatus:
        return ops.UpdateOrderStatus(_caller(ctx), ctx.param("id"), self.status)


class StatusOut(_Camel):
    success: bool = True
    status: str

    @classmethod
    def from_domain(cls, dom: Or.DeliveryStatus) -> StatusOut:
        return cls(status=dom.value)


# ═══════════════════════════════════════════════════════════════════════════════
# Coupons
# ═══════════════════════════════════════════════════════════════════════════════

class ValidateCouponIn(_Camel):
    code: str | None = None

    def to_domain(self, ctx: RouteContext) -> ops.ValidateCoupon:
        return ops.ValidateCoupon(self.code)


class CouponVerdictOut(_Camel):
    valid: bool = True
    code: str
    discount_percentage: float
    description: str

    @classmethod
    def from_domain(cls, dom: Cp.Accepted) -> CouponVerdictOut:
        return cls(
            code=dom.code,
            discount_percentage=dom.discount_percentage,
            description=dom.description,
        )


class CouponOut(_Camel):
    id: str
    code: str
    discount_percentage: float
    description: str
    is_active: bool
    created_at: Any = None
    updated_at: Any = None

    @classmethod
    def from_domain(cls, dom: Cp.Coupon) -> CouponOut:
        return cls(
            id=dom.id,
            code=dom.code,
            discount_percentage=dom.discount_percentage,
            description=dom.description,
            is_active=dom.is_active,
            created_at=dom.created_at,
            updated_at=dom.updated_at,
        )


class CouponsOut(RootModel[list[CouponOut]]):
    @classmethod
    def from_domain(cls, dom: list[Cp.Coupon]) -> CouponsOut:
        return cls([CouponOut.from_domain(c) for c in dom])


class ListCouponsIn(_Camel):
    def to_domain(self, ctx: RouteContext) -> ops.ListCoupons:
        return ops.ListCoupons(_caller(ctx))


class CreateCouponIn(_Camel):
    code: str | None = None
    discount_percentage: float | None = None
    description: str | None = None
    is_active: bool = True

    def to_domain(self, ctx: RouteContext) -> ops.CreateCoupon:
        return ops.CreateCoupon(
            _caller(ctx),
            self.code,
            self.discount_percentage,
            self.description or "",
            self.is_active,
        )


class SetCouponActiveIn(_Camel):
    is_active: bool | None = None

    def to_domain(self, ctx: RouteContext) -> ops.SetCouponActive:
        return ops.SetCouponActive(_caller(ctx), ctx.param("id"), self.is_active)


class DeleteCouponIn(_Camel):
    def to_domain(self, ctx: RouteContext) -> ops.DeleteCoupon:
        return ops.DeleteCoupon(_caller(ctx), ctx.param("id"))


class SuccessOut(_Camel):
    success: bool = True

    @classmethod
    def from_domain(cls, dom: None) -> SuccessOut:
        return cls()


__all__ = (
    "CheckoutIn",
    "DeliveryOrderIn",
    "SessionOut",
    "DeliveryOrderOut",
    "CustomerOut",
    "ProductOut",
    "OrderOut",
    "OrdersOut",
    "ListOrdersIn",
    "OrderDetailsIn",
    "StatusIn",
    "StatusOut",
    "ValidateCouponIn",
    "CouponVerdictOut",
    "CouponOut",
    "CouponsOut",
    "ListCouponsIn",
    "CreateCouponIn",
    "SetCouponActiveIn",
    "DeleteCouponIn",
    "SuccessOut",
)
