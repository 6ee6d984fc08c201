"""
Every externally reachable operation, as an Op plus its handler.

Admin-only operations carry the Caller and are refused before any I/O.
Order listing fans out: both channel loaders run concurrently as
dependencies of ListOrders.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kungfu import Error, Ok, Result

from storefront import checkout as Co
from storefront import coupons as Cp
from storefront import orders as Or
from storefront.auth import AdminPolicy, Caller, authorize
from storefront.config import Settings
from storefront.gateway import Gateway, SessionHandle
from storefront.ops import Returning
from storefront._errors import StorefrontError, ValidationError, NotFoundError
from storefront.store import DocumentStore


# ═══════════════════════════════════════════════════════════════════════════════
# Checkout
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class CreateCheckoutSession(Returning[SessionHandle, StorefrontError]):
    request: Co.CheckoutRequest


@dataclass(frozen=True, slots=True)
class CreateDeliveryOrder(Returning[Co.DeliveryReceipt, StorefrontError]):
    request: Co.CheckoutRequest
    preferences: Co.DeliveryPreferences = field(default_factory=Co.DeliveryPreferences)


async def create_checkout_session(
    req: CreateCheckoutSession,
    store: DocumentStore,
    gateway: Gateway,
    settings: Settings,
) -> Result[SessionHandle, StorefrontError]:
    return await Co.create_checkout_session(
        req.request, store=store, gateway=gateway, settings=settings
    )


async def create_delivery_order(
    req: CreateDeliveryOrder,
    store: DocumentStore,
    settings: Settings,
) -> Result[Co.DeliveryReceipt, StorefrontError]:
    return await Co.create_delivery_order(
        req.request, req.preferences, store=store, settings=settings
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Orders
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class LoadDeliveryOrders(Returning[Or.OrderFeed, StorefrontError]):
    caller: Caller


@dataclass(frozen=True, slots=True)
class LoadGatewayOrders(Returning[Or.OrderFeed, StorefrontError]):
    caller: Caller


@dataclass(frozen=True, slots=True)
class ListOrders(Returning[Or.OrderFeed, StorefrontError]):
    caller: Caller
    delivery: LoadDeliveryOrders
    gateway: LoadGatewayOrders

    @classmethod
    def for_caller(cls, caller: Caller) -> ListOrders:
        return cls(caller, LoadDeliveryOrders(caller), LoadGatewayOrders(caller))


async def load_delivery_orders(
    req: LoadDeliveryOrders,
    store: DocumentStore,
    policy: AdminPolicy,
) -> Result[Or.OrderFeed, StorefrontError]:
    match authorize(policy, req.caller):
        case Error(e):
            return Error(e)
    return await Or.load_delivery_orders(store)


async def load_gateway_orders(
    req: LoadGatewayOrders,
    store: DocumentStore,
    gateway: Gateway,
    settings: Settings,
    policy: AdminPolicy,
) -> Result[Or.OrderFeed, StorefrontError]:
    match authorize(policy, req.caller):
        case Error(e):
            return Error(e)
    return await Or.load_gateway_orders(store, gateway, settings)


async def list_orders(
    req: ListOrders,
    delivery: LoadDeliveryOrders,
    gateway: LoadGatewayOrders,
) -> Result[Or.OrderFeed, StorefrontError]:
    match (await delivery, await gateway):
        case (Ok(d), Ok(g)):
            return Ok(Or.merge_feeds(d, g))
        case (Error(e), _) | (_, Error(e)):
            return Error(e)


@dataclass(frozen=True, slots=True)
class GetOrderDetails(Returning[Or.Order, StorefrontError]):
    session_id: str | None = None
    order_id: str | None = None


async def get_order_details(
    req: GetOrderDetails,
    store: DocumentStore,
    gateway: Gateway,
    settings: Settings,
) -> Result[Or.Order, StorefrontError]:
    return await Or.order_details(
        store, gateway, settings, session_id=req.session_id, order_id=req.order_id
    )


@dataclass(frozen=True, slots=True)
class UpdateOrderStatus(Returning[Or.DeliveryStatus, StorefrontError]):
    caller: Caller
    order_id: str
    status: str | None


async def update_order_status(
    req: UpdateOrderStatus,
    store: DocumentStore,
    policy: AdminPolicy,
) -> Result[Or.DeliveryStatus, StorefrontError]:
    match authorize(policy, req.caller):
        case Error(e):
            return Error(e)
    return await Or.update_order_status(store, req.order_id, req.status)


# ═══════════════════════════════════════════════════════════════════════════════
# Coupons
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class ValidateCoupon(Returning[Cp.Accepted, StorefrontError]):
    code: str | None


async def validate_coupon(
    req: ValidateCoupon,
    store: DocumentStore,
) -> Result[Cp.Accepted, StorefrontError]:
    """The in-process verdict as a request outcome: blank is 400, rejected is 404."""
    match await Cp.validate(store, req.code):
        case Cp.Accepted() as accepted:
            return Ok(accepted)
        case Cp.Rejected(reason="absent"):
            return Error(ValidationError("Coupon code is required", "MISSING_FIELD"))
        case Cp.Rejected():
            return Error(NotFoundError("Invalid or inactive coupon code", "INVALID_COUPON"))


@dataclass(frozen=True, slots=True)
class ListCoupons(Returning[list[Cp.Coupon], StorefrontError]):
    caller: Caller


@dataclass(frozen=True, slots=True)
class CreateCoupon(Returning[Cp.Coupon, StorefrontError]):
    caller: Caller
    code: str | None
    discount_percentage: float | None
    description: str = ""
    is_active: bool = True


@dataclass(frozen=True, slots=True)
class SetCouponActive(Returning[None, StorefrontError]):
    caller: Caller
    coupon_id: str
    is_active: bool | None


@dataclass(frozen=True, slots=True)
class DeleteCoupon(Returning[None, StorefrontError]):
    caller: Caller
    coupon_id: str


async def list_coupons(
    req: ListCoupons,
    store: DocumentStore,
    policy: AdminPolicy,
) -> Result[list[Cp.Coupon], StorefrontError]:
    match authorize(policy, req.caller):
        case Error(e):
            return Error(e)
    return await Cp.list_coupons(store)


async def create_coupon(
    req: CreateCoupon,
    store: DocumentStore,
    policy: AdminPolicy,
) -> Result[Cp.Coupon, StorefrontError]:
    match authorize(policy, req.caller):
        case Error(e):
            return Error(e)
    return await Cp.create_coupon(
        store, req.code, req.discount_percentage, req.description, req.is_active
    )


async def set_coupon_active(
    req: SetCouponActive,
    store: DocumentStore,
    policy: AdminPolicy,
) -> Result[None, StorefrontError]:
    match authorize(policy, req.caller):
        case Error(e):
            return Error(e)
    return await Cp.set_coupon_active(store, req.coupon_id, req.is_active)


async def delete_coupon(
    req: DeleteCoupon,
    store: DocumentStore,
    policy: AdminPolicy,
) -> Result[None, StorefrontError]:
    match authorize(policy, req.caller):
        case Error(e):
            return Error(e)
    return await Cp.delete_coupon(store, req.coupon_id)


__all__ = (
    "CreateCheckoutSession",
    "CreateDeliveryOrder",
    "LoadDeliveryOrders",
    "LoadGatewayOrders",
    "ListOrders",
    "GetOrderDetails",
    "UpdateOrderStatus",
    "ValidateCoupon",
    "ListCoupons",
    "CreateCoupon",
    "SetCouponActive",
    "DeleteCoupon",
    "create_checkout_session",
    "create_delivery_order",
    "load_delivery_orders",
    "load_gateway_orders",
    "list_orders",
    "get_order_details",
    "update_order_status",
    "validate_coupon",
    "list_coupons",
    "create_coupon",
    "set_coupon_active",
    "delete_coupon",
)
