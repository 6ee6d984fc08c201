"""
Application assembly: ops → runner → endpoints → FastAPI.

    app = create_app()                                  # from the environment
    app = create_app(settings, store=MemoryStore(), gateway=MemoryGateway())
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import fastapi

from storefront import wire as W
from storefront.api import _ops as ops
from storefront.api import _schemas as S
from storefront.auth import AdminPolicy, AllowListPolicy
from storefront.config import Settings, configure_logging
from storefront.gateway import Gateway, StripeGateway
from storefront.ops import Runner
from storefront.ops import ops as builder
from storefront.store import DocumentStore, MongoStore

logger = logging.getLogger(__name__)


def build_runner(
    store: DocumentStore,
    gateway: Gateway,
    policy: AdminPolicy,
    settings: Settings,
) -> Runner:
    return (
        builder()
        .on(ops.CreateCheckoutSession, ops.create_checkout_session)
        .on(ops.CreateDeliveryOrder, ops.create_delivery_order)
        .on(ops.LoadDeliveryOrders, ops.load_delivery_orders)
        .on(ops.LoadGatewayOrders, ops.load_gateway_orders)
        .on(ops.ListOrders, ops.list_orders)
        .on(ops.GetOrderDetails, ops.get_order_details)
        .on(ops.UpdateOrderStatus, ops.update_order_status)
        .on(ops.ValidateCoupon, ops.validate_coupon)
        .on(ops.ListCoupons, ops.list_coupons)
        .on(ops.CreateCoupon, ops.create_coupon)
        .on(ops.SetCouponActive, ops.set_coupon_active)
        .on(ops.DeleteCoupon, ops.delete_coupon)
        .compile()
        .inject(DocumentStore, store)
        .inject(Gateway, gateway)
        .inject(AdminPolicy, policy)
        .inject(Settings, settings)
    )


def _route(method: W.Method, path: str, admin_header: str | None = None) -> W.Route:
    route = W.Route(method, path)
    return route.forwarding(admin_header) if admin_header else route


def build_application(runner: Runner, settings: Settings) -> W.Application:
    admin = settings.admin_identity_header
    endp = (
        W.endpoint(runner)
        .expose(_route("POST", "/api/create-checkout-session"), S.CheckoutIn, S.SessionOut)
        .expose(_route("POST", "/api/create-delivery-order"), S.DeliveryOrderIn, S.DeliveryOrderOut)
        .expose(_route("GET", "/api/orders", admin), S.ListOrdersIn, S.OrdersOut)
        .expose(_route("GET", "/api/order-details"), S.OrderDetailsIn, S.OrderOut)
        .expose(_route("PATCH", "/api/orders/{id}/status", admin), S.StatusIn, S.StatusOut)
        .expose(_route("POST", "/api/coupons/validate"), S.ValidateCouponIn, S.CouponVerdictOut)
        .expose(_route("GET", "/api/coupons", admin), S.ListCouponsIn, S.CouponsOut)
        .expose(_route("POST", "/api/coupons", admin), S.CreateCouponIn, S.CouponOut)
        .expose(_route("PATCH", "/api/coupons/{id}", admin), S.SetCouponActiveIn, S.SuccessOut)
        .expose(_route("DELETE", "/api/coupons/{id}", admin), S.DeleteCouponIn, S.SuccessOut)
    )
    return W.Application().mount(endp)


def create_app(
    settings: Settings | None = None,
    *,
    store: DocumentStore | None = None,
    gateway: Gateway | None = None,
) -> fastapi.FastAPI:
    """
    FastAPI app over the storefront ops.

    Without an explicit store a MongoStore is opened from settings and
    closed on shutdown; without a gateway the Stripe adapter is used.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings)

    owned: MongoStore | None = None
    if store is None:
        store = owned = MongoStore.connect(settings)
    if gateway is None:
        gateway = StripeGateway(settings.stripe_secret_key)

    runner = build_runner(store, gateway, AllowListPolicy.from_settings(settings), settings)

    @asynccontextmanager
    async def lifespan(_: fastapi.FastAPI) -> AsyncIterator[None]:
        logger.info("storefront up (%d admins configured)", len(settings.admin_emails))
        yield
        if owned is not None:
            await owned.close()

    return W.fastapi.from_application(
        build_application(runner, settings),
        title="storefront",
        lifespan=lifespan,
    )


__all__ = ("build_runner", "build_application", "create_app")
