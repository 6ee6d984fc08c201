"""
API — the storefront's HTTP surface.

    uvicorn --factory storefront.api:create_app
"""

from storefront.api._ops import (
    CreateCheckoutSession,
    CreateDeliveryOrder,
    LoadDeliveryOrders,
    LoadGatewayOrders,
    ListOrders,
    GetOrderDetails,
    UpdateOrderStatus,
    ValidateCoupon,
    ListCoupons,
    CreateCoupon,
    SetCouponActive,
    DeleteCoupon,
)
from storefront.api._app import build_runner, build_application, create_app

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
    "build_runner",
    "build_application",
    "create_app",
)
