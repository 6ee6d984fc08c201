"""
Wire — ops exposed as HTTP routes.

    from storefront import wire as W

    endp = W.endpoint(runner).expose(
        W.Route("POST", "/api/coupons/validate"),
        ValidateCouponIn,
        CouponVerdictOut,
    )
    api = W.fastapi.from_application(W.Application().mount(endp))
"""

from storefront.wire._exposure import (
    BODY_METHODS,
    Application,
    Codec,
    Endpoint,
    Exposure,
    FromDomain,
    Method,
    Route,
    RouteContext,
    ToDomain,
    endpoint,
)
from storefront.wire import fastapi

__all__ = (
    "BODY_METHODS",
    "Application",
    "Codec",
    "Endpoint",
    "Exposure",
    "FromDomain",
    "Method",
    "Route",
    "RouteContext",
    "ToDomain",
    "endpoint",
    "fastapi",
)
