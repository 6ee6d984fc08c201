"""
Coupons — percentage discounts, re-validated on every checkout.

    from storefront import coupons as Cp

    match await Cp.validate(store, " save20 "):
        case Cp.Accepted(discount_percentage=pct): ...
        case Cp.Rejected(reason=why): ...   # behaves as "no coupon"
"""

from storefront.coupons._types import (
    normalize_code,
    stored_percentage,
    Coupon,
    Accepted,
    Rejected,
    CouponVerdict,
)
from storefront.coupons._validate import validate
from storefront.coupons._admin import (
    create_coupon,
    list_coupons,
    set_coupon_active,
    delete_coupon,
)

__all__ = (
    "normalize_code",
    "stored_percentage",
    "Coupon",
    "Accepted",
    "Rejected",
    "CouponVerdict",
    "validate",
    "create_coupon",
    "list_coupons",
    "set_coupon_active",
    "delete_coupon",
)
