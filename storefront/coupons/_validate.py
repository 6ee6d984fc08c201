"""
Coupon validation for checkout.

validate() never fails: absent, unknown, inactive and misconfigured codes
(and a store that cannot be reached) all come back as Rejected, which
callers treat exactly like "no coupon". Nothing is cached; activation can
change between cart view and purchase.
"""

from __future__ import annotations

import logging

from kungfu import Error, Ok

import combinators as C
from storefront._errors import UpstreamError
from storefront.coupons._types import (
    Accepted,
    CouponVerdict,
    Rejected,
    normalize_code,
    stored_percentage,
)
from storefront.store import Collection, DocumentStore

logger = logging.getLogger(__name__)


async def validate(store: DocumentStore, code: str | None) -> CouponVerdict:
    normalized = normalize_code(code)
    if not normalized:
        return Rejected(normalized, "absent")

    found = await C.catching_async(
        lambda: store.find_one(Collection.COUPONS, {"code": normalized}),
        on_error=lambda e: UpstreamError.wrap(e, "Coupon lookup failed"),
    )
    match found:
        case Ok(None):
            return Rejected(normalized, "not_found")
        case Ok(doc) if doc.get("isActive") is not True:
            return Rejected(normalized, "inactive")
        case Ok(doc):
            pct = stored_percentage(doc.get("discountPercentage"))
            if pct is None or not 0 < pct <= 100:
                logger.warning("coupon %s has unusable discount %r", normalized, pct)
                return Rejected(normalized, "invalid")
            return Accepted(
                code=normalized,
                discount_percentage=pct,
                description=str(doc.get("description") or ""),
            )
        case Error(e):
            logger.warning("coupon %s treated as rejected: %s", normalized, e)
            return Rejected(normalized, "unavailable")


__all__ = ("validate",)
