"""Coupon administration: create, list, toggle, delete."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from kungfu import Error, Ok, Result

import combinators as C
from storefront._errors import (
    InvalidIdentifier,
    MissingField,
    NotFoundError,
    StorefrontError,
    UpstreamError,
    ValidationError,
)
from storefront.coupons._types import Coupon, normalize_code
from storefront.store import Collection, DocumentStore, by_id, is_valid_id

logger = logging.getLogger(__name__)


def _store_error(e: Exception) -> StorefrontError:
    return UpstreamError.wrap(e, "Coupon store failed")


async def create_coupon(
    store: DocumentStore,
    code: str | None,
    discount_percentage: float | None,
    description: str = "",
    is_active: bool = True,
) -> Result[Coupon, StorefrontError]:
    normalized = normalize_code(code)
    missing = [
        name
        for name, absent in (
            ("code", not normalized),
            ("discountPercentage", discount_percentage is None),
        )
        if absent
    ]
    if missing:
        return Error(MissingField(*missing))
    if not 1 <= discount_percentage <= 100:
        return Error(ValidationError("Discount percentage must be between 1 and 100"))

    existing = await C.catching_async(
        lambda: store.find_one(Collection.COUPONS, {"code": normalized}),
        on_error=_store_error,
    )
    match existing:
        case Error(e):
            return Error(e)
        case Ok(doc) if doc is not None:
            return Error(ValidationError("Coupon code already exists", "DUPLICATE_CODE"))

    now = datetime.now(UTC)
    document = {
        "code": normalized,
        "discountPercentage": float(discount_percentage),
        "description": description or "",
        "isActive": is_active,
        "createdAt": now,
        "updatedAt": now,
    }
    inserted = await C.catching_async(
        lambda: store.insert_one(Collection.COUPONS, document),
        on_error=_store_error,
    )
    match inserted:
        case Ok(coupon_id):
            logger.info("coupon %s created (%s%%)", normalized, discount_percentage)
            return Ok(Coupon.from_document({"_id": coupon_id, **document}))
        case Error(e):
            return Error(e)


async def list_coupons(store: DocumentStore) -> Result[list[Coupon], StorefrontError]:
    return await (
        C.catching_async(
            lambda: store.find(Collection.COUPONS, {}, sort=[("createdAt", -1)]),
            on_error=_store_error,
        )
        .map(lambda docs: [Coupon.from_document(d) for d in docs])
    )


async def set_coupon_active(
    store: DocumentStore,
    coupon_id: str,
    is_active: bool | None,
) -> Result[None, StorefrontError]:
    if not is_valid_id(coupon_id):
        return Error(InvalidIdentifier("coupon", coupon_id))
    if is_active is None:
        return Error(MissingField("isActive"))
    updated = await C.catching_async(
        lambda: store.update_one(
            Collection.COUPONS,
            by_id(coupon_id),
            {"isActive": is_active, "updatedAt": datetime.now(UTC)},
        ),
        on_error=_store_error,
    )
    match updated:
        case Ok(True):
            logger.info("coupon %s active=%s", coupon_id, is_active)
            return Ok(None)
        case Ok(False):
            return Error(NotFoundError("Coupon not found"))
        case Error(e):
            return Error(e)


async def delete_coupon(store: DocumentStore, coupon_id: str) -> Result[None, StorefrontError]:
    if not is_valid_id(coupon_id):
        return Error(InvalidIdentifier("coupon", coupon_id))
    deleted = await C.catching_async(
        lambda: store.delete_one(Collection.COUPONS, by_id(coupon_id)),
        on_error=_store_error,
    )
    match deleted:
        case Ok(True):
            logger.info("coupon %s deleted", coupon_id)
            return Ok(None)
        case Ok(False):
            return Error(NotFoundError("Coupon not found"))
        case Error(e):
            return Error(e)


__all__ = ("create_coupon", "list_coupons", "set_coupon_active", "delete_coupon")
