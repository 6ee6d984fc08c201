"""Single-order reads and the delivery status update."""

from __future__ import annotations

import logging

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
from storefront.config import Settings
from storefront.gateway import Gateway
from storefront.orders._normalize import order_from_delivery
from storefront.orders._reconcile import reconcile_session
from storefront.orders._types import DeliveryStatus, Order
from storefront.store import Collection, DocumentStore, by_id, is_valid_id

logger = logging.getLogger(__name__)


async def delivery_order(store: DocumentStore, order_id: str) -> Result[Order, StorefrontError]:
    if not is_valid_id(order_id):
        return Error(InvalidIdentifier("order", order_id))
    fetched = await C.catching_async(
        lambda: store.find_one(Collection.ORDERS, by_id(order_id)),
        on_error=lambda e: UpstreamError.wrap(e, "Failed to fetch order details"),
    )
    match fetched:
        case Ok(None):
            return Error(NotFoundError("Order not found"))
        case Ok(doc):
            return Ok(order_from_delivery(doc))
        case Error(e):
            return Error(e)


async def gateway_order(
    store: DocumentStore,
    gateway: Gateway,
    settings: Settings,
    session_id: str,
) -> Result[Order, StorefrontError]:
    retrieved = await C.catching_async(
        lambda: gateway.retrieve_session(session_id),
        on_error=lambda e: UpstreamError.wrap(e, "Failed to fetch order details"),
    )
    match retrieved:
        case Error(e):
            return Error(e)
        case Ok(session):
            row = await reconcile_session(
                store, session, lookup_timeout=settings.lookup_timeout_seconds
            )
    match row:
        case Ok(r):
            return Ok(r.order)
        case Error(e):
            return Error(UpstreamError(f"Failed to fetch order details: {e.reason}"))


async def order_details(
    store: DocumentStore,
    gateway: Gateway,
    settings: Settings,
    *,
    session_id: str | None = None,
    order_id: str | None = None,
) -> Result[Order, StorefrontError]:
    """Delivery order when order_id is given, else the gateway session."""
    if order_id:
        return await delivery_order(store, order_id)
    if not session_id:
        return Error(MissingField("session_id"))
    return await gateway_order(store, gateway, settings, session_id)


async def update_order_status(
    store: DocumentStore,
    order_id: str,
    status: str | None,
) -> Result[DeliveryStatus, StorefrontError]:
    """Set a delivery order's status. Any known status may follow any other."""
    if not is_valid_id(order_id):
        return Error(InvalidIdentifier("order", order_id))
    try:
        new_status = DeliveryStatus((status or "").strip().lower())
    except ValueError:
        return Error(ValidationError("Invalid status value", "INVALID_STATUS"))

    updated = await C.catching_async(
        lambda: store.update_one(
            Collection.ORDERS,
            {**by_id(order_id), "paymentMethod": "delivery"},
            {"status": new_status.value},
        ),
        on_error=lambda e: UpstreamError.wrap(e, "Failed to update order status"),
    )
    match updated:
        case Ok(True):
            logger.info("order %s status -> %s", order_id, new_status)
            return Ok(new_status)
        case Ok(False):
            return Error(NotFoundError("Order not found"))
        case Error(e):
            return Error(e)


__all__ = ("delivery_order", "gateway_order", "order_details", "update_order_status")
