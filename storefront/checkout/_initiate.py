"""Checkout entry points: cheap validation first, then the node graph."""

from __future__ import annotations

import logging

from kungfu import Error, Ok, Result

from storefront import graph as G
from storefront._errors import MissingField, StorefrontError, UpstreamError
from storefront.checkout._delivery import DeliveryOrderNode
from storefront.checkout._gateway import SessionNode
from storefront.checkout._types import (
    DELIVERY_REQUIRED,
    GATEWAY_REQUIRED,
    CheckoutRequest,
    DeliveryPreferences,
    DeliveryReceipt,
)
from storefront.config import Settings
from storefront.gateway import Gateway, SessionHandle
from storefront.store import DocumentStore

logger = logging.getLogger(__name__)


def _precheck(request: CheckoutRequest, required: tuple[str, ...]) -> StorefrontError | None:
    if missing := request.missing(*required):
        return MissingField(*missing)
    try:
        request.quantity
    except StorefrontError as e:
        return e
    return None


async def create_checkout_session(
    request: CheckoutRequest,
    *,
    store: DocumentStore,
    gateway: Gateway,
    settings: Settings,
) -> Result[SessionHandle, StorefrontError]:
    """
    Gateway channel. Nothing is persisted locally; the session's metadata
    bag is the order record.
    """
    if (rejected := _precheck(request, GATEWAY_REQUIRED)) is not None:
        logger.info("checkout session rejected: %s", rejected.message)
        return Error(rejected)
    try:
        node = await (
            G.run(SessionNode)
            .given(request, settings)
            .inject_as(DocumentStore, store)
            .inject_as(Gateway, gateway)
        )
    except StorefrontError as e:
        return Error(e)
    except Exception as e:
        logger.exception("checkout session failed")
        return Error(UpstreamError.wrap(e, "Could not create checkout session"))
    return Ok(node.data)


async def create_delivery_order(
    request: CheckoutRequest,
    preferences: DeliveryPreferences,
    *,
    store: DocumentStore,
    settings: Settings,
) -> Result[DeliveryReceipt, StorefrontError]:
    """Delivery channel. Persists one order document with status pending."""
    if (rejected := _precheck(request, DELIVERY_REQUIRED)) is not None:
        logger.info("delivery order rejected: %s", rejected.message)
        return Error(rejected)
    try:
        node = await (
            G.run(DeliveryOrderNode)
            .given(request, preferences, settings)
            .inject_as(DocumentStore, store)
        )
    except StorefrontError as e:
        return Error(e)
    except Exception as e:
        logger.exception("delivery order failed")
        return Error(UpstreamError.wrap(e, "Could not create delivery order"))
    return Ok(DeliveryReceipt(node.data))


__all__ = ("create_checkout_session", "create_delivery_order")
