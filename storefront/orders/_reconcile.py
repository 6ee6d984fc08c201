"""
Reconciliation — both channels into one newest-first feed.

Delivery orders come straight from the store. Gateway orders are rebuilt
per session: decode the metadata bag, resolve the product under a bounded
timeout, normalize. Each session is its own unit of work; a failed lookup
degrades that one row (category NA) and is recorded, a session that cannot
be normalized at all is dropped and recorded. Results and failures are
folded apart, never suppressed inline.

    delivery = await load_delivery_orders(store)
    gateway = await load_gateway_orders(store, gw, settings)
    feed = merge_feeds(delivery.unwrap(), gateway.unwrap())
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

from kungfu import Error, LazyCoroResult, Ok, Result

import combinators as C
from storefront._errors import (
    InvalidIdentifier,
    PartialProcessingError,
    StorefrontError,
    UpstreamError,
    ValidationError,
)
from storefront.catalog import Product, resolve, source_for
from storefront.config import Settings
from storefront.gateway import Gateway, GatewaySession, decode
from storefront.orders._normalize import order_from_delivery, order_from_session
from storefront.orders._types import Channel, Order, OrderFeed
from storefront.store import Collection, DocumentStore, is_valid_id

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Per-session unit of work
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class GatewayRow:
    """A normalized session plus the degradations it went through."""

    order: Order
    issues: tuple[PartialProcessingError, ...] = ()


def _as_storefront(e: Exception) -> StorefrontError:
    if isinstance(e, StorefrontError):
        return e
    if isinstance(e, C.TimeoutError):
        return UpstreamError(f"Product lookup timed out after {e.seconds}s", "LOOKUP_TIMEOUT")
    return UpstreamError.wrap(e, "Product lookup failed")


def reconcile_session(
    store: DocumentStore,
    session: GatewaySession,
    *,
    lookup_timeout: float,
) -> LazyCoroResult[GatewayRow, PartialProcessingError]:
    async def attempt() -> Result[GatewayRow, PartialProcessingError]:
        decoded = decode(session.metadata)
        issues: list[PartialProcessingError] = []
        if not decoded.complete:
            issues.append(PartialProcessingError(session.id, ValidationError(
                f"metadata missing {list(decoded.missing)} malformed {list(decoded.malformed)}",
                "INCOMPLETE_METADATA",
            )))

        product: Product | None = None
        product_id = decoded.metadata.product_id
        if product_id and not is_valid_id(product_id):
            issues.append(PartialProcessingError(session.id, InvalidIdentifier("product", product_id)))
        elif product_id:
            lookup = C.timeout(
                resolve(store, product_id, source_for(decoded.metadata.is_custom_product)),
                seconds=lookup_timeout,
            )
            match await lookup:
                case Ok(found):
                    product = found
                case Error(e):
                    issues.append(PartialProcessingError(session.id, _as_storefront(e)))

        for issue in issues:
            logger.warning("session %s degraded: %s", session.id, issue.reason)

        normalized = await C.catching(
            lambda: order_from_session(session, decoded, product),
            on_error=lambda e: PartialProcessingError(session.id, e),
        )
        match normalized:
            case Ok(order):
                return Ok(GatewayRow(order, tuple(issues)))
            case Error(e):
                logger.warning("session %s skipped: %r", session.id, e.reason)
                return Error(e)

    async def run() -> Result[GatewayRow, PartialProcessingError]:
        # anything attempt() did not anticipate still costs one row only
        caught = await C.catching_async(
            attempt,
            on_error=lambda e: PartialProcessingError(session.id, e),
        )
        match caught:
            case Ok(result):
                return result
            case Error(e):
                logger.error("session %s failed: %r", session.id, e.reason)
                return Error(e)

    return LazyCoroResult(run)


def fold_rows(
    results: Sequence[Result[GatewayRow, PartialProcessingError]],
) -> OrderFeed:
    """(orders, failures) from per-session results, input order kept."""
    orders: list[Order] = []
    failures: list[PartialProcessingError] = []
    for result in results:
        match result:
            case Ok(row):
                orders.append(row.order)
                failures.extend(row.issues)
            case Error(e):
                failures.append(e)
    return OrderFeed(tuple(orders), tuple(failures))


# ═══════════════════════════════════════════════════════════════════════════════
# Channel loaders
# ═══════════════════════════════════════════════════════════════════════════════

async def load_delivery_orders(
    store: DocumentStore,
    now: float | None = None,
) -> Result[OrderFeed, StorefrontError]:
    fetched = await C.catching_async(
        lambda: store.find(Collection.ORDERS, {"paymentMethod": Channel.DELIVERY.value}),
        on_error=lambda e: UpstreamError.wrap(e, "Failed to fetch orders"),
    )
    match fetched:
        case Error(e):
            logger.error("delivery orders unavailable: %s", e)
            return Error(e)
        case Ok(docs):
            pass

    read_at = time.time() if now is None else now
    orders: list[Order] = []
    failures: list[PartialProcessingError] = []
    for doc in docs:
        match await C.catching(
            lambda d=doc: order_from_delivery(d, read_at),
            on_error=lambda e, d=doc: PartialProcessingError(str(d.get("_id")), e),
        ):
            case Ok(order):
                orders.append(order)
            case Error(e):
                logger.warning("delivery order skipped: %s", e)
                failures.append(e)
    return Ok(OrderFeed(tuple(orders), tuple(failures)))


async def load_gateway_orders(
    store: DocumentStore,
    gateway: Gateway,
    settings: Settings,
) -> Result[OrderFeed, StorefrontError]:
    listed = await C.catching_async(
        lambda: gateway.list_sessions(settings.gateway_page_size),
        on_error=lambda e: UpstreamError.wrap(e, "Failed to fetch orders"),
    )
    match listed:
        case Error(e):
            logger.error("gateway sessions unavailable: %s", e)
            return Error(e)
        case Ok(sessions):
            pass

    batch = await C.batch_all(
        sessions,
        lambda s: reconcile_session(store, s, lookup_timeout=settings.lookup_timeout_seconds),
        concurrency=settings.reconcile_concurrency,
    )
    feed = fold_rows(batch.unwrap())
    if feed.failures:
        logger.warning(
            "%d of %d gateway sessions degraded or skipped",
            len(feed.failures),
            len(sessions),
        )
    return Ok(feed)


# ═══════════════════════════════════════════════════════════════════════════════
# Merge
# ═══════════════════════════════════════════════════════════════════════════════

def merge_feeds(*feeds: OrderFeed) -> OrderFeed:
    """Concatenate and sort by creation instant, newest first. Stable."""
    orders = [order for feed in feeds for order in feed.orders]
    orders.sort(key=lambda o: o.created, reverse=True)
    failures = tuple(f for feed in feeds for f in feed.failures)
    return OrderFeed(tuple(orders), failures)


__all__ = (
    "GatewayRow",
    "reconcile_session",
    "fold_rows",
    "load_delivery_orders",
    "load_gateway_orders",
    "merge_feeds",
)
