"""
Orders — the read side: one canonical shape for both channels.

    from storefront import orders as Or

    delivery = await Or.load_delivery_orders(store)
    gateway = await Or.load_gateway_orders(store, gw, settings)
    feed = Or.merge_feeds(delivery.unwrap(), gateway.unwrap())

    for order in feed.orders:       # newest first
        row = Or.present(order)
    feed.failures                   # per-session degradations, logged
"""

from storefront.orders._types import (
    NA,
    Channel,
    DeliveryStatus,
    GATEWAY_STATUS,
    Customer,
    ProductSnapshot,
    Order,
    OrderFeed,
)
from storefront.orders._timestamps import to_seconds
from storefront.orders._normalize import (
    flatten_address,
    order_from_delivery,
    order_from_session,
)
from storefront.orders._reconcile import (
    GatewayRow,
    reconcile_session,
    fold_rows,
    load_delivery_orders,
    load_gateway_orders,
    merge_feeds,
)
from storefront.orders._manage import (
    delivery_order,
    gateway_order,
    order_details,
    update_order_status,
)
from storefront.orders._present import (
    WRAP_WIDTH,
    BADGES,
    format_amount,
    wrap_text,
    truncate,
    status_badge,
    OrderRow,
    present,
)

__all__ = (
    "NA",
    "Channel",
    "DeliveryStatus",
    "GATEWAY_STATUS",
    "Customer",
    "ProductSnapshot",
    "Order",
    "OrderFeed",
    "to_seconds",
    "flatten_address",
    "order_from_delivery",
    "order_from_session",
    "GatewayRow",
    "reconcile_session",
    "fold_rows",
    "load_delivery_orders",
    "load_gateway_orders",
    "merge_feeds",
    "delivery_order",
    "gateway_order",
    "order_details",
    "update_order_status",
    "WRAP_WIDTH",
    "BADGES",
    "format_amount",
    "wrap_text",
    "truncate",
    "status_badge",
    "OrderRow",
    "present",
)
