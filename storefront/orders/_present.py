"""
Presentation — canonical Order to display strings. No business rules.

    present(order).amount     # "$50.00"
    wrap_text(order.customer.address, 40)
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

from storefront.orders._types import NA, Order

WRAP_WIDTH = 40
ELLIPSIS = "…"

BADGES: dict[str, str] = {
    "pending": "yellow",
    "completed": "green",
    "delivered": "green",
    "received": "blue",
    "out_for_delivery": "purple",
}


def format_amount(minor: int, symbol: str = "$") -> str:
    return f"{symbol}{Decimal(minor) / 100:,.2f}"


def wrap_text(text: str | None, width: int = WRAP_WIDTH) -> list[str]:
    if not text:
        return [NA]
    return textwrap.wrap(text, width=width, break_long_words=True) or [NA]


def truncate(text: str | None, width: int = WRAP_WIDTH) -> str:
    if not text:
        return NA
    if len(text) <= width:
        return text
    return text[: max(width - len(ELLIPSIS), 0)].rstrip() + ELLIPSIS


def status_badge(status: str) -> str:
    return BADGES.get(status.strip().lower(), "gray")


@dataclass(frozen=True, slots=True)
class OrderRow:
    id: str
    channel: str
    customer: str
    email: str
    phone: str
    address: list[str]
    product: str
    variant: str
    quantity: int
    amount: str
    created: str
    status: str
    badge: str
    notes: str


def present(order: Order, width: int = WRAP_WIDTH) -> OrderRow:
    variant = " / ".join(
        v for v in (order.selected_color, order.selected_size) if v and v != NA
    ) or NA
    return OrderRow(
        id=order.id,
        channel=order.channel.value,
        customer=truncate(order.customer.name, width),
        email=order.customer.email,
        phone=order.customer.phone,
        address=wrap_text(order.customer.address, width),
        product=truncate(order.product.name, width),
        variant=variant,
        quantity=order.quantity,
        amount=format_amount(order.amount_total),
        created=datetime.fromtimestamp(order.created, UTC).strftime("%Y-%m-%d %H:%M"),
        status=order.status,
        badge=status_badge(order.status),
        notes=truncate(order.additional_notes, width) if order.additional_notes else "",
    )


__all__ = (
    "WRAP_WIDTH",
    "BADGES",
    "format_amount",
    "wrap_text",
    "truncate",
    "status_badge",
    "OrderRow",
    "present",
)
