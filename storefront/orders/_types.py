"""
Canonical order — one shape for both channels.

amount_total is integer minor units on every channel; created is unix
seconds on every channel. Absent fields read back as NA, not as errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from storefront._errors import PartialProcessingError

NA = "N/A"


class Channel(StrEnum):
    GATEWAY = "gateway"
    DELIVERY = "delivery"


class DeliveryStatus(StrEnum):
    PENDING = "pending"
    RECEIVED = "received"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"


# Only sessions that came back through the success redirect are listed
GATEWAY_STATUS = "completed"


@dataclass(frozen=True, slots=True)
class Customer:
    name: str = NA
    email: str = NA
    phone: str = NA
    address: str = NA


@dataclass(frozen=True, slots=True)
class ProductSnapshot:
    id: str = NA
    name: str = NA
    category: str = NA
    is_custom_product: bool = False
    custom_text: str = NA
    design_image: str | None = None
    price: float | None = None


@dataclass(frozen=True, slots=True)
class Order:
    id: str
    channel: Channel
    customer: Customer
    product: ProductSnapshot
    amount_total: int
    created: float
    status: str
    selected_color: str = NA
    selected_size: str = NA
    quantity: int = 1
    coupon: str = NA
    discount_percentage: float = 0.0
    original_price: float | None = None
    final_price: float | None = None
    preferred_method: str | None = None
    additional_notes: str = ""


@dataclass(frozen=True, slots=True)
class OrderFeed:
    """Orders plus the per-item failures met while producing them."""

    orders: tuple[Order, ...] = ()
    failures: tuple[PartialProcessingError, ...] = field(default=())

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(o.id for o in self.orders)


__all__ = (
    "NA",
    "Channel",
    "DeliveryStatus",
    "GATEWAY_STATUS",
    "Customer",
    "ProductSnapshot",
    "Order",
    "OrderFeed",
)
