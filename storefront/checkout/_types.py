"""Checkout inputs shared by both channels."""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.pricing import parse_quantity


@dataclass(frozen=True, slots=True)
class Contact:
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""


@dataclass(frozen=True, slots=True)
class Selection:
    color: str = ""
    size: str = ""
    quantity: object = 1  # raw; validated by parse_quantity
    custom_text: str = ""
    design_image_id: str | None = None


@dataclass(frozen=True, slots=True)
class CheckoutRequest:
    product_id: str
    is_custom_product: bool = False
    contact: Contact = field(default_factory=Contact)
    selection: Selection = field(default_factory=Selection)
    coupon_code: str | None = None

    def missing(self, *names: str) -> tuple[str, ...]:
        """Which of the named wire fields are absent or blank."""
        present = {
            "productId": self.product_id,
            "email": self.contact.email,
            "name": self.contact.name,
            "phone": self.contact.phone,
            "address": self.contact.address,
        }
        return tuple(n for n in names if not (present.get(n) or "").strip())

    @property
    def quantity(self) -> int:
        return parse_quantity(self.selection.quantity)


@dataclass(frozen=True, slots=True)
class DeliveryPreferences:
    preferred_method: str = "cash"
    additional_notes: str = ""


@dataclass(frozen=True, slots=True)
class DeliveryReceipt:
    id: str
    status: str = "success"


GATEWAY_REQUIRED = ("productId", "email")
DELIVERY_REQUIRED = ("productId", "email", "name", "phone", "address")


__all__ = (
    "Contact",
    "Selection",
    "CheckoutRequest",
    "DeliveryPreferences",
    "DeliveryReceipt",
    "GATEWAY_REQUIRED",
    "DELIVERY_REQUIRED",
)
