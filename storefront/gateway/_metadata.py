"""
Metadata bag — the only durable record of a gateway order.

The gateway keeps a flat str -> str map per session and nothing else about
the order, so whatever encode() leaves out is gone for good. The schema is
fixed and versioned; decode() says exactly which required keys were missing
or malformed instead of quietly defaulting them.

    bag = encode(CheckoutMetadata(product_id=pid, is_custom_product=False, quantity=2))
    decoded = decode(bag)
    decoded.complete          # True
    decode({}).missing        # ("productId", "isCustomProduct", "quantity")

Image bytes never go in the bag (values are capped at 500 chars); a custom
design is recorded as hasDesignImage plus its store reference.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from storefront._errors import ValidationError

METADATA_VERSION = "1"
MAX_VALUE_LENGTH = 500

# Key names match sessions already created by earlier storefront versions
K_VERSION = "v"
K_PRODUCT_ID = "productId"
K_IS_CUSTOM = "isCustomProduct"
K_QUANTITY = "quantity"
K_COLOR = "color"
K_SIZE = "size"
K_CUSTOM_TEXT = "customText"
K_HAS_DESIGN_IMAGE = "hasDesignImage"
K_DESIGN_IMAGE_ID = "designImageId"
K_CUSTOMER_NAME = "userId"
K_PHONE = "phone"
K_ADDRESS = "address"
K_COUPON = "coupon"
K_DISCOUNT = "discountPercentage"
K_ORIGINAL_PRICE = "originalPrice"
K_FINAL_PRICE = "finalPrice"

REQUIRED_KEYS = (K_PRODUCT_ID, K_IS_CUSTOM, K_QUANTITY)


def _flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True, slots=True)
class CheckoutMetadata:
    product_id: str
    is_custom_product: bool
    quantity: int = 1
    color: str = ""
    size: str = ""
    custom_text: str = ""
    design_image_id: str | None = None
    customer_name: str = ""
    phone: str = ""
    address: str = ""
    coupon: str | None = None
    discount_percentage: str | None = None
    original_price: str | None = None
    final_price: str | None = None

    @property
    def has_design_image(self) -> bool:
        return bool(self.design_image_id)


def encode(meta: CheckoutMetadata) -> dict[str, str]:
    bag = {
        K_VERSION: METADATA_VERSION,
        K_PRODUCT_ID: meta.product_id,
        K_IS_CUSTOM: _flag(meta.is_custom_product),
        K_QUANTITY: str(meta.quantity),
        K_COLOR: meta.color,
        K_SIZE: meta.size,
        K_CUSTOM_TEXT: meta.custom_text,
        K_HAS_DESIGN_IMAGE: _flag(meta.has_design_image),
        K_CUSTOMER_NAME: meta.customer_name,
        K_PHONE: meta.phone,
        K_ADDRESS: meta.address,
    }
    optional = {
        K_DESIGN_IMAGE_ID: meta.design_image_id,
        K_COUPON: meta.coupon,
        K_DISCOUNT: meta.discount_percentage,
        K_ORIGINAL_PRICE: meta.original_price,
        K_FINAL_PRICE: meta.final_price,
    }
    bag.update({k: v for k, v in optional.items() if v})

    for key, value in bag.items():
        if len(value) > MAX_VALUE_LENGTH:
            raise ValidationError(
                f"{key} is too long (max {MAX_VALUE_LENGTH} characters)", "METADATA_TOO_LONG"
            )
    return bag


@dataclass(frozen=True, slots=True)
class DecodedMetadata:
    metadata: CheckoutMetadata
    version: str | None  # None for bags written before versioning
    missing: tuple[str, ...] = ()
    malformed: tuple[str, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.missing and not self.malformed


def decode(bag: Mapping[str, str] | None) -> DecodedMetadata:
    raw = {k: v for k, v in (bag or {}).items() if v is not None}
    missing = tuple(k for k in REQUIRED_KEYS if not raw.get(k))
    malformed: list[str] = []

    flag = raw.get(K_IS_CUSTOM, "")
    if flag and flag not in ("true", "false"):
        malformed.append(K_IS_CUSTOM)

    quantity = 1
    if raw.get(K_QUANTITY):
        try:
            quantity = int(raw[K_QUANTITY])
        except ValueError:
            malformed.append(K_QUANTITY)
        else:
            if quantity < 1:
                malformed.append(K_QUANTITY)
                quantity = 1

    has_image = raw.get(K_HAS_DESIGN_IMAGE) == "true"
    design_image_id = raw.get(K_DESIGN_IMAGE_ID) or None
    if has_image and not design_image_id:
        malformed.append(K_HAS_DESIGN_IMAGE)

    return DecodedMetadata(
        metadata=CheckoutMetadata(
            product_id=raw.get(K_PRODUCT_ID, ""),
            is_custom_product=flag == "true",
            quantity=quantity,
            color=raw.get(K_COLOR, ""),
            size=raw.get(K_SIZE, ""),
            custom_text=raw.get(K_CUSTOM_TEXT, ""),
            design_image_id=design_image_id,
            customer_name=raw.get(K_CUSTOMER_NAME, ""),
            phone=raw.get(K_PHONE, ""),
            address=raw.get(K_ADDRESS, ""),
            coupon=raw.get(K_COUPON) or None,
            discount_percentage=raw.get(K_DISCOUNT) or None,
            original_price=raw.get(K_ORIGINAL_PRICE) or None,
            final_price=raw.get(K_FINAL_PRICE) or None,
        ),
        version=raw.get(K_VERSION),
        missing=missing,
        malformed=tuple(malformed),
    )


__all__ = (
    "METADATA_VERSION",
    "MAX_VALUE_LENGTH",
    "REQUIRED_KEYS",
    "CheckoutMetadata",
    "DecodedMetadata",
    "encode",
    "decode",
)
