"""
Catalog types — a product is Standard or Custom, never "either collection".

The origin is chosen by the caller (the isCustomProduct flag) and mapped to
exactly one source collection by source_for().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from storefront.pricing import to_decimal
from storefront.store import Collection, Document


class ProductSource(Enum):
    STANDARD = Collection.PRODUCTS
    CUSTOM = Collection.CUSTOM_PRODUCTS

    @property
    def collection(self) -> Collection:
        return self.value


def source_for(is_custom: bool) -> ProductSource:
    return ProductSource.CUSTOM if is_custom else ProductSource.STANDARD


@dataclass(frozen=True, slots=True)
class StandardProduct:
    id: str
    name: str
    price: float
    category: str | None = None
    colors: tuple[str, ...] = ()
    sizes: tuple[str, ...] = ()
    published: bool = True
    raw: Document = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_custom(self) -> bool:
        return False

    @property
    def design_image(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class CustomProduct:
    id: str
    name: str
    price: float
    category: str | None = None
    custom_image: str | None = None
    final_design_image_id: str | None = None
    published: bool = True
    raw: Document = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_custom(self) -> bool:
        return True

    @property
    def design_image(self) -> str | None:
        return self.final_design_image_id


type Product = StandardProduct | CustomProduct


def _str_tuple(value: Any) -> tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    return ()


def product_from_document(source: ProductSource, doc: Document) -> Product:
    """
    Full record in, typed product out. The raw document rides along.

    Raises ValidationError for a price that is not a finite number.
    """
    common: dict[str, Any] = {
        "id": str(doc["_id"]),
        "name": str(doc.get("name") or ""),
        "price": float(to_decimal(doc.get("price") or 0)),
        "category": doc.get("category"),
        "published": bool(doc.get("isPublished", doc.get("published", True))),
        "raw": doc,
    }
    match source:
        case ProductSource.CUSTOM:
            return CustomProduct(
                custom_image=doc.get("customImage"),
                final_design_image_id=doc.get("finalDesignImageId"),
                **common,
            )
        case ProductSource.STANDARD:
            return StandardProduct(
                colors=_str_tuple(doc.get("colors")),
                sizes=_str_tuple(doc.get("sizes")),
                **common,
            )


__all__ = (
    "ProductSource",
    "source_for",
    "StandardProduct",
    "CustomProduct",
    "Product",
    "product_from_document",
)
