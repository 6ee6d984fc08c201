"""
Catalog — typed products from two physical sources.

    from storefront import catalog as Cat

    source = Cat.source_for(is_custom)       # STANDARD -> products, CUSTOM -> customProducts
    match await Cat.resolve(store, product_id, source):
        case Ok(Cat.CustomProduct() as p): ...
        case Ok(Cat.StandardProduct() as p): ...
        case Error(e): ...
"""

from storefront.catalog._types import (
    ProductSource,
    source_for,
    StandardProduct,
    CustomProduct,
    Product,
    product_from_document,
)
from storefront.catalog._resolve import resolve

__all__ = (
    "ProductSource",
    "source_for",
    "StandardProduct",
    "CustomProduct",
    "Product",
    "product_from_document",
    "resolve",
)
