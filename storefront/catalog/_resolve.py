"""
Product resolution.

The identifier is checked before any I/O; the lookup touches only the
collection named by the source. A hit in the other collection is not a hit.
"""

from __future__ import annotations

import logging

from kungfu import Error, LazyCoroResult, Ok, Result

import combinators as C
from storefront._errors import (
    InvalidIdentifier,
    ProductNotFound,
    StorefrontError,
    UpstreamError,
)
from storefront.catalog._types import Product, ProductSource, product_from_document
from storefront.store import DocumentStore, by_id, is_valid_id

logger = logging.getLogger(__name__)


def resolve(
    store: DocumentStore,
    product_id: str,
    source: ProductSource,
) -> LazyCoroResult[Product, StorefrontError]:
    """
    Lazy product lookup.

        match await resolve(store, pid, source_for(is_custom)):
            case Ok(product): ...
            case Error(e): ...   # InvalidIdentifier | ProductNotFound | UpstreamError

    A stored record that cannot be read (a price such as "$25") is an
    UpstreamError, never an exception.
    """

    async def run() -> Result[Product, StorefrontError]:
        if not is_valid_id(product_id):
            return Error(InvalidIdentifier("product", product_id))

        fetched = await C.catching_async(
            lambda: store.find_one(source.collection, by_id(product_id)),
            on_error=lambda e: UpstreamError.wrap(e, "Product lookup failed"),
        )
        match fetched:
            case Ok(None):
                logger.info("product %s not found in %s", product_id, source.collection)
                return Error(ProductNotFound(product_id, source.collection))
            case Error(e):
                logger.error("product lookup %s failed: %s", product_id, e)
                return Error(e)
            case Ok(doc):
                parsed = await C.catching(
                    lambda: product_from_document(source, doc),
                    on_error=lambda e: UpstreamError(
                        f"Malformed product record {product_id}: {e}", "MALFORMED_PRODUCT"
                    ),
                )
                if isinstance(parsed, Error):
                    logger.error("product %s unreadable: %s", product_id, parsed.error)
                return parsed

    return LazyCoroResult(run)


__all__ = ("resolve",)
