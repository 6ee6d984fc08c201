"""
Store — document storage behind a small async protocol.

    from storefront import store as St

    store: St.DocumentStore = St.MongoStore.connect(settings)   # production
    store: St.DocumentStore = St.MemoryStore()                  # tests

    if not St.is_valid_id(raw):
        ...  # reject before any query
    doc = await store.find_one(St.Collection.ORDERS, St.by_id(raw))
"""

from storefront.store._types import (
    Document,
    Query,
    Sort,
    Collection,
    DocumentStore,
    is_valid_id,
    by_id,
)
from storefront.store._memory import MemoryStore
from storefront.store._mongo import MongoStore

__all__ = (
    "Document",
    "Query",
    "Sort",
    "Collection",
    "DocumentStore",
    "is_valid_id",
    "by_id",
    "MemoryStore",
    "MongoStore",
)
