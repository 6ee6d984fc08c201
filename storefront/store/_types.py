"""
Store types — the document-store contract the core depends on.

Collections are named by the Collection enum; identifiers are ObjectId
strings and are checked with is_valid_id() before any query is issued.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import Any, Protocol

from bson import ObjectId


type Document = dict[str, Any]
type Query = Mapping[str, Any]
type Sort = Sequence[tuple[str, int]]


class Collection(StrEnum):
    PRODUCTS = "products"
    CUSTOM_PRODUCTS = "customProducts"
    ORDERS = "orders"
    COUPONS = "coupons"


def is_valid_id(value: object) -> bool:
    """True for a 24-hex-char string or an ObjectId."""
    return isinstance(value, (str, ObjectId)) and ObjectId.is_valid(value)


def by_id(value: str) -> Query:
    return {"_id": ObjectId(value)}


class DocumentStore(Protocol):
    """
    Async document store.

    Implementations return plain dicts with "_id" rendered as str.
    Single-document writes are atomic; nothing else is assumed.
    """

    async def find_one(self, collection: Collection, query: Query) -> Document | None: ...

    async def find(
        self,
        collection: Collection,
        query: Query,
        sort: Sort | None = None,
    ) -> list[Document]: ...

    async def insert_one(self, collection: Collection, document: Document) -> str: ...

    async def update_one(
        self,
        collection: Collection,
        query: Query,
        changes: Mapping[str, Any],
    ) -> bool: ...

    async def delete_one(self, collection: Collection, query: Query) -> bool: ...


__all__ = (
    "Document",
    "Query",
    "Sort",
    "Collection",
    "DocumentStore",
    "is_valid_id",
    "by_id",
)
