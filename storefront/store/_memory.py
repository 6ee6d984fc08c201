"""
MemoryStore — in-process DocumentStore for testing.

    store = MemoryStore()
    pid = await store.insert_one(Collection.PRODUCTS, {"name": "Tee", "price": 25.0})
    await store.find_one(Collection.PRODUCTS, by_id(pid))
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from bson import ObjectId

from storefront.store._types import Collection, Document, Query, Sort


def _normalize(value: object) -> object:
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def _matches(document: Document, query: Query) -> bool:
    for key, expected in query.items():
        actual = document.get(key)
        if key == "_id":
            if _normalize(actual) != _normalize(expected):
                return False
        elif actual != expected:
            return False
    return True


def _render(document: Document) -> Document:
    out = copy.deepcopy(document)
    out["_id"] = str(out["_id"])
    return out


@dataclass(slots=True)
class MemoryStore:
    """Dict-of-lists store. Insertion order is natural order."""

    collections: dict[str, list[Document]] = field(default_factory=dict)

    def _docs(self, collection: Collection) -> list[Document]:
        return self.collections.setdefault(str(collection), [])

    async def find_one(self, collection: Collection, query: Query) -> Document | None:
        for doc in self._docs(collection):
            if _matches(doc, query):
                return _render(doc)
        return None

    async def find(
        self,
        collection: Collection,
        query: Query,
        sort: Sort | None = None,
    ) -> list[Document]:
        found = [doc for doc in self._docs(collection) if _matches(doc, query)]
        for key, direction in reversed(list(sort or ())):
            found.sort(key=lambda d: (d.get(key) is not None, d.get(key)), reverse=direction < 0)
        return [_render(doc) for doc in found]

    async def insert_one(self, collection: Collection, document: Document) -> str:
        stored = copy.deepcopy(document)
        stored["_id"] = _normalize(stored.get("_id")) or ObjectId()
        self._docs(collection).append(stored)
        return str(stored["_id"])

    async def update_one(
        self,
        collection: Collection,
        query: Query,
        changes: Mapping[str, Any],
    ) -> bool:
        for doc in self._docs(collection):
            if _matches(doc, query):
                doc.update(copy.deepcopy(dict(changes)))
                return True
        return False

    async def delete_one(self, collection: Collection, query: Query) -> bool:
        docs = self._docs(collection)
        for i, doc in enumerate(docs):
            if _matches(doc, query):
                del docs[i]
                return True
        return False


__all__ = ("MemoryStore",)
