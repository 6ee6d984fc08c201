"""
MongoStore — DocumentStore on pymongo's async client.

    store = MongoStore.connect(settings)
    ...
    await store.close()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from storefront.config import Settings
from storefront.store._types import Collection, Document, Query, Sort


def _render(document: Document) -> Document:
    document["_id"] = str(document["_id"])
    return document


class MongoStore:
    __slots__ = ("_client", "_db")

    def __init__(self, client: AsyncMongoClient[Document], database: str) -> None:
        self._client = client
        self._db: AsyncDatabase[Document] = client[database]

    @classmethod
    def connect(cls, settings: Settings) -> MongoStore:
        # Connects lazily on first operation
        return cls(AsyncMongoClient(settings.mongodb_url), settings.mongodb_database)

    async def close(self) -> None:
        await self._client.close()

    async def find_one(self, collection: Collection, query: Query) -> Document | None:
        doc = await self._db[collection].find_one(dict(query))
        return _render(doc) if doc is not None else None

    async def find(
        self,
        collection: Collection,
        query: Query,
        sort: Sort | None = None,
    ) -> list[Document]:
        cursor = self._db[collection].find(dict(query))
        if sort:
            cursor = cursor.sort(list(sort))
        return [_render(doc) for doc in await cursor.to_list()]

    async def insert_one(self, collection: Collection, document: Document) -> str:
        result = await self._db[collection].insert_one(dict(document))
        return str(result.inserted_id)

    async def update_one(
        self,
        collection: Collection,
        query: Query,
        changes: Mapping[str, Any],
    ) -> bool:
        result = await self._db[collection].update_one(dict(query), {"$set": dict(changes)})
        return result.matched_count > 0

    async def delete_one(self, collection: Collection, query: Query) -> bool:
        result = await self._db[collection].delete_one(dict(query))
        return result.deleted_count > 0


__all__ = ("MongoStore",)
