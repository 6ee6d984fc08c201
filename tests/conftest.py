from datetime import UTC, datetime

import pytest

from storefront.config import Settings
from storefront.gateway import MemoryGateway
from storefront.store import Collection, MemoryStore

TEE_ID = "64b000000000000000000001"
MUG_ID = "64b000000000000000000002"
CUSTOM_ID = "64c000000000000000000001"


class FailingStore:
    """Every call raises; stands in for an unreachable database."""

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc or ConnectionError("connection refused")

    async def find_one(self, collection, query):
        raise self.exc

    async def find(self, collection, query, sort=None):
        raise self.exc

    async def insert_one(self, collection, document):
        raise self.exc

    async def update_one(self, collection, query, changes):
        raise self.exc

    async def delete_one(self, collection, query):
        raise self.exc


@pytest.fixture
def settings() -> Settings:
    return Settings(
        public_base_url="https://shop.test",
        admin_emails=frozenset({"owner@shop.test"}),
        lookup_timeout_seconds=0.5,
    )


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def gateway() -> MemoryGateway:
    return MemoryGateway(clock=lambda: 2000)


@pytest.fixture
async def catalog(store: MemoryStore) -> MemoryStore:
    await store.insert_one(
        Collection.PRODUCTS,
        {
            "_id": TEE_ID,
            "name": "Classic Tee",
            "price": 25.00,
            "category": "Shirts",
            "colors": ["Black", "White"],
            "sizes": ["M", "L"],
        },
    )
    await store.insert_one(
        Collection.PRODUCTS,
        {"_id": MUG_ID, "name": "Mug", "price": 19.99, "category": "Kitchen"},
    )
    await store.insert_one(
        Collection.CUSTOM_PRODUCTS,
        {
            "_id": CUSTOM_ID,
            "name": "Custom Hoodie",
            "price": 40.00,
            "category": "Custom",
            "customImage": "hoodie-base.png",
            "finalDesignImageId": "img_final_1",
        },
    )
    return store


@pytest.fixture
async def coupons(store: MemoryStore) -> MemoryStore:
    created = datetime(2024, 1, 1, tzinfo=UTC)
    await store.insert_one(
        Collection.COUPONS,
        {
            "code": "SAVE20",
            "discountPercentage": 20,
            "description": "20% off",
            "isActive": True,
            "createdAt": created,
        },
    )
    await store.insert_one(
        Collection.COUPONS,
        {
            "code": "OLD50",
            "discountPercentage": 50,
            "description": "expired",
            "isActive": False,
            "createdAt": created,
        },
    )
    return store
