"""Pytest configuration and fixtures"""
import asyncio
import os
from typing import Dict, List, Optional

import pytest

# Set test environment variables
os.environ.setdefault("CATALOG_API_URL", "http://catalog.test")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from storefront.auth import AuthState  # noqa: E402
from storefront.cart import (  # noqa: E402
    CartStorage,
    CartStore,
    InventoryValidator,
    LocalStorage,
    ProductSnapshot,
    RecordingNotifier,
)


class FakeCatalog:
    """
    In-memory product lookup.

    ``products`` maps slug to the raw catalog record (or None). Set ``gate``
    to an unset asyncio.Event to hold lookups until the test releases them.
    """

    def __init__(self, products: Optional[Dict[str, Optional[dict]]] = None):
        self.products: Dict[str, Optional[dict]] = dict(products or {})
        self.calls: List[str] = []
        self.gate: Optional[asyncio.Event] = None
        self.error: Optional[Exception] = None

    async def get_product(self, slug: str) -> Optional[ProductSnapshot]:
        self.calls.append(slug)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        record = self.products.get(slug)
        if record is None:
            return None
        return ProductSnapshot.model_validate(record)


@pytest.fixture
def sample_product():
    """Sample catalog record"""
    return {
        "_id": "123",
        "name": "Test Product",
        "slug": "sku1",
        "price": 100,
        "quantity": 10,
    }


@pytest.fixture
def catalog(sample_product):
    return FakeCatalog({"sku1": sample_product})


@pytest.fixture
def local_storage():
    return LocalStorage()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def auth():
    return AuthState()


@pytest.fixture
def store(auth, catalog, local_storage, notifier):
    """Cart store wired to fakes; not hydrated yet."""
    return CartStore(
        auth=auth,
        validator=InventoryValidator(catalog),
        storage=CartStorage(local_storage),
        notifier=notifier,
    )
