"""
ScholarBeacon Backend: Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the test suite.
How:   Environment is pinned before any `scholarbeacon` import. MongoDB is
       replaced by an in-memory collection double that answers the async
       pymongo calls CollectionAccessor makes; route tests swap it in through
       `app.dependency_overrides[get_store]`.

Fixtures:
    ├── fake_store:      Store over empty in-memory collections
    ├── failing_store:   Store whose every collection raises a driver error
    ├── test_client:     HTTPX AsyncClient bound to the app, using fake_store
    └── failing_client:  same, using failing_store
"""

import os
from contextlib import asynccontextmanager

os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "ScholarBeaconTest"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_not_real"
os.environ["PAYMENT_RETRY_MAX_ATTEMPTS"] = "3"
os.environ["PAYMENT_RETRY_MIN_WAIT"] = "0"
os.environ["PAYMENT_RETRY_MAX_WAIT"] = "0"
os.environ["LOG_LEVEL"] = "WARNING"

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import ServerSelectionTimeoutError

from scholarbeacon.store import CollectionAccessor, Store


# ══════════════════════════════════════════════════════════════════════════
# In-memory collection double
# ══════════════════════════════════════════════════════════════════════════

def _matches(document: Dict[str, Any], filter: Dict[str, Any]) -> bool:
    return all(document.get(key) == value for key, value in filter.items())


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        if length is None:
            return list(self._documents)
        return list(self._documents[:length])


class FakeCollection:
    """
    Equality-filter subset of pymongo's AsyncCollection, keeping documents in
    insertion order like a natural-order MongoDB scan.
    """

    def __init__(self, name: str):
        self.name = name
        self.documents: List[Dict[str, Any]] = []

    def seed(self, *documents: Dict[str, Any]) -> List[ObjectId]:
        ids = []
        for document in documents:
            stored = dict(document)
            stored.setdefault("_id", ObjectId())
            self.documents.append(stored)
            ids.append(stored["_id"])
        return ids

    def find(self, filter: Dict[str, Any]) -> FakeCursor:
        return FakeCursor([dict(doc) for doc in self.documents if _matches(doc, filter)])

    async def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for doc in self.documents:
            if _matches(doc, filter):
                return dict(doc)
        return None

    async def insert_one(self, document: Dict[str, Any]) -> SimpleNamespace:
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return SimpleNamespace(acknowledged=True, inserted_id=document["_id"])

    async def update_one(self, filter: Dict[str, Any], update: Dict[str, Any]) -> SimpleNamespace:
        for doc in self.documents:
            if _matches(doc, filter):
                changes = update["$set"]
                modified = any(doc.get(k) != v for k, v in changes.items())
                doc.update(changes)
                return SimpleNamespace(acknowledged=True, matched_count=1, modified_count=int(modified))
        return SimpleNamespace(acknowledged=True, matched_count=0, modified_count=0)

    async def delete_one(self, filter: Dict[str, Any]) -> SimpleNamespace:
        for index, doc in enumerate(self.documents):
            if _matches(doc, filter):
                del self.documents[index]
                return SimpleNamespace(acknowledged=True, deleted_count=1)
        return SimpleNamespace(acknowledged=True, deleted_count=0)


class FailingCollection(FakeCollection):
    """Every operation fails the way an unreachable cluster does."""

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("No servers found yet")

    find = _fail

    async def find_one(self, *args, **kwargs):
        self._fail()

    async def insert_one(self, *args, **kwargs):
        self._fail()

    async def update_one(self, *args, **kwargs):
        self._fail()

    async def delete_one(self, *args, **kwargs):
        self._fail()


def _build_store(collection_cls) -> Store:
    return Store(
        users=CollectionAccessor(collection_cls("users")),
        scholarships=CollectionAccessor(collection_cls("scholarships")),
        reviews=CollectionAccessor(collection_cls("reviews")),
        applications=CollectionAccessor(collection_cls("applications")),
    )


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_store() -> Store:
    """
    Store over empty in-memory collections.

    Seed data through the underlying double:
        fake_store.users.collection.seed({"email": "a@b.c", "name": "Ada"})
    """
    return _build_store(FakeCollection)


@pytest.fixture
def failing_store() -> Store:
    return _build_store(FailingCollection)


@asynccontextmanager
async def _client_for(store: Store):
    from scholarbeacon.database import get_store
    from scholarbeacon.main import app

    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(fake_store):
    """
    HTTPX AsyncClient talking to the app in-process, backed by fake_store.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    async with _client_for(fake_store) as client:
        yield client


@pytest_asyncio.fixture
async def failing_client(failing_store):
    async with _client_for(failing_store) as client:
        yield client
