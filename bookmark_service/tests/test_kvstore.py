from __future__ import annotations

from typing import Any

import pytest
from pymongo.errors import PyMongoError

from common.kvstore import InMemoryKVStore, KVStoreBackend, KVStoreError
from common.kvstore.factory import create_kv_store, get_backend
from common.kvstore.mongo import MongoKVStore


class FakeMongoCollection:
    """find_one / update_one 만 흉내 내는 가짜 pymongo Collection."""

    def __init__(self) -> None:
        self.docs: dict[str, dict[str, Any]] = {}
        self.fail = False

    def find_one(self, flt: dict[str, Any], projection: Any = None) -> dict | None:
        if self.fail:
            raise PyMongoError("connection reset")
        doc = self.docs.get(flt["_id"])
        return dict(doc) if doc is not None else None

    def update_one(
        self, flt: dict[str, Any], update: dict[str, Any], upsert: bool = False
    ) -> None:
        if self.fail:
            raise PyMongoError("connection reset")
        doc = self.docs.setdefault(flt["_id"], {"_id": flt["_id"]})
        doc.update(update["$set"])


def test_memory_store_get_missing_returns_none() -> None:
    assert InMemoryKVStore().get("nope") is None


def test_memory_store_set_overwrites() -> None:
    store = InMemoryKVStore()

    store.set("k", b"v1")
    store.set("k", b"v2")

    assert store.get("k") == b"v2"
    assert store.keys() == ["k"]


def test_memory_store_rejects_non_bytes() -> None:
    with pytest.raises(KVStoreError):
        InMemoryKVStore().set("k", "text")  # type: ignore[arg-type]


def test_mongo_store_round_trip() -> None:
    collection = FakeMongoCollection()
    store = MongoKVStore(collection)  # type: ignore[arg-type]

    assert store.get("bookmarks_u1") is None

    store.set("bookmarks_u1", b'{"ByID":{}}')

    assert store.get("bookmarks_u1") == b'{"ByID":{}}'
    assert "updated_at" in collection.docs["bookmarks_u1"]


def test_mongo_store_wraps_driver_errors() -> None:
    collection = FakeMongoCollection()
    collection.fail = True
    store = MongoKVStore(collection)  # type: ignore[arg-type]

    with pytest.raises(KVStoreError):
        store.get("k")
    with pytest.raises(KVStoreError):
        store.set("k", b"v")


def test_backend_defaults_to_memory(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("KV_STORE_BACKEND", raising=False)

    assert get_backend() is KVStoreBackend.MEMORY
    assert isinstance(create_kv_store(KVStoreBackend.MEMORY), InMemoryKVStore)


def test_backend_parses_case_insensitively(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KV_STORE_BACKEND", " Mongo ")

    assert get_backend() is KVStoreBackend.MONGO


def test_unknown_backend_fails_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KV_STORE_BACKEND", "redis")

    with pytest.raises(RuntimeError, match="KV_STORE_BACKEND"):
        get_backend()
