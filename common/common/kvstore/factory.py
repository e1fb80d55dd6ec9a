from __future__ import annotations

import os
import threading
from enum import Enum
from typing import Callable, Optional, Self

from .interfaces import KVStoreInterface
from .memory import InMemoryKVStore


KV_STORE_BACKEND_ENV = "KV_STORE_BACKEND"


class KVStoreBackend(str, Enum):
    MEMORY = "memory"
    MONGO = "mongo"

    @classmethod
    def from_str(cls, value: str) -> Self:
        normalized = value.strip().lower()
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"unsupported KV store backend: {value}") from exc


def _build_mongo_store() -> KVStoreInterface:
    # pymongo 연결은 mongo 백엔드를 선택한 경우에만 만든다.
    from common.mongo.client import get_database
    from common.mongo.config import get_kv_collection_name

    from .mongo import MongoKVStore

    return MongoKVStore(get_database()[get_kv_collection_name()])


_STORE_FACTORIES: dict[KVStoreBackend, Callable[[], KVStoreInterface]] = {
    KVStoreBackend.MEMORY: InMemoryKVStore,
    KVStoreBackend.MONGO: _build_mongo_store,
}


_store: Optional[KVStoreInterface] = None
_lock = threading.Lock()


def get_backend() -> KVStoreBackend:
    """KV_STORE_BACKEND 환경변수에서 백엔드를 결정한다 (기본값: memory)."""

    raw = os.getenv(KV_STORE_BACKEND_ENV) or KVStoreBackend.MEMORY.value
    try:
        return KVStoreBackend.from_str(raw)
    except ValueError as exc:
        raise RuntimeError(
            f"{KV_STORE_BACKEND_ENV} must be one of "
            f"{[b.value for b in KVStoreBackend]}, got: {raw!r}"
        ) from exc


def create_kv_store(backend: KVStoreBackend) -> KVStoreInterface:
    return _STORE_FACTORIES[backend]()


def get_kv_store() -> KVStoreInterface:
    """프로세스 전역 KV 스토어 싱글톤을 반환한다."""

    global _store

    if _store is not None:
        return _store

    with _lock:
        if _store is None:
            _store = create_kv_store(get_backend())
        return _store
