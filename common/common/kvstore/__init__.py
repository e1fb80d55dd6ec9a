"""문자열 키 -> 바이트 값 KV 스토어 추상화와 구현체."""

from .factory import KVStoreBackend, get_kv_store
from .interfaces import KVStoreError, KVStoreInterface
from .memory import InMemoryKVStore

__all__ = [
    "InMemoryKVStore",
    "KVStoreBackend",
    "KVStoreError",
    "KVStoreInterface",
    "get_kv_store",
]
