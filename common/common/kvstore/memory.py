from __future__ import annotations

import logging
import threading

from .interfaces import KVStoreError


logger = logging.getLogger(__name__)


class InMemoryKVStore:
    """프로세스 전역 dict 기반 KV 스토어.

    개별 get/set 호출만 원자적이다. 호출 사이의 격리는 제공하지 않으므로
    읽고-수정하고-쓰는 흐름은 호출자가 직접 직렬화해야 한다.
    """

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            value = self._data.get(key)
        if value is None:
            logger.debug("kv miss", extra={"key": key})
        return value

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise KVStoreError(
                f"kv value must be bytes, got {type(value).__name__} (key={key})"
            )
        with self._lock:
            self._data[key] = bytes(value)
        logger.debug("kv set", extra={"key": key})

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._data)
