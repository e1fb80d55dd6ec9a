from __future__ import annotations

import logging
from datetime import datetime, timezone

from bson import Binary
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .interfaces import KVStoreError


logger = logging.getLogger(__name__)


class MongoKVStore:
    """MongoDB 컬렉션 기반 KV 스토어.

    키 하나당 도큐먼트 하나(``{_id: key, value: <bytes>, updated_at}``)를 사용한다.
    set 은 단일 upsert 이므로 실패해도 이전 값이 그대로 남는다.
    """

    def __init__(self, collection: Collection) -> None:
        self._col = collection

    def get(self, key: str) -> bytes | None:
        try:
            doc = self._col.find_one({"_id": key}, projection={"value": 1})
        except PyMongoError as exc:
            raise KVStoreError(f"failed to read key {key}: {exc}") from exc

        if doc is None:
            return None

        value = doc.get("value")
        if value is None:
            return None
        return bytes(value)

    def set(self, key: str, value: bytes) -> None:
        now = datetime.now(timezone.utc)
        try:
            self._col.update_one(
                {"_id": key},
                {"$set": {"value": Binary(bytes(value)), "updated_at": now}},
                upsert=True,
            )
        except PyMongoError as exc:
            raise KVStoreError(f"failed to write key {key}: {exc}") from exc
        logger.debug("kv set", extra={"key": key})
