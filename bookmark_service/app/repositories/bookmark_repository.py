from __future__ import annotations

import logging

from pydantic import ValidationError

from common.kvstore import KVStoreError, KVStoreInterface

from .documents.bookmark_document import BookmarksDocument
from .interfaces import BookmarkRepositoryInterface
from ..exceptions import SerializationError, StorageError
from ..models.bookmark import Bookmark


logger = logging.getLogger(__name__)

BOOKMARKS_KEY_PREFIX = "bookmarks_"


def get_bookmarks_key(user_id: str) -> str:
    """유저 ID 로부터 북마크 도큐먼트의 KV 키를 만든다."""
    return f"{BOOKMARKS_KEY_PREFIX}{user_id}"


class BookmarkRepository(BookmarkRepositoryInterface):
    """KV 스토어에 대한 북마크 컬렉션 접근 레이어.

    - 스토어 장애는 StorageError, 디코딩/인코딩 실패는 SerializationError 로 변환한다.
    - save 는 스토어에 대한 단일 set 호출이므로 실패하면 이전 도큐먼트가 그대로 남는다.
    """

    def __init__(self, store: KVStoreInterface) -> None:
        self._store = store

    def get_key(self, user_id: str) -> str:
        return get_bookmarks_key(user_id)

    def find(self, user_id: str) -> dict[str, Bookmark] | None:
        key = self.get_key(user_id)
        try:
            raw = self._store.get(key)
        except KVStoreError as exc:
            raise StorageError(f"failed to read bookmarks for user {user_id}") from exc

        if raw is None:
            logger.debug("no bookmarks document", extra={"user_id": user_id, "key": key})
            return None

        try:
            document = BookmarksDocument.from_bytes(raw)
        except (ValidationError, ValueError) as exc:
            raise SerializationError(
                f"failed to decode bookmarks for user {user_id}"
            ) from exc

        return document.to_domain()

    def load(self, user_id: str) -> dict[str, Bookmark]:
        found = self.find(user_id)
        if found is None:
            return {}
        return found

    def save(self, user_id: str, bookmarks: dict[str, Bookmark]) -> None:
        key = self.get_key(user_id)
        try:
            payload = BookmarksDocument.from_domain(bookmarks).to_bytes()
        except (ValidationError, ValueError, TypeError) as exc:
            raise SerializationError(
                f"failed to encode bookmarks for user {user_id}"
            ) from exc

        try:
            self._store.set(key, payload)
        except KVStoreError as exc:
            raise StorageError(f"failed to store bookmarks for user {user_id}") from exc

        logger.debug(
            "stored %d bookmarks",
            len(bookmarks),
            extra={"user_id": user_id, "key": key},
        )
