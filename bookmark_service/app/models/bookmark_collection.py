"""유저 한 명의 북마크 집합(aggregate)과 그 저장 프로토콜.

컬렉션은 요청마다 새로 만들고, KV 스토어에서 읽어 와(hydrate) 메모리에서 수정한 뒤
전체를 하나의 도큐먼트로 다시 저장한다. 스토어는 get/set 만 제공하므로 같은 유저에 대한
동시 쓰기는 서로의 변경을 덮어쓸 수 있다(lost update). add_bookmark / delete_bookmark 는
수정 직전에 다시 읽어 와 그 구간을 줄일 뿐 없애지는 못한다. 직렬화는 서비스 레이어의
유저별 락이 담당한다.
"""

from __future__ import annotations

import logging
from typing import Callable

from common.kvstore import KVStoreInterface
from common.types.datetime import get_millis

from .bookmark import Bookmark
from ..exceptions import NotFoundError, SerializationError, StorageError
from ..repositories.bookmark_repository import BookmarkRepository
from ..repositories.interfaces import BookmarkRepositoryInterface


logger = logging.getLogger(__name__)


class BookmarkCollection:
    """post_id -> Bookmark 매핑과 그 조회/수정/저장 API.

    하나의 user_id 와 하나의 저장소(repository)에 생애 동안 묶여 있다.
    """

    def __init__(
        self,
        repo: BookmarkRepositoryInterface,
        user_id: str,
        clock: Callable[[], int] = get_millis,
    ) -> None:
        self.by_id: dict[str, Bookmark] = {}
        self.user_id = user_id
        self._repo = repo
        self._clock = clock

    @classmethod
    def with_store(
        cls,
        store: KVStoreInterface,
        user_id: str,
        clock: Callable[[], int] = get_millis,
    ) -> "BookmarkCollection":
        """KV 스토어 핸들로부터 유저 전용 빈 컬렉션을 만든다."""
        return cls(BookmarkRepository(store), user_id, clock=clock)

    def __len__(self) -> int:
        return len(self.by_id)

    def __contains__(self, post_id: object) -> bool:
        return post_id in self.by_id

    # --- 순수 메모리 연산 (I/O 없음) ---

    def get(self, post_id: str) -> Bookmark | None:
        return self.by_id.get(post_id)

    def exists(self, post_id: str) -> tuple[Bookmark | None, bool]:
        bmark = self.by_id.get(post_id)
        if bmark is None:
            return None, False
        return bmark, True

    def delete(self, post_id: str) -> None:
        """메모리에서만 제거한다. 저장은 호출자 책임이다."""
        self.by_id.pop(post_id, None)

    def update_times(self, post_id: str) -> Bookmark:
        """처음 쓰는 북마크면 create_at 을 채우고, 항상 modified_at 을 갱신한다.

        저장하지 않으므로 이후 add / store_bookmarks 와 함께 써야 한다.
        """
        bmark = self.get(post_id)
        if bmark is None:
            raise NotFoundError(post_id)

        now = self._clock()
        if bmark.create_at == 0:
            bmark.create_at = now
        bmark.modified_at = now
        return bmark

    def update_labels(self, bmark: Bookmark) -> Bookmark:
        """저장된 같은 post_id 북마크의 라벨을 들어온 라벨로 통째로 교체한다.

        합집합 병합이 아니라 덮어쓰기다.
        """
        stored = self.get(bmark.post_id)
        if stored is None:
            raise NotFoundError(bmark.post_id)

        stored.add_label_ids(bmark.get_label_ids())
        return stored

    # --- 저장소 연산 ---

    def store_bookmarks(self) -> None:
        """현재 메모리 상태 전체를 하나의 도큐먼트로 저장한다."""
        self._repo.save(self.user_id, self.by_id)

    def _reload(self) -> None:
        self.by_id = self._repo.load(self.user_id)

    def add(self, bmark: Bookmark) -> None:
        """메모리 컬렉션에 넣고(덮어쓰기) 전체를 저장한다.

        저장소에서 다시 읽지 않으므로, 메모리 상태가 최신이 아니면 다른 요청이 저장한
        변경을 덮어쓴다.
        """
        self.by_id[bmark.post_id] = bmark
        try:
            self.store_bookmarks()
        except (StorageError, SerializationError) as exc:
            raise type(exc)(f"failed to add bookmark: {exc}") from exc

    def add_bookmark(self, bmark: Bookmark) -> Bookmark:
        """최신 컬렉션을 다시 읽은 뒤 북마크를 넣고 저장한다.

        이미 있는 post_id 면 저장된 북마크의 create_at 을 유지한 채 제목(주어진 경우)과
        라벨을 교체한다.
        """
        self._reload()

        stored, found = self.exists(bmark.post_id)
        if found and stored is not None:
            if bmark.has_user_title():
                stored.set_title(bmark.get_title())
            self.update_labels(bmark)
            target = stored
        else:
            target = bmark
            self.by_id[bmark.post_id] = target

        self.update_times(target.post_id)
        self.add(target)

        logger.info(
            "bookmark saved",
            extra={"user_id": self.user_id, "post_id": target.post_id},
        )
        return target

    def delete_bookmark(self, post_id: str) -> Bookmark:
        """최신 컬렉션을 다시 읽어 북마크를 지우고 저장한 뒤, 지운 북마크를 반환한다."""
        self._reload()

        bmark, found = self.exists(post_id)
        if not found or bmark is None:
            raise NotFoundError(post_id)

        self.delete(post_id)
        try:
            self.store_bookmarks()
        except (StorageError, SerializationError) as exc:
            raise type(exc)(f"failed to delete bookmark: {exc}") from exc

        logger.info(
            "bookmark deleted", extra={"user_id": self.user_id, "post_id": post_id}
        )
        return bmark

    def get_bookmarks(self) -> "BookmarkCollection | None":
        """유저의 전체 컬렉션을 읽어 온다. 도큐먼트가 없으면 None (아무것도 쓰지 않는다)."""
        found = self._repo.find(self.user_id)
        if found is None:
            return None

        self.by_id = found
        return self

    def get_bookmark(self, post_id: str) -> Bookmark:
        self._reload()

        bmark = self.get(post_id)
        if bmark is None:
            raise NotFoundError(post_id)
        return bmark
