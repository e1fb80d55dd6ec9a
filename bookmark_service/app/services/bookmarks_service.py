from __future__ import annotations

from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from typing import Callable

from fastapi import Depends

from common.kvstore import KVStoreInterface, get_kv_store
from common.types.datetime import get_millis

from ..config import AppConfig, load_config
from ..exceptions import InvalidPostIDError
from ..models.bookmark import Bookmark
from ..models.bookmark_collection import BookmarkCollection
from ..repositories.interfaces import LabelRepositoryInterface
from ..repositories.label_repository import LabelRepository
from .formatter import (
    NO_BOOKMARKS_TEXT,
    format_bookmark_detailed,
    format_bookmarks_list,
    sort_for_display,
)
from .links import get_post_id_from_link
from .user_locks import UserLockRegistry


def _resolve_post_id(post_ref: str) -> str:
    post_id = get_post_id_from_link(post_ref)
    if not post_id:
        raise InvalidPostIDError(post_ref)
    return post_id


@dataclass(slots=True)
class BookmarkView:
    bookmark: Bookmark
    label_names: list[str]
    text: str


@dataclass(slots=True)
class BookmarksView:
    bookmarks: list[Bookmark]
    text: str


class BookmarksService:
    """유저 북마크 add / view / delete 흐름을 조율한다.

    - 요청마다 BookmarkCollection 을 새로 만들어 load -> mutate -> persist 한다.
    - locks 가 주어지면 같은 유저의 쓰기 구간 전체를 유저별 락으로 감싼다.
    - 라벨 이름 해석과 텍스트 포맷은 각각 LabelRepository, formatter 에 맡긴다.
    """

    def __init__(
        self,
        store: KVStoreInterface,
        label_repo: LabelRepositoryInterface,
        locks: UserLockRegistry | None = None,
        site_url: str = "",
        clock: Callable[[], int] = get_millis,
    ) -> None:
        self._store = store
        self._label_repo = label_repo
        self._locks = locks
        self._site_url = site_url
        self._clock = clock

    def _new_collection(self, user_id: str) -> BookmarkCollection:
        return BookmarkCollection.with_store(self._store, user_id, clock=self._clock)

    def _locked(self, user_id: str) -> AbstractContextManager[None]:
        if self._locks is None:
            return nullcontext()
        return self._locks.hold(user_id)

    def add_bookmark(
        self,
        user_id: str,
        post_ref: str,
        title: str = "",
        label_names: list[str] | None = None,
    ) -> Bookmark:
        """북마크를 추가한다. 이미 있으면 제목(주어진 경우)과 라벨을 교체한다."""

        post_id = _resolve_post_id(post_ref)
        with self._locked(user_id):
            label_ids = self._label_repo.get_ids_for_names(user_id, label_names or [])
            bmark = Bookmark(post_id=post_id, title=title, label_ids=label_ids)
            return self._new_collection(user_id).add_bookmark(bmark)

    def delete_bookmark(self, user_id: str, post_ref: str) -> Bookmark:
        post_id = _resolve_post_id(post_ref)
        with self._locked(user_id):
            return self._new_collection(user_id).delete_bookmark(post_id)

    def view_bookmarks(self, user_id: str) -> BookmarksView:
        """유저의 전체 북마크 목록과 표시용 텍스트를 반환한다. 읽기만 한다."""

        collection = self._new_collection(user_id).get_bookmarks()
        # None: 한 번도 저장한 적 없음, 빈 dict: 저장 후 전부 삭제함
        if collection is None or len(collection) == 0:
            return BookmarksView(bookmarks=[], text=NO_BOOKMARKS_TEXT)

        bookmarks = sort_for_display(list(collection.by_id.values()))
        label_names_by_post = self._label_repo.get_names_by_key(
            user_id,
            {b.post_id: b.get_label_ids() for b in bookmarks if b.has_labels()},
        )
        text = format_bookmarks_list(bookmarks, label_names_by_post, self._site_url)
        return BookmarksView(bookmarks=bookmarks, text=text)

    def view_bookmark(self, user_id: str, post_ref: str) -> BookmarkView:
        post_id = _resolve_post_id(post_ref)

        bmark = self._new_collection(user_id).get_bookmark(post_id)
        label_names = self._label_repo.get_names(user_id, bmark.get_label_ids())
        text = format_bookmark_detailed(bmark, label_names, self._site_url)
        return BookmarkView(bookmark=bmark, label_names=label_names, text=text)


_user_locks = UserLockRegistry()


def get_app_config() -> AppConfig:
    """FastAPI DI용 설정 로더."""

    return load_config()


def get_label_repository(
    store: KVStoreInterface = Depends(get_kv_store),
) -> LabelRepositoryInterface:
    """FastAPI DI용 LabelRepository 팩토리."""

    return LabelRepository(store)


def get_bookmarks_service(
    store: KVStoreInterface = Depends(get_kv_store),
    label_repo: LabelRepositoryInterface = Depends(get_label_repository),
    config: AppConfig = Depends(get_app_config),
) -> BookmarksService:
    """FastAPI DI용 BookmarksService 팩토리."""

    locks = _user_locks if config.user_lock_enabled else None
    return BookmarksService(
        store=store,
        label_repo=label_repo,
        locks=locks,
        site_url=config.site_url,
    )
