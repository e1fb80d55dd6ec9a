from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..schemas.bookmarks import (
    BookmarkCreateRequest,
    BookmarkDeleteResponse,
    BookmarkDetailResponse,
    BookmarkItem,
    ListBookmarksResponse,
)
from ...services.bookmarks_service import BookmarksService, get_bookmarks_service


router = APIRouter()

# 유저별 락을 잡는 동기 서비스 호출이므로 엔드포인트는 threadpool 에서 도는 def 로 둔다.


@router.post(
    "",
    response_model=BookmarkItem,
    summary="유저 북마크 추가 (이미 있으면 제목/라벨 갱신)",
)
def add_bookmark(
    body: BookmarkCreateRequest,
    service: BookmarksService = Depends(get_bookmarks_service),
) -> BookmarkItem:
    bookmark = service.add_bookmark(
        user_id=body.user_id,
        post_ref=body.post_id,
        title=body.title,
        label_names=body.label_names,
    )
    return BookmarkItem.from_domain(bookmark)


@router.get(
    "",
    response_model=ListBookmarksResponse,
    summary="유저 북마크 목록 조회",
)
def list_bookmarks(
    user_id: str = Query(..., description="유저 ID"),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> ListBookmarksResponse:
    view = service.view_bookmarks(user_id)
    items = [BookmarkItem.from_domain(b) for b in view.bookmarks]
    return ListBookmarksResponse(total=len(items), items=items, text=view.text)


@router.get(
    "/{post_ref:path}",
    response_model=BookmarkDetailResponse,
    summary="유저 북마크 단건 조회",
)
def get_bookmark(
    post_ref: str,
    user_id: str = Query(..., description="유저 ID"),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> BookmarkDetailResponse:
    view = service.view_bookmark(user_id, post_ref)
    return BookmarkDetailResponse(
        bookmark=BookmarkItem.from_domain(view.bookmark),
        label_names=view.label_names,
        text=view.text,
    )


@router.delete(
    "/{post_ref:path}",
    response_model=BookmarkDeleteResponse,
    summary="유저 북마크 삭제",
)
def remove_bookmark(
    post_ref: str,
    user_id: str = Query(..., description="유저 ID"),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> BookmarkDeleteResponse:
    removed = service.delete_bookmark(user_id, post_ref)
    return BookmarkDeleteResponse(
        message="bookmark_deleted", bookmark=BookmarkItem.from_domain(removed)
    )
