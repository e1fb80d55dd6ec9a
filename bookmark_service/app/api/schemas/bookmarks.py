from __future__ import annotations

from pydantic import BaseModel, Field

from ...models.bookmark import Bookmark


class BookmarkCreateRequest(BaseModel):
    user_id: str
    post_id: str = Field(..., min_length=1, description="post_id 또는 포스트 퍼머링크")
    title: str = ""
    label_names: list[str] = Field(default_factory=list)


class BookmarkItem(BaseModel):
    post_id: str
    title: str
    create_at: int
    update_at: int
    label_ids: list[str]

    @classmethod
    def from_domain(cls, bookmark: Bookmark) -> "BookmarkItem":
        return cls(
            post_id=bookmark.post_id,
            title=bookmark.title,
            create_at=bookmark.create_at,
            update_at=bookmark.modified_at,
            label_ids=list(bookmark.label_ids),
        )


class ListBookmarksResponse(BaseModel):
    total: int
    items: list[BookmarkItem]
    text: str


class BookmarkDetailResponse(BaseModel):
    bookmark: BookmarkItem
    label_names: list[str]
    text: str


class BookmarkDeleteResponse(BaseModel):
    message: str
    bookmark: BookmarkItem
