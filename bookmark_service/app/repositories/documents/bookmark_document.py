from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models.bookmark import Bookmark


class BookmarkRecord(BaseModel):
    """KV 에 저장되는 단일 북마크 레코드.

    저장 포맷: ``{postid, title?, create_at, update_at, label_ids?}``
    """

    model_config = ConfigDict(populate_by_name=True)

    post_id: str = Field(alias="postid")
    title: str = ""
    create_at: int = 0
    update_at: int = 0
    label_ids: list[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _none_title_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("label_ids", mode="before")
    @classmethod
    def _none_labels_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_domain(cls, bookmark: Bookmark) -> "BookmarkRecord":
        return cls(
            post_id=bookmark.post_id,
            title=bookmark.title,
            create_at=bookmark.create_at,
            update_at=bookmark.modified_at,
            label_ids=list(bookmark.label_ids),
        )

    def to_domain(self) -> Bookmark:
        return Bookmark(
            post_id=self.post_id,
            title=self.title,
            create_at=self.create_at,
            modified_at=self.update_at,
            label_ids=list(self.label_ids),
        )

    def to_record(self) -> dict[str, Any]:
        """빈 title / label_ids 를 생략한 저장용 dict."""

        record: dict[str, Any] = {"postid": self.post_id}
        if self.title:
            record["title"] = self.title
        record["create_at"] = self.create_at
        record["update_at"] = self.update_at
        if self.label_ids:
            record["label_ids"] = list(self.label_ids)
        return record


class BookmarksDocument(BaseModel):
    """유저 한 명의 전체 북마크 컬렉션 도큐먼트 (``{"ByID": {...}}``)."""

    model_config = ConfigDict(populate_by_name=True)

    by_id: dict[str, BookmarkRecord] = Field(default_factory=dict, alias="ByID")

    @field_validator("by_id", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def from_domain(cls, bookmarks: dict[str, Bookmark]) -> "BookmarksDocument":
        return cls(
            by_id={
                post_id: BookmarkRecord.from_domain(bmark)
                for post_id, bmark in bookmarks.items()
            }
        )

    def to_domain(self) -> dict[str, Bookmark]:
        return {post_id: record.to_domain() for post_id, record in self.by_id.items()}

    def to_bytes(self) -> bytes:
        """정렬된 키, 공백 없는 구분자를 쓰는 canonical JSON 인코딩."""

        payload = {
            "ByID": {
                post_id: self.by_id[post_id].to_record()
                for post_id in sorted(self.by_id)
            }
        }
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode(
            "utf-8"
        )

    @classmethod
    def from_bytes(cls, raw: bytes) -> "BookmarksDocument":
        return cls.model_validate_json(raw)
