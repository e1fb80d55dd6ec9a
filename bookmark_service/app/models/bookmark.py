from __future__ import annotations

from pydantic import BaseModel, Field


class Bookmark(BaseModel):
    """유저가 북마크한 포스트 도메인 모델.

    post_id 가 곧 북마크의 식별자이며 별도 ID 를 생성하지 않는다.
    create_at / modified_at 은 epoch 밀리초이고 0 은 "아직 저장되지 않음"을 뜻한다.
    """

    post_id: str
    title: str = ""
    create_at: int = 0
    modified_at: int = 0
    label_ids: list[str] = Field(default_factory=list)

    def get_title(self) -> str:
        return self.title

    def set_title(self, title: str) -> None:
        self.title = title

    def get_label_ids(self) -> list[str]:
        return self.label_ids

    def add_label_ids(self, ids: list[str]) -> None:
        """라벨 목록을 통째로 교체한다 (append 가 아니다, 중복 제거도 하지 않는다)."""
        self.label_ids = list(ids)

    def has_user_title(self) -> bool:
        return self.get_title() != ""

    def has_labels(self) -> bool:
        return bool(self.get_label_ids())
