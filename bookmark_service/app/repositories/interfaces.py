from __future__ import annotations

from typing import Protocol

from ..models.bookmark import Bookmark


class BookmarkRepositoryInterface(Protocol):
    """BookmarkRepository가 따라야 할 최소한의 계약.

    - 유저 한 명의 북마크 전체를 하나의 도큐먼트로 읽고 쓴다 (부분 저장 없음).
    """

    def get_key(self, user_id: str) -> str:  # pragma: no cover - Protocol
        ...

    def find(
        self, user_id: str
    ) -> dict[str, Bookmark] | None:  # pragma: no cover - Protocol
        """저장된 도큐먼트가 없으면 None 을 반환한다."""
        ...

    def load(self, user_id: str) -> dict[str, Bookmark]:  # pragma: no cover - Protocol
        """저장된 도큐먼트가 없으면 빈 dict 를 반환한다."""
        ...

    def save(
        self, user_id: str, bookmarks: dict[str, Bookmark]
    ) -> None:  # pragma: no cover - Protocol
        ...


class LabelRepositoryInterface(Protocol):
    """라벨 ID <-> 이름 변환 계약. 존재하지 않는 라벨에 관대해야 한다."""

    def get_names_by_key(
        self, user_id: str, label_ids_by_key: dict[str, list[str]]
    ) -> dict[str, list[str]]:  # pragma: no cover - Protocol
        ...

    def get_names(
        self, user_id: str, label_ids: list[str]
    ) -> list[str]:  # pragma: no cover - Protocol
        ...

    def get_ids_for_names(
        self, user_id: str, names: list[str]
    ) -> list[str]:  # pragma: no cover - Protocol
        ...
