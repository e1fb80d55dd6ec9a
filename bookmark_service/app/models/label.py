from __future__ import annotations

from pydantic import BaseModel


class Label(BaseModel):
    """북마크에 붙는 유저별 라벨. 이름의 유일성은 보장하지 않는다."""

    id: str
    name: str
