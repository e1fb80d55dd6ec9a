from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models.label import Label


class LabelsDocument(BaseModel):
    """유저 한 명의 라벨 도큐먼트 (``{"ByID": {id: {id, name}}}``)."""

    model_config = ConfigDict(populate_by_name=True)

    by_id: dict[str, Label] = Field(default_factory=dict, alias="ByID")

    @field_validator("by_id", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_bytes(self) -> bytes:
        payload = {
            "ByID": {
                label_id: self.by_id[label_id].model_dump()
                for label_id in sorted(self.by_id)
            }
        }
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode(
            "utf-8"
        )

    @classmethod
    def from_bytes(cls, raw: bytes) -> "LabelsDocument":
        return cls.model_validate_json(raw)
