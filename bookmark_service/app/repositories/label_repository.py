from __future__ import annotations

import logging
from uuid import uuid4

from pydantic import ValidationError

from common.kvstore import KVStoreError, KVStoreInterface

from .documents.label_document import LabelsDocument
from .interfaces import LabelRepositoryInterface
from ..exceptions import SerializationError, StorageError
from ..models.label import Label


logger = logging.getLogger(__name__)

LABELS_KEY_PREFIX = "labels_"


def get_labels_key(user_id: str) -> str:
    return f"{LABELS_KEY_PREFIX}{user_id}"


class LabelRepository(LabelRepositoryInterface):
    """KV 스토어에 유저별 라벨 도큐먼트를 저장하는 라벨 이름 해석기."""

    def __init__(self, store: KVStoreInterface) -> None:
        self._store = store

    def _load(self, user_id: str) -> LabelsDocument:
        key = get_labels_key(user_id)
        try:
            raw = self._store.get(key)
        except KVStoreError as exc:
            raise StorageError(f"failed to read labels for user {user_id}") from exc

        if raw is None:
            return LabelsDocument()

        try:
            return LabelsDocument.from_bytes(raw)
        except (ValidationError, ValueError) as exc:
            raise SerializationError(
                f"failed to decode labels for user {user_id}"
            ) from exc

    def _save(self, user_id: str, document: LabelsDocument) -> None:
        try:
            self._store.set(get_labels_key(user_id), document.to_bytes())
        except KVStoreError as exc:
            raise StorageError(f"failed to store labels for user {user_id}") from exc

    def _names_from(
        self, user_id: str, labels: dict[str, Label], label_ids: list[str]
    ) -> list[str]:
        names: list[str] = []
        for label_id in label_ids:
            label = labels.get(label_id)
            if label is None:
                logger.warning(
                    "label %s not found, skipping", label_id, extra={"user_id": user_id}
                )
                continue
            names.append(label.name)
        return names

    def get_names(self, user_id: str, label_ids: list[str]) -> list[str]:
        """라벨 ID 목록을 이름 목록으로 바꾼다. 없는 ID 는 경고만 남기고 건너뛴다."""

        if not label_ids:
            return []
        return self._names_from(user_id, self._load(user_id).by_id, label_ids)

    def get_names_by_key(
        self, user_id: str, label_ids_by_key: dict[str, list[str]]
    ) -> dict[str, list[str]]:
        """여러 라벨 ID 목록을 라벨 도큐먼트 한 번만 읽어서 이름 목록으로 바꾼다."""

        if not any(label_ids_by_key.values()):
            return {key: [] for key in label_ids_by_key}

        labels = self._load(user_id).by_id
        return {
            key: self._names_from(user_id, labels, label_ids)
            for key, label_ids in label_ids_by_key.items()
        }

    def get_ids_for_names(self, user_id: str, names: list[str]) -> list[str]:
        """라벨 이름 목록을 ID 목록으로 바꾼다.

        없는 이름은 새 라벨로 만들고, 새 라벨이 하나라도 생겼을 때만 한 번 저장한다.
        입력 순서와 중복은 그대로 유지한다.
        """

        if not names:
            return []

        document = self._load(user_id)
        by_name: dict[str, str] = {}
        for label in document.by_id.values():
            by_name.setdefault(label.name, label.id)

        created = False
        ids: list[str] = []
        for name in names:
            label_id = by_name.get(name)
            if label_id is None:
                label = Label(id=str(uuid4()), name=name)
                document.by_id[label.id] = label
                by_name[name] = label.id
                label_id = label.id
                created = True
                logger.info("created label %s", name, extra={"user_id": user_id})
            ids.append(label_id)

        if created:
            self._save(user_id, document)

        return ids
