from __future__ import annotations

from bookmark_service.app.repositories.label_repository import LabelRepository
from fakes import FlakyKVStore


def test_get_ids_for_names_creates_missing_once(store: FlakyKVStore) -> None:
    repo = LabelRepository(store)

    ids = repo.get_ids_for_names("u1", ["work", "read", "work"])

    assert ids[0] == ids[2]
    assert len(set(ids)) == 2
    assert store.set_calls == ["labels_u1"]
    assert repo.get_ids_for_names("u1", ["read"]) == [ids[1]]
    assert store.set_calls == ["labels_u1"]


def test_get_names_by_key_resolves_from_one_read(store: FlakyKVStore) -> None:
    repo = LabelRepository(store)
    work, read = repo.get_ids_for_names("u1", ["work", "read"])
    store.get_calls.clear()

    names = repo.get_names_by_key(
        "u1", {"ID1": [work], "ID2": [read, "ghost", work], "ID3": []}
    )

    assert names == {"ID1": ["work"], "ID2": ["read", "work"], "ID3": []}
    assert store.get_calls == ["labels_u1"]


def test_get_names_by_key_without_labels_skips_store(store: FlakyKVStore) -> None:
    names = LabelRepository(store).get_names_by_key("u1", {"ID1": []})

    assert names == {"ID1": []}
    assert store.get_calls == []
