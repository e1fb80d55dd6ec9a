from __future__ import annotations

import pytest

from bookmark_service.app.exceptions import InvalidPostIDError, NotFoundError
from bookmark_service.app.models.bookmark import Bookmark
from bookmark_service.app.models.bookmark_collection import BookmarkCollection
from bookmark_service.app.repositories.label_repository import LabelRepository
from bookmark_service.app.services.bookmarks_service import BookmarksService
from bookmark_service.app.services.formatter import NO_BOOKMARKS_TEXT
from bookmark_service.app.services.user_locks import UserLockRegistry
from fakes import FakeClock, FlakyKVStore


SITE_URL = "https://chat.example.com"


@pytest.fixture
def service(store: FlakyKVStore, clock: FakeClock) -> BookmarksService:
    return BookmarksService(
        store=store,
        label_repo=LabelRepository(store),
        locks=UserLockRegistry(),
        site_url=SITE_URL,
        clock=clock,
    )


def test_add_bookmark_resolves_labels_and_permalink(service: BookmarksService) -> None:
    saved = service.add_bookmark(
        "u1",
        f"{SITE_URL}/team/pl/post123",
        title="Read later",
        label_names=["work", "read"],
    )

    assert saved.post_id == "post123"
    assert saved.title == "Read later"
    assert len(saved.label_ids) == 2

    view = service.view_bookmark("u1", "post123")

    assert view.bookmark == saved
    assert view.label_names == ["work", "read"]
    assert "#### Read later" in view.text
    assert "`work` `read`" in view.text
    assert f"{SITE_URL}/_redirect/pl/post123" in view.text


def test_add_bookmark_reuses_existing_label_ids(service: BookmarksService) -> None:
    first = service.add_bookmark("u1", "ID1", label_names=["work"])
    second = service.add_bookmark("u1", "ID2", label_names=["work"])

    assert first.label_ids == second.label_ids


def test_re_adding_replaces_labels_and_keeps_create_at(
    service: BookmarksService,
) -> None:
    first = service.add_bookmark("u1", "ID1", title="Title1", label_names=["a", "b"])

    again = service.add_bookmark("u1", "ID1", label_names=["c"])

    assert again.create_at == first.create_at
    assert again.modified_at > first.modified_at
    assert again.title == "Title1"
    assert service.view_bookmark("u1", "ID1").label_names == ["c"]


def test_view_bookmarks_without_document(service: BookmarksService) -> None:
    view = service.view_bookmarks("u1")

    assert view.bookmarks == []
    assert view.text == NO_BOOKMARKS_TEXT


def test_view_bookmarks_after_deleting_everything(service: BookmarksService) -> None:
    service.add_bookmark("u1", "ID1")
    service.delete_bookmark("u1", "ID1")

    assert service.view_bookmarks("u1").text == NO_BOOKMARKS_TEXT


def test_view_bookmarks_lists_in_creation_order(service: BookmarksService) -> None:
    service.add_bookmark("u1", "ID2", title="Second")
    service.add_bookmark("u1", "ID1", label_names=["x"])

    view = service.view_bookmarks("u1")

    assert [b.post_id for b in view.bookmarks] == ["ID2", "ID1"]
    lines = view.text.splitlines()
    assert lines[0] == "#### Bookmarks (2)"
    assert lines[1].startswith("- **Second**")
    assert lines[2] == f"- **Untitled** {SITE_URL}/_redirect/pl/ID1 `x`"


def test_view_bookmark_tolerates_missing_labels(
    service: BookmarksService, store: FlakyKVStore
) -> None:
    BookmarkCollection.with_store(store, "u1").add(
        Bookmark(post_id="ID1", label_ids=["ghost"])
    )

    view = service.view_bookmark("u1", "ID1")

    assert view.label_names == []
    assert "**Labels:**" not in view.text


def test_view_bookmark_missing_raises_not_found(service: BookmarksService) -> None:
    service.add_bookmark("u1", "ID1")

    with pytest.raises(NotFoundError, match="Bookmark `ID9` does not exist"):
        service.view_bookmark("u1", "ID9")


def test_delete_bookmark_accepts_permalink(service: BookmarksService) -> None:
    service.add_bookmark("u1", "ID1")
    service.add_bookmark("u1", "ID2")

    removed = service.delete_bookmark("u1", f"{SITE_URL}/_redirect/pl/ID1")

    assert removed.post_id == "ID1"
    assert [b.post_id for b in service.view_bookmarks("u1").bookmarks] == ["ID2"]


def test_delete_missing_bookmark_raises_not_found(service: BookmarksService) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        service.delete_bookmark("u1", "ID2")

    assert str(exc_info.value) == "Bookmark `ID2` does not exist"


def test_service_without_locks_still_works(
    store: FlakyKVStore, clock: FakeClock
) -> None:
    service = BookmarksService(
        store=store, label_repo=LabelRepository(store), locks=None, clock=clock
    )

    service.add_bookmark("u1", "ID1")

    assert [b.post_id for b in service.view_bookmarks("u1").bookmarks] == ["ID1"]


@pytest.mark.parametrize("post_ref", ["", "   ", f"{SITE_URL}/team/pl/"])
def test_add_bookmark_rejects_empty_post_id(
    service: BookmarksService, store: FlakyKVStore, post_ref: str
) -> None:
    with pytest.raises(InvalidPostIDError):
        service.add_bookmark("u1", post_ref)

    assert store.set_calls == []


def test_view_and_delete_reject_empty_post_id(service: BookmarksService) -> None:
    with pytest.raises(InvalidPostIDError):
        service.view_bookmark("u1", f"{SITE_URL}/_redirect/pl/")
    with pytest.raises(InvalidPostIDError):
        service.delete_bookmark("u1", " ")


def test_view_bookmarks_reads_label_document_once(
    service: BookmarksService, store: FlakyKVStore
) -> None:
    service.add_bookmark("u1", "ID1", label_names=["a"])
    service.add_bookmark("u1", "ID2", label_names=["b"])
    service.add_bookmark("u1", "ID3", label_names=["a", "b"])
    store.get_calls.clear()

    view = service.view_bookmarks("u1")

    assert store.get_calls.count("labels_u1") == 1
    assert "`a` `b`" in view.text.splitlines()[3]
