from __future__ import annotations

import pytest

from bookmark_service.app.models.bookmark import Bookmark
from bookmark_service.app.services.formatter import (
    NO_BOOKMARKS_TEXT,
    format_bookmark_detailed,
    format_bookmarks_list,
)
from bookmark_service.app.services.links import build_permalink, get_post_id_from_link


@pytest.mark.parametrize(
    ("ref", "expected"),
    [
        ("abc123", "abc123"),
        ("  abc123 ", "abc123"),
        ("https://chat.example.com/team/pl/abc123", "abc123"),
        ("https://chat.example.com/_redirect/pl/abc123", "abc123"),
        ("https://chat.example.com/team/pl/abc123/?x=1#frag", "abc123"),
    ],
)
def test_get_post_id_from_link(ref: str, expected: str) -> None:
    assert get_post_id_from_link(ref) == expected


def test_build_permalink() -> None:
    assert build_permalink("ID1") == "ID1"
    assert (
        build_permalink("ID1", "https://chat.example.com/")
        == "https://chat.example.com/_redirect/pl/ID1"
    )


def test_format_bookmark_detailed() -> None:
    bmark = Bookmark(
        post_id="ID1",
        title="Title1",
        create_at=1_700_000_000_000,
        modified_at=1_700_000_001_000,
        label_ids=["L1"],
    )

    text = format_bookmark_detailed(bmark, ["work"])

    assert text.splitlines() == [
        "#### Title1",
        "**Post:** ID1",
        "**Labels:** `work`",
        "**Created:** 2023-11-14T22:13:20+00:00",
        "**Updated:** 2023-11-14T22:13:21+00:00",
    ]


def test_format_bookmark_detailed_untitled_without_labels() -> None:
    text = format_bookmark_detailed(Bookmark(post_id="ID1"), [])

    assert text.splitlines()[0] == "#### Untitled"
    assert "**Labels:**" not in text


def test_format_bookmarks_list_empty() -> None:
    assert format_bookmarks_list([], {}) == NO_BOOKMARKS_TEXT
