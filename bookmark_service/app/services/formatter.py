from __future__ import annotations

from common.types.datetime import format_millis

from .links import build_permalink
from ..models.bookmark import Bookmark


UNTITLED = "Untitled"
NO_BOOKMARKS_TEXT = "You do not have any saved bookmarks"


def _title_of(bmark: Bookmark) -> str:
    if bmark.has_user_title():
        return bmark.get_title()
    return UNTITLED


def _labels_text(label_names: list[str]) -> str:
    return " ".join(f"`{name}`" for name in label_names)


def format_bookmark_detailed(
    bmark: Bookmark, label_names: list[str], site_url: str = ""
) -> str:
    """북마크 하나를 사람이 읽을 수 있는 여러 줄 텍스트로 만든다."""

    lines = [
        f"#### {_title_of(bmark)}",
        f"**Post:** {build_permalink(bmark.post_id, site_url)}",
    ]
    if label_names:
        lines.append(f"**Labels:** {_labels_text(label_names)}")
    lines.append(f"**Created:** {format_millis(bmark.create_at)}")
    lines.append(f"**Updated:** {format_millis(bmark.modified_at)}")
    return "\n".join(lines)


def format_bookmarks_list(
    bookmarks: list[Bookmark],
    label_names_by_post: dict[str, list[str]],
    site_url: str = "",
) -> str:
    """북마크 목록을 한 줄씩 나열한 텍스트로 만든다."""

    if not bookmarks:
        return NO_BOOKMARKS_TEXT

    lines = [f"#### Bookmarks ({len(bookmarks)})"]
    for bmark in bookmarks:
        line = f"- **{_title_of(bmark)}** {build_permalink(bmark.post_id, site_url)}"
        names = label_names_by_post.get(bmark.post_id) or []
        if names:
            line = f"{line} {_labels_text(names)}"
        lines.append(line)
    return "\n".join(lines)


def sort_for_display(bookmarks: list[Bookmark]) -> list[Bookmark]:
    """생성 시각, post_id 순으로 정렬한다."""
    return sorted(bookmarks, key=lambda b: (b.create_at, b.post_id))
