from __future__ import annotations


NOT_FOUND_MESSAGE = "Bookmark `{post_id}` does not exist"


class BookmarkServiceError(Exception):
    """Base exception for all bookmark-service errors."""


class NotFoundError(BookmarkServiceError):
    """The requested PostID is absent from the user's collection."""

    def __init__(self, post_id: str) -> None:
        super().__init__(NOT_FOUND_MESSAGE.format(post_id=post_id))
        self.post_id = post_id


class StorageError(BookmarkServiceError):
    """The underlying key-value store failed on read or write."""


class SerializationError(BookmarkServiceError):
    """Stored bytes could not be decoded, or a collection could not be encoded."""


class InvalidPostIDError(BookmarkServiceError, ValueError):
    """The given post reference does not resolve to a non-empty PostID."""

    def __init__(self, post_ref: str) -> None:
        super().__init__(f"`{post_ref}` is not a valid post ID or permalink")
        self.post_ref = post_ref
