"""
Markup sanitization for bookmark text fields.

Uses bleach with an empty tag allowlist and strip=False, so every tag (including
<script> and tags carrying event handlers) is entity-escaped into inert text instead of
being removed. Ampersands are hidden from bleach behind a marker and put back
afterwards, so query strings and text like "R&D" are stored exactly as submitted and
existing entity references are left alone. The output contains no raw "<" or ">",
which makes the transform idempotent.
"""
import uuid
from collections.abc import Iterable
from typing import Any, TypeVar

import bleach
from pydantic import BaseModel

from schemas.bookmark import BookmarkResponse

SANITIZED_FIELDS = ("title", "description", "url")

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _ampersand_marker(text: str) -> str:
    """
    Return a token that does not occur in text and that bleach passes through as-is.

    The leading underscore keeps "<" followed by the marker from opening a tag.
    """
    while True:
        marker = f"_{uuid.uuid4().hex}_"
        if marker not in text:
            return marker


def sanitize_text(value: Any) -> Any:
    """Escape markup in a string; None and non-string values are returned unchanged."""
    if not isinstance(value, str):
        return value
    if "&" not in value:
        return bleach.clean(value, tags=set(), attributes={}, strip=False)

    # bleach encodes every bare "&" as "&amp;"; only tags should be escaped
    marker = _ampersand_marker(value)
    cleaned = bleach.clean(value.replace("&", marker), tags=set(), attributes={}, strip=False)
    return cleaned.replace(marker, "&")


def sanitize_bookmark(record: Any) -> BookmarkResponse:
    """
    Build a sanitized response from a bookmark record.

    Args:
        record: ORM Bookmark, BookmarkResponse or mapping with id, title, description,
            url and rating. It is not modified.

    Returns:
        A new BookmarkResponse with title, description and url sanitized. id and rating
        are passed through; a null description stays null.
    """
    bookmark = BookmarkResponse.model_validate(record)
    return bookmark.model_copy(
        update={name: sanitize_text(getattr(bookmark, name)) for name in SANITIZED_FIELDS},
    )


def sanitize_bookmarks(records: Iterable[Any]) -> list[BookmarkResponse]:
    """Sanitize each record, preserving order."""
    return [sanitize_bookmark(record) for record in records]


def sanitize_fields(data: SchemaT) -> SchemaT:
    """
    Return a copy of a write payload with its supplied text fields sanitized.

    Only fields that were explicitly set are touched, so the copy of a partial update
    still dumps to the same keys with `exclude_unset=True`.
    """
    updates = {
        name: sanitize_text(getattr(data, name))
        for name in SANITIZED_FIELDS
        if name in data.model_fields_set
    }
    return data.model_copy(update=updates)
