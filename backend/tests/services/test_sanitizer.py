"""Tests for bookmark markup sanitization."""
import pytest

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from services.sanitizer import (
    sanitize_bookmark,
    sanitize_bookmarks,
    sanitize_fields,
    sanitize_text,
)

MALICIOUS_RECORD = {
    "id": 4,
    "title": "<img src='https://url.to.file.which/does-not.exist' onerror='alert(document.cookie);'>",
    "rating": 1,
    "description": "<script>alert('xss');</script>",
    "url": "https://geekprank.com/fake-virus/<script>alert('xss');</script>",
}


class TestSanitizeText:
    """Tests for sanitize_text."""

    def test_script_tags_are_escaped(self) -> None:
        assert sanitize_text("<script>alert(1)</script>") == "&lt;script&gt;alert(1)&lt;/script&gt;"

    def test_event_handler_markup_is_escaped(self) -> None:
        result = sanitize_text(MALICIOUS_RECORD["title"])
        assert "<img" not in result
        assert "&lt;img" in result

    @pytest.mark.parametrize("value", [
        "Just a plain title",
        "Python: tips, tricks & more!",
        "https://example.com/path?q=1",
        "https://x.com/s?q=a&page=2",
        "<a href=\"/s?q=a&page=2\">link</a>",
        "",
    ])
    def test_is_idempotent(self, value: str) -> None:
        once = sanitize_text(value)
        assert sanitize_text(once) == once

    @pytest.mark.parametrize("value", [
        "Just a plain title",
        "Python: tips, tricks, and more!",
        "https://example.com/path?q=1#section",
    ])
    def test_plain_text_is_unchanged(self, value: str) -> None:
        assert sanitize_text(value) == value

    @pytest.mark.parametrize("value", [
        "Tom & Jerry",
        "R&D",
        "https://x.com/s?q=a&page=2",
        "Fish &amp; Chips &lt;3",
    ])
    def test_ampersands_and_entities_are_unchanged(self, value: str) -> None:
        assert sanitize_text(value) == value

    def test_ampersand_next_to_markup(self) -> None:
        result = sanitize_text("<b>R&D</b> & <script>x</script>")
        assert result == "&lt;b&gt;R&D&lt;/b&gt; & &lt;script&gt;x&lt;/script&gt;"
        assert sanitize_text(result) == result

    @pytest.mark.parametrize("value", [None, 3, 4.5])
    def test_non_strings_pass_through(self, value: object) -> None:
        assert sanitize_text(value) == value


class TestSanitizeBookmark:
    """Tests for sanitize_bookmark and sanitize_bookmarks."""

    def test_sanitizes_text_fields_from_mapping(self) -> None:
        result = sanitize_bookmark(MALICIOUS_RECORD)
        assert isinstance(result, BookmarkResponse)
        assert result.id == 4
        assert result.rating == 1
        for field in ("title", "description", "url"):
            assert "<script" not in getattr(result, field)
            assert "<img" not in getattr(result, field)

    def test_does_not_mutate_input(self) -> None:
        record = dict(MALICIOUS_RECORD)
        sanitize_bookmark(record)
        assert record == MALICIOUS_RECORD

    def test_sanitizes_orm_row_without_mutating_it(self) -> None:
        row = Bookmark(id=7, title="<b>Bold</b>", url="http://a.com", description=None, rating=5)
        result = sanitize_bookmark(row)
        assert result.title == "&lt;b&gt;Bold&lt;/b&gt;"
        assert result.description is None
        assert row.title == "<b>Bold</b>"

    def test_is_idempotent(self) -> None:
        once = sanitize_bookmark(MALICIOUS_RECORD)
        assert sanitize_bookmark(once) == once

    def test_null_description_is_kept(self) -> None:
        record = {"id": 1, "title": "t", "url": "http://a.com", "description": None, "rating": 2}
        assert sanitize_bookmark(record).description is None

    def test_sanitize_bookmarks_preserves_order(self) -> None:
        records = [
            {"id": i, "title": f"<i>{i}</i>", "url": "http://a.com", "rating": 3}
            for i in (3, 1, 2)
        ]
        result = sanitize_bookmarks(records)
        assert [b.id for b in result] == [3, 1, 2]
        assert result[0].title == "&lt;i&gt;3&lt;/i&gt;"

    def test_sanitize_bookmarks_empty(self) -> None:
        assert sanitize_bookmarks([]) == []


class TestSanitizeFields:
    """Tests for sanitize_fields on write payloads."""

    def test_create_payload(self) -> None:
        data = BookmarkCreate(
            title="<script>alert(1)</script>",
            url="http://a.com/<script>",
            description=None,
            rating=3,
        )
        result = sanitize_fields(data)
        assert result is not data
        assert result.title == "&lt;script&gt;alert(1)&lt;/script&gt;"
        assert "<script>" not in result.url
        assert result.description is None
        assert result.rating == 3
        assert data.title == "<script>alert(1)</script>"

    def test_update_payload_keeps_unset_fields_unset(self) -> None:
        data = BookmarkUpdate(title="<u>x</u>")
        result = sanitize_fields(data)
        assert result.model_dump(exclude_unset=True) == {"title": "&lt;u&gt;x&lt;/u&gt;"}
