"""Tests for the Author, Item and Feed models."""
from datetime import datetime, timedelta, timezone

import pytest

from jsonfeeder.models import (
    VERSION,
    Author,
    Feed,
    FrozenError,
    InvalidIdError,
    InvalidTitleError,
    Item,
)


class TestAuthor:
    def test_empty_by_default(self):
        author = Author()
        assert author.is_empty()
        assert author.to_document() is None

    def test_blank_fields_stay_empty(self):
        author = Author(name="   ", url="not a url", image_url="")
        assert author.is_empty()
        assert author.to_document() is None

    def test_name_sanitized(self):
        author = Author(name="<b>Jane</b> Doe ")
        assert author.name == "Jane Doe"
        assert not author.is_empty()

    def test_document_maps_image_to_avatar(self):
        author = Author("Jane", "https://jane.example/", "https://jane.example/me.png")
        assert author.to_document() == {
            "name": "Jane",
            "url": "https://jane.example/",
            "avatar": "https://jane.example/me.png",
        }

    def test_url_only(self):
        assert Author(url="https://jane.example/").to_document() == {"url": "https://jane.example/"}

    def test_invalid_assignment_keeps_previous(self):
        author = Author(name="Jane")
        author.name = ""
        author.url = "javascript:alert(1)"
        assert author.name == "Jane"
        assert author.url is None


class TestItem:
    def test_requires_id(self):
        for bad in (None, "", "   ", 42):
            with pytest.raises(InvalidIdError):
                Item(bad)

    def test_invalid_id_is_value_error(self):
        with pytest.raises(ValueError):
            Item("")

    def test_id_trimmed(self):
        assert Item("  abc ").id == "abc"

    def test_minimal_document(self):
        assert Item("1").to_document() == {"id": "1"}

    def test_full_document(self):
        item = Item("https://example.com/?p=1")
        item.url = "https://example.com/hello"
        item.external_url = "https://elsewhere.example/story"
        item.title = "<i>Hello</i>"
        item.summary = "<p>Short</p>"
        item.content_html = "<p>Long <em>body</em></p>"
        item.image = "https://example.com/hello.jpg"
        item.published = datetime(2024, 1, 1, tzinfo=timezone.utc)
        item.modified = datetime(2024, 1, 2, tzinfo=timezone.utc)
        item.author = Author(name="Jane")
        item.add_tag("News")

        assert item.to_document() == {
            "id": "https://example.com/?p=1",
            "url": "https://example.com/hello",
            "external_url": "https://elsewhere.example/story",
            "title": "Hello",
            "summary": "Short",
            "content_html": "<p>Long <em>body</em></p>",
            "image": "https://example.com/hello.jpg",
            "tags": ["News"],
            "date_published": "2024-01-01T00:00:00+00:00",
            "date_modified": "2024-01-02T00:00:00+00:00",
            "author": {"name": "Jane"},
        }

    def test_content_kept_verbatim(self):
        item = Item("1")
        item.content_html = "  <script>x()</script>  "
        assert item.content_html == "  <script>x()</script>  "

    def test_blank_content_ignored(self):
        item = Item("1")
        item.content_html = "   "
        item.content_html = None
        assert "content_html" not in item.to_document()

    def test_invalid_urls_discarded(self):
        item = Item("1")
        item.url = "ftp://example.com"
        item.image = "/relative.png"
        item.external_url = ""
        assert item.to_document() == {"id": "1"}

    def test_tags_case_insensitive(self):
        item = Item("1")
        item.add_tag("Tech")
        item.add_tag("tech")
        item.add_tag("TECH ")
        assert item.tags == ["Tech"]

    def test_tags_keep_insertion_order(self):
        item = Item("1")
        for tag in ("b", "a", " ", "", None, "c", "A"):
            item.add_tag(tag)
        assert item.tags == ["b", "a", "c"]

    def test_no_tags_is_none(self):
        item = Item("1")
        assert item.tags is None
        assert "tags" not in item.to_document()

    def test_published_normalized_to_utc(self):
        item = Item("1")
        item.published = datetime(2024, 1, 1, 3, 0, tzinfo=timezone(timedelta(hours=3)))
        assert item.published == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert item.published.tzinfo == timezone.utc

    def test_published_from_epoch(self):
        item = Item("1")
        item.published = 1704067200
        assert item.to_document()["date_published"] == "2024-01-01T00:00:00+00:00"

    def test_unparseable_date_ignored(self):
        item = Item("1")
        item.published = "whenever"
        assert item.published is None

    def test_modified_without_published_omitted(self):
        item = Item("1")
        item.modified = datetime(2024, 1, 2, tzinfo=timezone.utc)
        doc = item.to_document()
        assert "date_modified" not in doc
        assert "date_published" not in doc

    def test_empty_author_not_attached(self):
        item = Item("1")
        item.author = Author(name="  ")
        assert item.author is None
        assert "author" not in item.to_document()

    def test_non_author_not_attached(self):
        item = Item("1")
        item.author = {"name": "Jane"}
        assert item.author is None


class TestFeed:
    def test_requires_title(self):
        for bad in ("", "   ", "<br/>", None):
            with pytest.raises(InvalidTitleError):
                Feed(bad)

    def test_title_sanitized(self):
        assert Feed("  <b>News</b> ").title == "News"

    def test_blank_title_assignment_keeps_previous(self):
        feed = Feed("News")
        feed.title = " "
        assert feed.title == "News"

    def test_minimal_document(self):
        assert Feed("Example").to_document() == {"version": VERSION, "title": "Example"}

    def test_end_to_end_document(self):
        feed = Feed("Example")
        item = Item("1")
        item.title = "Hello"
        item.published = datetime(2024, 1, 1, tzinfo=timezone.utc)
        feed.add_item(item)
        assert feed.to_document() == {
            "version": "https://jsonfeed.org/version/1",
            "title": "Example",
            "items": [{"id": "1", "title": "Hello", "date_published": "2024-01-01T00:00:00+00:00"}],
        }

    def test_field_mapping(self):
        feed = Feed("Example")
        feed.comment = "For humans"
        feed.html_url = "https://example.com/"
        feed.url = "https://example.com/feed.json"
        feed.next_page_url = "https://example.com/feed.json?page=2"
        feed.description = "About things"
        feed.icon_url = "https://example.com/icon.png"
        feed.small_icon_url = "https://example.com/favicon.png"
        feed.author = Author(name="Example Inc.")
        assert feed.to_document() == {
            "version": VERSION,
            "title": "Example",
            "user_comment": "For humans",
            "home_page_url": "https://example.com/",
            "feed_url": "https://example.com/feed.json",
            "next_url": "https://example.com/feed.json?page=2",
            "description": "About things",
            "icon": "https://example.com/icon.png",
            "favicon": "https://example.com/favicon.png",
            "author": {"name": "Example Inc."},
        }

    def test_description_truncated(self):
        feed = Feed("Example")
        feed.description = "x" * 250
        assert feed.description == "x" * 200 + "…"

    def test_description_exactly_limit_untouched(self):
        feed = Feed("Example")
        feed.description = "y" * 200
        assert feed.description == "y" * 200

    def test_description_truncated_after_sanitizing(self):
        feed = Feed("Example")
        feed.description = "<p>" + "z" * 199 + "</p>"
        assert feed.description == "z" * 199

    def test_description_counts_characters(self):
        feed = Feed("Example")
        feed.description = "é" * 201
        assert feed.description == "é" * 200 + "…"

    def test_blank_description_ignored(self):
        feed = Feed("Example")
        feed.description = "<p> </p>"
        assert feed.description is None

    def test_empty_author_not_attached(self):
        feed = Feed("Example")
        feed.author = Author()
        assert feed.author is None
        assert "author" not in feed.to_document()

    def test_author_stored(self):
        feed = Feed("Example")
        author = Author(name="Jane")
        feed.author = author
        assert feed.author is author

    def test_same_id_overwrites_in_place(self):
        feed = Feed("Example")
        first = Item("42")
        first.title = "First"
        other = Item("7")
        second = Item("42")
        second.title = "Second"
        feed.add_item(first)
        feed.add_item(other)
        feed.add_item(second)

        assert len(feed) == 2
        assert feed.items == [second, other]
        assert [i["id"] for i in feed.to_document()["items"]] == ["42", "7"]
        assert feed.to_document()["items"][0]["title"] == "Second"

    def test_add_non_item_rejected(self):
        with pytest.raises(TypeError):
            Feed("Example").add_item({"id": "1"})


class TestFreezing:
    def test_serializing_freezes_feed(self):
        feed = Feed("Example")
        feed.to_document()
        assert feed.frozen
        with pytest.raises(FrozenError):
            feed.title = "Other"
        with pytest.raises(FrozenError):
            feed.add_item(Item("1"))

    def test_serializing_freezes_items_and_authors(self):
        feed = Feed("Example")
        item = Item("1")
        item.author = Author(name="Jane")
        feed.add_item(item)
        feed.author = Author(name="Example Inc.")
        feed.to_document()
        with pytest.raises(FrozenError):
            item.title = "Late"
        with pytest.raises(FrozenError):
            item.add_tag("late")
        with pytest.raises(FrozenError):
            item.author.name = "Someone"
        with pytest.raises(FrozenError):
            feed.author.url = "https://example.com/"

    def test_serializing_twice_is_stable(self):
        feed = Feed("Example")
        feed.add_item(Item("1"))
        assert feed.to_document() == feed.to_document()
