"""JSON Feed data model: Author, Item and Feed.

Every setter sanitizes its input and silently ignores values that do not
survive sanitization, so optional fields are either valid or absent. The two
required fields (item id, feed title) are checked when the object is built.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from jsonfeeder import sanitize
from jsonfeeder.utils import rfc3339, to_utc

logger = logging.getLogger(__name__)

VERSION = "https://jsonfeed.org/version/1"
DESCRIPTION_MAX_LENGTH = 200
ELLIPSIS = "…"


class FeedError(Exception):
    """Base class for feed model errors."""


class InvalidIdError(FeedError, ValueError):
    """An item was created without a usable identifier."""


class InvalidTitleError(FeedError, ValueError):
    """A feed was created without a usable title."""


class FrozenError(FeedError, RuntimeError):
    """A feed, item or author was modified after serialization."""


class _Freezable:
    _frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def _check_mutable(self) -> None:
        if self._frozen:
            raise FrozenError(f"{type(self).__name__} is frozen and can no longer be modified")


class Author(_Freezable):
    """A person or organization credited with a feed or item."""

    def __init__(self, name: Optional[str] = None, url: Optional[str] = None,
                 image_url: Optional[str] = None):
        self._name: Optional[str] = None
        self._url: Optional[str] = None
        self._image_url: Optional[str] = None
        self.name = name
        self.url = url
        self.image_url = image_url

    def __repr__(self) -> str:
        return f"Author(name={self._name!r}, url={self._url!r}, image_url={self._image_url!r})"

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, value) -> None:
        self._check_mutable()
        value = sanitize.plain_text(value)
        if value:
            self._name = value

    @property
    def url(self) -> Optional[str]:
        return self._url

    @url.setter
    def url(self, value) -> None:
        self._check_mutable()
        value = sanitize.url(value)
        if value:
            self._url = value

    @property
    def image_url(self) -> Optional[str]:
        """Avatar image; should be square, e.g. 512x512."""
        return self._image_url

    @image_url.setter
    def image_url(self, value) -> None:
        self._check_mutable()
        value = sanitize.url(value)
        if value:
            self._image_url = value

    def is_empty(self) -> bool:
        return not (self._name or self._url or self._image_url)

    def to_document(self) -> Optional[dict]:
        doc = {}
        if self._name:
            doc["name"] = self._name
        if self._url:
            doc["url"] = self._url
        if self._image_url:
            doc["avatar"] = self._image_url
        return doc or None


def _usable_author(author) -> bool:
    return isinstance(author, Author) and not author.is_empty()


class Item(_Freezable):
    """A single feed entry, identified by its id."""

    def __init__(self, item_id: str):
        if not isinstance(item_id, str) or not item_id.strip():
            raise InvalidIdError(f"Item id must be a non-blank string, got {item_id!r}")
        self._id = item_id.strip()
        self._url: Optional[str] = None
        self._external_url: Optional[str] = None
        self._title: Optional[str] = None
        self._summary: Optional[str] = None
        self._content_html: Optional[str] = None
        self._image: Optional[str] = None
        self._published: Optional[datetime] = None
        self._modified: Optional[datetime] = None
        self._author: Optional[Author] = None
        # lowercased tag -> tag as first seen
        self._tags: Dict[str, str] = {}

    def __repr__(self) -> str:
        return f"Item(id={self._id!r}, title={self._title!r})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def url(self) -> Optional[str]:
        return self._url

    @url.setter
    def url(self, value) -> None:
        self._check_mutable()
        value = sanitize.url(value)
        if value:
            self._url = value

    @property
    def external_url(self) -> Optional[str]:
        """URL of the main subject of the item, typically on another site."""
        return self._external_url

    @external_url.setter
    def external_url(self, value) -> None:
        self._check_mutable()
        value = sanitize.url(value)
        if value:
            self._external_url = value

    @property
    def title(self) -> Optional[str]:
        return self._title

    @title.setter
    def title(self, value) -> None:
        self._check_mutable()
        value = sanitize.plain_text(value)
        if value:
            self._title = value

    @property
    def summary(self) -> Optional[str]:
        return self._summary

    @summary.setter
    def summary(self, value) -> None:
        self._check_mutable()
        value = sanitize.plain_text(value)
        if value:
            self._summary = value

    @property
    def content_html(self) -> Optional[str]:
        """Full HTML content. Stored verbatim: callers pass pre-rendered markup."""
        return self._content_html

    @content_html.setter
    def content_html(self, value) -> None:
        self._check_mutable()
        if isinstance(value, str) and value.strip():
            self._content_html = value

    @property
    def image(self) -> Optional[str]:
        return self._image

    @image.setter
    def image(self, value) -> None:
        self._check_mutable()
        value = sanitize.url(value)
        if value:
            self._image = value

    @property
    def published(self) -> Optional[datetime]:
        return self._published

    @published.setter
    def published(self, value) -> None:
        self._check_mutable()
        value = to_utc(value)
        if value is not None:
            self._published = value

    @property
    def modified(self) -> Optional[datetime]:
        return self._modified

    @modified.setter
    def modified(self, value) -> None:
        self._check_mutable()
        value = to_utc(value)
        if value is not None:
            self._modified = value

    @property
    def author(self) -> Optional[Author]:
        return self._author

    @author.setter
    def author(self, value) -> None:
        self._check_mutable()
        if _usable_author(value):
            self._author = value

    def add_tag(self, tag) -> None:
        """Add a keyword; case-insensitive duplicates keep the first spelling."""
        self._check_mutable()
        if not isinstance(tag, str):
            return
        tag = tag.strip()
        if tag and tag.lower() not in self._tags:
            self._tags[tag.lower()] = tag

    @property
    def tags(self) -> Optional[List[str]]:
        if not self._tags:
            return None
        return list(self._tags.values())

    def freeze(self) -> None:
        super().freeze()
        if self._author is not None:
            self._author.freeze()

    def to_document(self) -> dict:
        doc = {"id": self._id}
        if self._url:
            doc["url"] = self._url
        if self._external_url:
            doc["external_url"] = self._external_url
        if self._title:
            doc["title"] = self._title
        if self._summary:
            doc["summary"] = self._summary
        if self._content_html:
            doc["content_html"] = self._content_html
        if self._image:
            doc["image"] = self._image
        tags = self.tags
        if tags:
            doc["tags"] = tags
        # a modified date means nothing without the original publish date
        if self._published is not None:
            doc["date_published"] = rfc3339(self._published)
            if self._modified is not None:
                doc["date_modified"] = rfc3339(self._modified)
        if self._author is not None:
            author = self._author.to_document()
            if author:
                doc["author"] = author
        return doc


class Feed(_Freezable):
    """A JSON Feed: metadata plus items keyed by id in insertion order."""

    def __init__(self, title: str):
        self._title: Optional[str] = None
        self._comment: Optional[str] = None
        self._description: Optional[str] = None
        self._url: Optional[str] = None
        self._next_page_url: Optional[str] = None
        self._html_url: Optional[str] = None
        self._icon_url: Optional[str] = None
        self._small_icon_url: Optional[str] = None
        self._author: Optional[Author] = None
        self._items: Dict[str, Item] = {}

        self.title = title
        if not self._title:
            raise InvalidTitleError(f"Feed title must contain plain text, got {title!r}")

    def __repr__(self) -> str:
        return f"Feed(title={self._title!r}, items={len(self._items)})"

    def __len__(self) -> int:
        return len(self._items)

    @property
    def title(self) -> Optional[str]:
        return self._title

    @title.setter
    def title(self, value) -> None:
        self._check_mutable()
        value = sanitize.plain_text(value)
        if value:
            self._title = value

    @property
    def comment(self) -> Optional[str]:
        """Free-form note for humans reading the raw feed."""
        return self._comment

    @comment.setter
    def comment(self, value) -> None:
        self._check_mutable()
        value = sanitize.plain_text(value)
        if value:
            self._comment = value

    @property
    def description(self) -> Optional[str]:
        return self._description

    @description.setter
    def description(self, value) -> None:
        self._check_mutable()
        value = sanitize.plain_text(value)
        if len(value) > DESCRIPTION_MAX_LENGTH:
            value = value[:DESCRIPTION_MAX_LENGTH] + ELLIPSIS
        if value:
            self._description = value

    @property
    def url(self) -> Optional[str]:
        """Where this feed itself is published."""
        return self._url

    @url.setter
    def url(self, value) -> None:
        self._check_mutable()
        value = sanitize.url(value)
        if value:
            self._url = value

    @property
    def next_page_url(self) -> Optional[str]:
        return self._next_page_url

    @next_page_url.setter
    def next_page_url(self, value) -> None:
        self._check_mutable()
        value = sanitize.url(value)
        if value:
            self._next_page_url = value

    @property
    def html_url(self) -> Optional[str]:
        """The HTML page the feed describes, usually the site home page."""
        return self._html_url

    @html_url.setter
    def html_url(self, value) -> None:
        self._check_mutable()
        value = sanitize.url(value)
        if value:
            self._html_url = value

    @property
    def icon_url(self) -> Optional[str]:
        return self._icon_url

    @icon_url.setter
    def icon_url(self, value) -> None:
        self._check_mutable()
        value = sanitize.url(value)
        if value:
            self._icon_url = value

    @property
    def small_icon_url(self) -> Optional[str]:
        """Favicon-sized image, square, at least 64px on an edge."""
        return self._small_icon_url

    @small_icon_url.setter
    def small_icon_url(self, value) -> None:
        self._check_mutable()
        value = sanitize.url(value)
        if value:
            self._small_icon_url = value

    @property
    def author(self) -> Optional[Author]:
        return self._author

    @author.setter
    def author(self, value) -> None:
        self._check_mutable()
        if _usable_author(value):
            self._author = value

    @property
    def items(self) -> List[Item]:
        return list(self._items.values())

    def add_item(self, item: Item) -> None:
        """Add an item; an existing item with the same id is replaced in place."""
        self._check_mutable()
        if not isinstance(item, Item):
            raise TypeError(f"Expected Item, got {type(item).__name__}")
        if item.id in self._items:
            logger.debug(f"[Feed] Replacing item {item.id!r}")
        self._items[item.id] = item

    def freeze(self) -> None:
        super().freeze()
        if self._author is not None:
            self._author.freeze()
        for item in self._items.values():
            item.freeze()

    def to_document(self) -> Optional[dict]:
        """Build the JSON Feed dict, or None if the feed has no title.

        The feed and everything in it is frozen afterwards.
        """
        if not self._title:
            return None
        self.freeze()

        doc = {
            "version": VERSION,
            "title": self._title,
        }
        if self._comment:
            doc["user_comment"] = self._comment
        if self._html_url:
            doc["home_page_url"] = self._html_url
        if self._url:
            doc["feed_url"] = self._url
        if self._next_page_url:
            doc["next_url"] = self._next_page_url
        if self._description:
            doc["description"] = self._description
        if self._icon_url:
            doc["icon"] = self._icon_url
        if self._small_icon_url:
            doc["favicon"] = self._small_icon_url
        if self._author is not None:
            author = self._author.to_document()
            if author:
                doc["author"] = author

        items = [item.to_document() for item in self._items.values()]
        if items:
            doc["items"] = items
        return doc
