"""Assemble a Feed from a content source."""
import logging
from typing import Callable, Iterable, Optional, Sequence

from jsonfeeder.models import Author, Feed, InvalidIdError, Item
from jsonfeeder.sources.base import (
    SUPPORTS_AUTHOR,
    SUPPORTS_EXCERPT,
    SUPPORTS_THUMBNAIL,
    SUPPORTS_TITLE,
    ContentRecord,
    ContentSource,
    SiteMeta,
)

logger = logging.getLogger(__name__)

ItemFilter = Callable[[Item], Optional[Item]]
AuthorFilter = Callable[[Author], Optional[Author]]


class FeedBuilder:
    """Turns site metadata and content records into a Feed.

    item_filters and author_filters are applied, in order, to every built
    Item/Author before it is returned. A filter may modify its argument or
    return a replacement; returning anything but an Item/Author drops it.
    """

    def __init__(self, item_filters: Sequence[ItemFilter] = (),
                 author_filters: Sequence[AuthorFilter] = ()):
        self.item_filters = list(item_filters)
        self.author_filters = list(author_filters)

    def build_from_source(self, source: ContentSource) -> Feed:
        return self.build_feed(source.site(), source.records())

    def build_feed(self, site: SiteMeta, records: Iterable[ContentRecord]) -> Feed:
        """Build a feed. Raises InvalidTitleError if the site has no title."""
        feed = Feed(site.title)
        feed.comment = site.comment
        feed.description = site.description
        feed.html_url = site.url
        feed.url = site.feed_url
        feed.next_page_url = site.next_url
        feed.author = Author(site.author_name, site.author_url, site.author_avatar)

        # sites without a usable small icon get no full icon either
        feed.small_icon_url = site.small_icon_url
        if feed.small_icon_url:
            feed.icon_url = site.icon_url

        skipped = 0
        for record in records:
            item = self.build_item(record, use_excerpt_only=site.use_excerpt_only)
            if item is None:
                skipped += 1
                continue
            feed.add_item(item)

        logger.info(f"[Builder] {feed.title!r}: {len(feed)} items, {skipped} skipped")
        return feed

    def build_item(self, record: ContentRecord, use_excerpt_only: bool = False) -> Optional[Item]:
        """Build one Item, or None if the record has no usable id."""
        try:
            item = Item(record.record_id)
        except InvalidIdError:
            logger.warning(f"[Builder] Skipping record without guid or permalink: {record.title!r}")
            return None

        if record.supports_feature(SUPPORTS_TITLE):
            item.title = record.title

        item.url = record.permalink

        item.published = record.published
        # last modified only means something if the publish date is known
        if item.published is not None:
            item.modified = record.modified

        if record.supports_feature(SUPPORTS_EXCERPT):
            item.summary = record.excerpt

        if not use_excerpt_only:
            item.content_html = record.content

        if record.supports_feature(SUPPORTS_THUMBNAIL) and record.thumbnail_url:
            item.image = record.thumbnail_url

        if record.supports_feature(SUPPORTS_AUTHOR):
            author = self.build_author(record)
            if author is not None:
                item.author = author

        for tag in record.tags or ():
            item.add_tag(tag)

        for item_filter in self.item_filters:
            item = item_filter(item)
            if not isinstance(item, Item):
                logger.debug(f"[Builder] Record {record.record_id!r} dropped by {item_filter!r}")
                return None
        return item

    def build_author(self, record: ContentRecord) -> Optional[Author]:
        """Build the record's author, or None if nothing is known about them."""
        author = Author(name=record.author_name, url=record.author_url)

        for author_filter in self.author_filters:
            author = author_filter(author)
            if not isinstance(author, Author):
                return None

        if author.is_empty():
            return None
        return author
