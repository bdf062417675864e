"""JSON Feed 1 output — https://www.jsonfeed.org/version/1/"""
import json
from typing import Optional

from jsonfeeder.models import Feed, FeedError

FEED_TYPE = "json"
CONTENT_TYPE = "application/json"


class FeedRenderError(FeedError):
    """The feed could not be turned into a JSON Feed document."""


class JSONFeedFormatter:
    """Serialize a Feed as a JSON Feed document."""

    content_type = CONTENT_TYPE

    def __init__(self, indent: Optional[int] = None):
        self.indent = indent

    def format(self, feed: Feed) -> str:
        doc = feed.to_document()
        if not doc:
            raise FeedRenderError("Feed has no title; refusing to emit an invalid document")
        return json.dumps(doc, indent=self.indent, ensure_ascii=False)
