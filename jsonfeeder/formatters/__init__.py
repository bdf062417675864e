"""Output formatters."""
from .console import ConsoleFormatter
from .jsonfeed import CONTENT_TYPE, FeedRenderError, JSONFeedFormatter

__all__ = ["CONTENT_TYPE", "ConsoleFormatter", "FeedRenderError", "JSONFeedFormatter"]
