"""Content sources a feed can be built from."""
from .base import ContentRecord, ContentSource, SiteMeta, SourceError, StaticSource
from .file import FileSource
from .rss import RSSSource

__all__ = ["ContentRecord", "ContentSource", "SiteMeta", "SourceError", "StaticSource", "FileSource", "RSSSource"]
