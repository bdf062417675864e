"""Content source interface and the records it yields."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence
import logging
import random
import time

import requests

logger = logging.getLogger(__name__)

# Capabilities a record's post type may support
SUPPORTS_TITLE = "title"
SUPPORTS_EXCERPT = "excerpt"
SUPPORTS_THUMBNAIL = "thumbnail"
SUPPORTS_AUTHOR = "author"
ALL_FEATURES = frozenset({SUPPORTS_TITLE, SUPPORTS_EXCERPT, SUPPORTS_THUMBNAIL, SUPPORTS_AUTHOR})


def _build_headers():
    from jsonfeeder import __version__
    return {
        "User-Agent": f"jsonfeeder/{__version__} (JSON Feed builder)",
        "Accept": "application/rss+xml, application/atom+xml, application/xml;q=0.9, */*;q=0.8",
    }


class SourceError(Exception):
    """A content source could not be read."""


@dataclass
class SiteMeta:
    """Site-wide metadata used for the feed's top-level fields."""
    title: str
    description: str = ""
    url: str = ""               # site home page
    feed_url: str = ""          # where the generated feed will live
    next_url: str = ""
    small_icon_url: str = ""
    icon_url: str = ""
    comment: str = ""
    author_name: str = ""
    author_url: str = ""
    author_avatar: str = ""
    use_excerpt_only: bool = False  # publish summaries instead of full content


@dataclass
class ContentRecord:
    """One post as read from a content source.

    Timestamps may be datetimes, epoch seconds, or date strings.
    """
    guid: str = ""
    permalink: str = ""
    title: str = ""
    published: object = None
    modified: object = None
    excerpt: str = ""
    content: str = ""
    thumbnail_url: str = ""
    author_name: str = ""
    author_url: str = ""
    tags: List[str] = field(default_factory=list)
    supports: frozenset = ALL_FEATURES

    @property
    def record_id(self) -> str:
        """Unique id for the record: its guid, else its permalink."""
        for candidate in (self.guid, self.permalink):
            if isinstance(candidate, str) and candidate.strip():
                return candidate.strip()
        return ""

    def supports_feature(self, feature: str) -> bool:
        return feature in self.supports


class ContentSource(ABC):
    """Abstract base for anything a feed can be built from."""

    name: str = "unknown"

    @abstractmethod
    def site(self) -> SiteMeta:
        """Return the site metadata."""
        ...

    @abstractmethod
    def records(self) -> Iterable[ContentRecord]:
        """Yield the posts to include, in feed order."""
        ...


class StaticSource(ContentSource):
    """In-memory source over an already-built list of records."""

    name = "static"

    def __init__(self, site: SiteMeta, records: Sequence[ContentRecord] = ()):
        self._site = site
        self._records = list(records)

    def site(self) -> SiteMeta:
        return self._site

    def records(self) -> Iterator[ContentRecord]:
        return iter(self._records)


class HTTPSource(ContentSource):
    """Base for sources fetched over HTTP, with retries and backoff."""

    timeout: int = 15
    max_retries: int = 2
    retry_backoff: float = 1.0
    retry_jitter: float = 0.5  # random jitter factor (0-1) added to backoff

    def __init__(self, timeout: Optional[int] = None, max_retries: Optional[int] = None):
        if timeout is not None:
            self.timeout = timeout
        if max_retries is not None:
            self.max_retries = max_retries
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(_build_headers())
        return self._session

    def fetch_url(self, url: str) -> bytes:
        """Fetch the raw response body, retrying transient failures.

        Raises SourceError once all attempts have failed.
        """
        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries + 1):
            try:
                resp = self.session.get(url, timeout=self.timeout)
                resp.raise_for_status()
                return resp.content
            except requests.RequestException as e:
                last_error = e
                if attempt < self.max_retries:
                    base_wait = self.retry_backoff * (2 ** attempt)
                    wait = base_wait + random.uniform(0, base_wait * self.retry_jitter)
                    logger.info(f"[{self.name}] Retry {attempt+1}/{self.max_retries} for {url} in {wait:.1f}s")
                    time.sleep(wait)
                else:
                    logger.warning(f"[{self.name}] Failed to fetch {url} after {self.max_retries+1} attempts: {e}")
        raise SourceError(f"Could not fetch {url}: {last_error}")
