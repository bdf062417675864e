"""Shared test fixtures."""
from datetime import datetime, timezone

import pytest

from jsonfeeder.sources.base import ContentRecord, SiteMeta


@pytest.fixture
def site():
    return SiteMeta(
        title="Example Blog",
        description="Notes about <em>things</em>",
        url="https://example.com/",
        feed_url="https://example.com/feed.json",
        small_icon_url="https://example.com/icon-64.png",
        icon_url="https://example.com/icon.png",
    )


@pytest.fixture
def record():
    return ContentRecord(
        guid="https://example.com/?p=1",
        permalink="https://example.com/hello-world/",
        title="Hello <b>World</b>",
        published=datetime(2024, 1, 1, tzinfo=timezone.utc),
        modified=datetime(2024, 1, 2, 12, 30, tzinfo=timezone.utc),
        excerpt="<p>A short intro.</p>",
        content="<p>The full <strong>post</strong>.</p>",
        thumbnail_url="https://example.com/hello.jpg",
        author_name="Jane Doe",
        author_url="https://example.com/author/jane/",
        tags=["News", "news", " Python ", ""],
    )
