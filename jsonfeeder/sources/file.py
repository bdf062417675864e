"""YAML/JSON file source."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

import yaml

from jsonfeeder.sources.base import ALL_FEATURES, ContentRecord, ContentSource, SiteMeta

logger = logging.getLogger(__name__)

# file key -> SiteMeta field
_SITE_KEYS = {
    "title": "title",
    "description": "description",
    "url": "url",
    "home_page_url": "url",
    "feed_url": "feed_url",
    "next_url": "next_url",
    "favicon": "small_icon_url",
    "small_icon_url": "small_icon_url",
    "icon": "icon_url",
    "icon_url": "icon_url",
    "comment": "comment",
    "excerpt_only": "use_excerpt_only",
    "use_excerpt_only": "use_excerpt_only",
}


def load_document(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML or JSON file with a top-level 'site' mapping.

    Expected format (YAML):
        site:
          title: Example
          url: https://example.com/
        posts:
          - id: https://example.com/?p=1
            url: https://example.com/hello
            title: Hello
            published: 2024-01-01T00:00:00Z
            tags: [news]
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Source file not found: {path}")

    content = p.read_text(encoding="utf-8")

    if p.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(content)
    elif p.suffix == ".json":
        data = json.loads(content)
    else:
        raise ValueError(f"Unsupported source file format: {p.suffix} (use .yaml, .yml, or .json)")

    if not isinstance(data, dict) or not isinstance(data.get("site"), dict):
        raise ValueError("Source file must contain a top-level 'site' mapping")

    posts = data["posts"] = data.get("posts") or []
    if not isinstance(posts, list):
        raise ValueError("'posts' must be a list")
    for i, post in enumerate(posts):
        if not isinstance(post, dict):
            raise ValueError(f"Post #{i+1} must be a mapping")

    logger.info(f"[File] Loaded {len(posts)} posts from {path}")
    return data


def _site_from_dict(data: Dict[str, Any]) -> SiteMeta:
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        attr = _SITE_KEYS.get(str(key).replace("-", "_"))
        if attr is None or value is None:
            continue
        kwargs[attr] = bool(value) if attr == "use_excerpt_only" else str(value)
    author = data.get("author")
    if isinstance(author, dict):
        kwargs["author_name"] = str(author.get("name") or "")
        kwargs["author_url"] = str(author.get("url") or "")
        kwargs["author_avatar"] = str(author.get("avatar") or "")
    kwargs.setdefault("title", "")
    return SiteMeta(**kwargs)


def _record_from_dict(post: Dict[str, Any]) -> ContentRecord:
    author = post.get("author") or {}
    if isinstance(author, str):
        author = {"name": author}
    tags = post.get("tags") or []
    if isinstance(tags, str):
        tags = tags.split(",")
    supports = post.get("supports")
    if isinstance(supports, str):
        supports = [supports]
    return ContentRecord(
        guid=str(post.get("id") or post.get("guid") or ""),
        permalink=str(post.get("url") or post.get("permalink") or ""),
        title=str(post.get("title") or ""),
        published=post.get("published"),
        modified=post.get("modified"),
        excerpt=str(post.get("summary") or post.get("excerpt") or ""),
        content=str(post.get("content_html") or post.get("content") or ""),
        thumbnail_url=str(post.get("image") or post.get("thumbnail") or ""),
        author_name=str(author.get("name") or ""),
        author_url=str(author.get("url") or ""),
        tags=[str(t) for t in tags],
        supports=frozenset(supports) if supports is not None else ALL_FEATURES,
    )


class FileSource(ContentSource):
    """Site metadata and posts described in a local YAML or JSON file."""

    name = "file"

    def __init__(self, path: Union[str, Path]):
        self.path = path
        self._data = load_document(path)

    def site(self) -> SiteMeta:
        return _site_from_dict(self._data["site"])

    def records(self) -> Iterator[ContentRecord]:
        posts: List[Dict[str, Any]] = self._data["posts"]
        for post in posts:
            yield _record_from_dict(post)
