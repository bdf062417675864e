"""Scrub untrusted strings into plain text or absolute http(s) URLs."""
import re
from typing import Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

ALLOWED_SCHEMES = ("http", "https")

# Anything left looking like a tag after entities were decoded (e.g. "&lt;b&gt;")
_TAG_RE = re.compile(r"<[^<>]*>")

# Characters permitted in a raw URL; everything else is dropped
_URL_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\U0010ffff]")
_ENCODED_NEWLINE_RE = re.compile(r"%0[aAdD]")


def plain_text(value) -> str:
    """Strip markup and surrounding whitespace from a string.

    Non-string or blank input returns an empty string.
    """
    if not isinstance(value, str) or not value:
        return ""
    value = value.strip()
    if not value:
        return ""
    text = BeautifulSoup(value, "html.parser").get_text()
    # Removing one tag can join brackets into another, e.g. "<<b>b>"
    while True:
        cleaned = _TAG_RE.sub("", text)
        if cleaned == text:
            break
        text = cleaned
    return text.strip()


def url(value) -> Optional[str]:
    """Return a cleaned absolute http/https URL, or None."""
    if not isinstance(value, str) or not value.strip():
        return None

    candidate = value.strip().replace(" ", "%20")
    candidate = _URL_UNSAFE_RE.sub("", candidate)
    # Encoded CR/LF can reappear once an inner one is removed
    while True:
        cleaned = _ENCODED_NEWLINE_RE.sub("", candidate)
        if cleaned == candidate:
            break
        candidate = cleaned
    if not candidate:
        return None

    try:
        parsed = urlparse(candidate)
    except ValueError:
        return None
    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.hostname:
        return None
    return candidate
