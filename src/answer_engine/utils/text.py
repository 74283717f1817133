"""
Text normalization helpers shared by the source adapters.

Provider payloads carry highlighted search snippets, HTML excerpts and
encoded entities; everything is reduced to plain, bounded text here.
"""

import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup

_WHITESPACE_RE = re.compile(r"\s+")
_MARKUP_HINT_RE = re.compile(r"[<&]")


def strip_markup(text: str | None) -> str:
    """
    Convert an HTML fragment to plain text.

    Tags are removed, entities decoded and whitespace runs collapsed.

    Args:
        text: HTML fragment or plain text (None is treated as empty)

    Returns:
        Plain text
    """
    if not text:
        return ""

    if _MARKUP_HINT_RE.search(text):
        text = BeautifulSoup(text, "html.parser").get_text()

    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate(text: str, max_length: int) -> str:
    """Cut text to at most max_length characters."""
    return text[:max_length]


def clean_text(text: str | None, max_length: int) -> str:
    """Strip markup, then truncate."""
    return truncate(strip_markup(text), max_length)


def extract_domain(url: str) -> str:
    """
    Hostname of a URL with a leading "www." removed.

    >>> extract_domain("https://www.example.com/path")
    'example.com'

    Returns an empty string for URLs without a host.
    """
    hostname = urlparse(url).hostname or ""
    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    return hostname


def initial_glyph(text: str, default: str) -> str:
    """First character of text upper-cased, or default for empty text."""
    return text[:1].upper() or default
