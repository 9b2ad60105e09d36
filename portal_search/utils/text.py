"""Text helpers shared by the upstream adapters."""

from __future__ import annotations

import html
import re
from urllib.parse import quote, urlparse

_HTML_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_html(value: str | None) -> str:
    """Remove tags and decode entities from upstream HTML snippets."""
    if not value:
        return ""
    text = _HTML_TAG_RE.sub("", str(value))
    return html.unescape(text).strip()


def collapse_whitespace(value: str | None) -> str:
    if not value:
        return ""
    return _WHITESPACE_RE.sub(" ", value).strip()


def hostname(url: str) -> str:
    """Hostname of a URL, lowercased; empty string when it cannot be parsed."""
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def display_domain(url: str) -> str:
    """Hostname with a leading ``www.`` removed."""
    host = hostname(url)
    return host[4:] if host.startswith("www.") else host


def favicon_url(domain: str) -> str:
    return f"https://www.google.com/s2/favicons?domain={domain}&sz=32"


def url_quote(value: str) -> str:
    """Percent-encode a query for use in a URL, like encodeURIComponent."""
    return quote(value, safe="-_.!~*'()")
