"""
Platform-intent detection.

Matches a query against two fixed tables: named platforms (grouped by
category) and generic intent keywords. Matching is a case-insensitive
substring test, so short keywords like ``ig`` or ``yt`` also fire inside
longer words.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Tuple


@dataclass(frozen=True)
class Platform:
    name: str
    domain: str
    keywords: Tuple[str, ...]


@dataclass(frozen=True)
class IntentResult:
    platforms: Tuple[Platform, ...] = ()
    categories: Tuple[str, ...] = ()


PLATFORMS: Mapping[str, Tuple[Platform, ...]] = MappingProxyType(
    {
        "social": (
            Platform("Instagram", "instagram.com", ("instagram", "insta", "ig")),
            Platform("Facebook", "facebook.com", ("facebook", "fb")),
            Platform("Twitter/X", "twitter.com", ("twitter", "x.com", "tweet")),
            Platform("TikTok", "tiktok.com", ("tiktok", "tik tok")),
            Platform("LinkedIn", "linkedin.com", ("linkedin",)),
            Platform("Pinterest", "pinterest.com", ("pinterest",)),
            Platform("Reddit", "reddit.com", ("reddit",)),
        ),
        "messaging": (
            Platform("Telegram", "telegram.org", ("telegram", "tg")),
            Platform("WhatsApp", "whatsapp.com", ("whatsapp",)),
            Platform("Discord", "discord.com", ("discord",)),
        ),
        "video": (
            Platform("YouTube", "youtube.com", ("youtube", "yt")),
            Platform("Twitch", "twitch.tv", ("twitch",)),
            Platform("Vimeo", "vimeo.com", ("vimeo",)),
        ),
        "maps": (
            Platform("Google Maps", "google.com/maps", ("google maps", "maps", "location", "directions")),
            Platform("OpenStreetMap", "openstreetmap.org", ("openstreetmap", "osm")),
        ),
        "shopping": (
            Platform("Amazon", "amazon.com", ("amazon",)),
            Platform("eBay", "ebay.com", ("ebay",)),
        ),
        "news": (
            Platform("BBC", "bbc.com", ("bbc",)),
            Platform("CNN", "cnn.com", ("cnn",)),
            Platform("Reuters", "reuters.com", ("reuters",)),
        ),
        "books": (
            Platform("Open Library", "openlibrary.org", ("book", "books", "read", "author", "novel")),
            Platform("Goodreads", "goodreads.com", ("goodreads",)),
        ),
        "academic": (
            Platform("arXiv", "arxiv.org", ("arxiv", "paper", "research", "academic", "scientific")),
            Platform("PubMed", "pubmed.ncbi.nlm.nih.gov", ("pubmed", "medical", "health")),
        ),
    }
)

INTENT_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "video": ("video", "watch", "stream", "clip"),
        "maps": ("map", "location", "address", "directions", "near me"),
        "images": ("image", "photo", "picture", "pic"),
        "shopping": ("buy", "price", "shop", "purchase"),
        "news": ("news", "latest", "breaking"),
        "books": ("book", "author", "novel", "read", "literature"),
        "academic": ("research", "paper", "study", "scientific", "academic"),
    }
)


def detect(query: str) -> IntentResult:
    """
    Detect platforms and intent categories mentioned in a query.

    Platforms are returned in table order; categories are de-duplicated and
    ordered by first detection (platform categories, then intent keywords).
    """
    lowered = (query or "").lower()
    platforms: List[Platform] = []
    categories: List[str] = []

    for category, entries in PLATFORMS.items():
        for platform in entries:
            if any(kw in lowered for kw in platform.keywords):
                platforms.append(platform)
                if category not in categories:
                    categories.append(category)

    for intent, keywords in INTENT_KEYWORDS.items():
        if intent not in categories and any(kw in lowered for kw in keywords):
            categories.append(intent)

    return IntentResult(platforms=tuple(platforms), categories=tuple(categories))
