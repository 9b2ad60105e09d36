"""Related-search templates, news trending words and autocomplete."""

from collections import Counter
from typing import Iterable, List, Optional

from ..models.responses import AutocompleteResponse

TRENDING_SUGGESTIONS = (
    "artificial intelligence",
    "machine learning",
    "cryptocurrency prices",
    "climate change news",
    "space exploration",
    "renewable energy",
    "electric vehicles",
    "quantum computing",
    "blockchain technology",
    "cybersecurity tips",
    "health and wellness",
    "remote work tools",
    "sustainable living",
    "digital marketing",
    "programming tutorials",
)

DEFAULT_AUTOCOMPLETE_LIMIT = 8
MAX_TRENDING_MATCHES = 3
TRENDING_WORD_MIN_LENGTH = 5
TRENDING_COUNT = 6


def related_searches(query: str) -> List[str]:
    return [
        f"{query} meaning",
        f"{query} examples",
        f"what is {query}",
        f"{query} tutorial",
        f"{query} vs",
        f"{query} best",
        f"how to {query}",
        f"{query} 2024",
    ]


def academic_related(query: str) -> List[str]:
    """Related searches for web search with the academic filter."""
    return [
        f"{query} systematic review",
        f"{query} meta-analysis",
        f"{query} recent research",
        f"{query} clinical trials",
    ]


def related_topics(query: str) -> List[str]:
    """Related topics for the academic search page."""
    return [
        f"{query} review",
        f"{query} systematic review",
        f"{query} meta-analysis",
        f"{query} recent advances",
    ]


def trending_topics(titles: Iterable[str]) -> List[str]:
    """
    Most frequent words longer than four letters across headlines, capitalised.

    Ties keep the order in which words were first seen.
    """
    counts = Counter(
        word
        for title in titles
        for word in (title or "").lower().split()
        if len(word) >= TRENDING_WORD_MIN_LENGTH
    )
    # Counter preserves insertion order and most_common sorts stably
    return [word[0].upper() + word[1:] for word, _ in counts.most_common(TRENDING_COUNT)]


def autocomplete(query: Optional[str], limit: Optional[int] = None) -> AutocompleteResponse:
    """
    Template-based query suggestions.

    An empty query yields the fixed trending list (``type="trending"``).
    Otherwise continuation and prefix templates are followed by up to three
    trending entries containing the query, de-duplicated and capped.
    """
    limit = limit if limit and limit > 0 else DEFAULT_AUTOCOMPLETE_LIMIT
    if not query:
        return AutocompleteResponse(suggestions=list(TRENDING_SUGGESTIONS[:limit]), type="trending")

    lowered = query.lower()
    continuations = [
        f"{query} tutorial",
        f"{query} guide",
        f"{query} examples",
        f"{query} vs",
        f"{query} best practices",
        f"{query} how to",
        f"{query} 2024",
        f"{query} free",
        f"{query} online",
        f"{query} near me",
    ]
    prefixes = [
        f"what is {query}",
        f"how to {query}",
        f"best {query}",
        f"{query} meaning",
        f"{query} definition",
        f"{query} price",
        f"{query} reviews",
        f"{query} download",
    ]

    templated = [s for s in continuations + prefixes if lowered in s.lower()][:limit]
    trending = [s for s in TRENDING_SUGGESTIONS if lowered in s.lower()][:MAX_TRENDING_MATCHES]
    suggestions = list(dict.fromkeys(templated + trending))[:limit]

    return AutocompleteResponse(suggestions=suggestions, type="autocomplete", query=query)
