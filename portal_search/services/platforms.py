"""Deep-link results built from the query alone (no upstream calls)."""

import re
from typing import Iterable, List

from ..models.results import SearchResult
from ..utils.text import favicon_url, url_quote
from .intent import Platform

_MAPS_WORDS = re.compile(r"map|location|directions|near me", re.IGNORECASE)
_VIDEO_WORDS = re.compile(r"video|watch|stream", re.IGNORECASE)
_IMAGE_WORDS = re.compile(r"image|photo|picture|pic", re.IGNORECASE)


def _strip_keywords(query: str, keywords: Iterable[str]) -> str:
    pattern = "|".join(re.escape(kw) for kw in keywords)
    return re.sub(pattern, "", query, flags=re.IGNORECASE).strip()


def platform_results(query: str, platforms: Iterable[Platform], categories: Iterable[str]) -> List[SearchResult]:
    """
    Search links for each detected platform, plus map, video and image links
    when those categories were detected.
    """
    categories = set(categories)
    results: List[SearchResult] = []

    for platform in platforms:
        remainder = _strip_keywords(query, platform.keywords)
        url = f"https://{platform.domain}"
        if remainder:
            url += f"/search?q={url_quote(remainder)}"
        results.append(
            SearchResult(
                title=f"{platform.name} - {remainder or 'Home'}",
                url=url,
                description=f'Search "{remainder or query}" on {platform.name}.',
                favicon=favicon_url(platform.domain),
                type="platform",
            )
        )

    if "maps" in categories:
        q = _MAPS_WORDS.sub("", query).strip()
        results.append(
            SearchResult(
                title=f"{q} - Google Maps",
                url=f"https://www.google.com/maps/search/{url_quote(q)}",
                description=f"Find {q} on Google Maps.",
                favicon=favicon_url("google.com"),
                type="map",
            )
        )

    if "video" in categories:
        q = _VIDEO_WORDS.sub("", query).strip()
        results.append(
            SearchResult(
                title=f"{q} - YouTube",
                url=f"https://www.youtube.com/results?search_query={url_quote(q)}",
                description=f"Watch {q} videos on YouTube.",
                favicon=favicon_url("youtube.com"),
                type="video",
            )
        )

    if "images" in categories:
        q = _IMAGE_WORDS.sub("", query).strip()
        results.append(
            SearchResult(
                title=f"{q} Images",
                url=f"https://www.google.com/search?tbm=isch&q={url_quote(q)}",
                description=f"Find {q} images and photos.",
                favicon=favicon_url("google.com"),
                type="image",
            )
        )

    return results


def web_search_links(query: str) -> List[SearchResult]:
    """Google, Reddit, GitHub and Stack Overflow links appended to every web search."""
    q = url_quote(query)
    return [
        SearchResult(
            title=f"{query} - Google",
            url=f"https://www.google.com/search?q={q}",
            description=f'Search Google for "{query}"',
            favicon=favicon_url("google.com"),
            type="search",
        ),
        SearchResult(
            title=f"{query} - Reddit",
            url=f"https://www.reddit.com/search/?q={q}",
            description=f'Discussions about "{query}" on Reddit',
            favicon=favicon_url("reddit.com"),
            type="social",
        ),
        SearchResult(
            title=f"{query} - GitHub",
            url=f"https://github.com/search?q={q}",
            description=f'Code and projects for "{query}"',
            favicon=favicon_url("github.com"),
            type="code",
        ),
        SearchResult(
            title=f"{query} - Stack Overflow",
            url=f"https://stackoverflow.com/search?q={q}",
            description=f'Technical Q&A for "{query}"',
            favicon=favicon_url("stackoverflow.com"),
            type="code",
        ),
    ]


def academic_search_links(query: str) -> List[SearchResult]:
    q = url_quote(query)
    return [
        SearchResult(
            title=f"{query} - Google Scholar",
            url=f"https://scholar.google.com/scholar?q={q}",
            description="Search academic papers on Google Scholar",
            favicon=favicon_url("scholar.google.com"),
            type="search",
        ),
        SearchResult(
            title=f"{query} - Semantic Scholar",
            url=f"https://www.semanticscholar.org/search?q={q}",
            description="AI-powered research tool for scientific literature",
            favicon=favicon_url("semanticscholar.org"),
            type="search",
        ),
        SearchResult(
            title=f"{query} - ResearchGate",
            url=f"https://www.researchgate.net/search/publication?q={q}",
            description="Find publications and connect with researchers",
            favicon=favicon_url("researchgate.net"),
            type="search",
        ),
    ]
