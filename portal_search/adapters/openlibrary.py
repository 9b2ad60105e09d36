"""Open Library book search provider."""

import logging
from typing import List

import httpx

from ..models.results import SearchResult
from ..utils.text import favicon_url
from .base import get_json

logger = logging.getLogger(__name__)

OPEN_LIBRARY_SEARCH_URL = "https://openlibrary.org/search.json"


async def search_open_library(client: httpx.AsyncClient, query: str, limit: int = 8) -> List[SearchResult]:
    data = await get_json(
        client,
        OPEN_LIBRARY_SEARCH_URL,
        source="Open Library",
        params={"q": query, "limit": limit},
    )
    if not isinstance(data, dict):
        return []

    results: List[SearchResult] = []
    try:
        for book in (data.get("docs") or [])[:limit]:
            if not book.get("title") or not book.get("key"):
                continue
            authors = ", ".join(book.get("author_name") or []) or "Unknown author"
            year = book.get("first_publish_year")
            cover = book.get("cover_i")
            results.append(
                SearchResult(
                    title=book["title"],
                    url=f"https://openlibrary.org{book['key']}",
                    description=f"{authors} ({year})" if year else authors,
                    favicon=favicon_url("openlibrary.org"),
                    thumbnail=f"https://covers.openlibrary.org/b/id/{cover}-M.jpg" if cover else None,
                    type="book",
                )
            )
    except Exception as e:
        logger.warning(f"Open Library parse error: {e!r}")
        return []

    logger.info(f"Open Library returned {len(results)} books")
    return results
