"""Internet Archive advanced-search providers."""

import logging
from typing import Any, List

import httpx

from ..models.media import VideoResult
from ..models.results import SearchResult
from ..utils.formatting import format_count
from ..utils.text import favicon_url
from .base import get_json

logger = logging.getLogger(__name__)

ARCHIVE_SEARCH_URL = "https://archive.org/advancedsearch.php"


def _description(item: dict[str, Any], length: int) -> str:
    # advancedsearch returns a list when an item carries several descriptions
    value = item.get("description")
    if isinstance(value, list):
        value = value[0] if value else ""
    return value[:length] if isinstance(value, str) else ""


async def _advanced_search(client: httpx.AsyncClient, source: str, params: dict[str, Any]) -> List[dict[str, Any]]:
    data = await get_json(client, ARCHIVE_SEARCH_URL, source=source, params={**params, "output": "json"})
    if not isinstance(data, dict):
        return []
    return [doc for doc in (data.get("response") or {}).get("docs") or [] if doc.get("identifier")]


async def search_internet_archive(client: httpx.AsyncClient, query: str, limit: int = 5) -> List[SearchResult]:
    """Items of any media type, as web results."""
    docs = await _advanced_search(
        client,
        "Internet Archive",
        {"q": query, "fl[]": ["identifier", "title", "description", "mediatype"], "rows": limit},
    )
    try:
        results = [
            SearchResult(
                title=doc.get("title") or doc["identifier"],
                url=f"https://archive.org/details/{doc['identifier']}",
                description=_description(doc, 150) or f"{doc.get('mediatype') or 'item'} on Internet Archive",
                favicon=favicon_url("archive.org"),
                type="archive",
            )
            for doc in docs
        ]
    except Exception as e:
        logger.warning(f"Internet Archive parse error: {e!r}")
        return []

    logger.info(f"Internet Archive returned {len(results)} results")
    return results


async def search_archive_videos(client: httpx.AsyncClient, query: str, limit: int = 5) -> List[VideoResult]:
    """Movies matching the query, most downloaded first."""
    docs = await _advanced_search(
        client,
        "Archive.org videos",
        {
            "q": f"{query} mediatype:movies",
            "fl[]": ["identifier", "title", "description", "date", "downloads"],
            "sort[]": "downloads desc",
            "rows": limit,
        },
    )
    try:
        videos = [
            VideoResult(
                title=doc.get("title") or doc["identifier"],
                url=f"https://archive.org/details/{doc['identifier']}",
                thumbnail=f"https://archive.org/services/img/{doc['identifier']}",
                duration="N/A",
                source="Archive.org",
                published_at=doc.get("date") or "Unknown",
                views=f"{format_count(doc['downloads'])} downloads" if doc.get("downloads") else None,
                description=_description(doc, 200),
            )
            for doc in docs
        ]
    except Exception as e:
        logger.warning(f"Archive.org video parse error: {e!r}")
        return []

    logger.info(f"Archive.org returned {len(videos)} videos")
    return videos
