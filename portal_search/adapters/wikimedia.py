"""Wikimedia Commons providers: file search for web mode, image search for image mode."""

import logging
from typing import Any, List

import httpx

from ..models.media import ImageResult
from ..models.results import SearchResult
from ..utils.text import favicon_url, strip_html, url_quote
from .base import get_json
from .wikipedia import MIN_IMAGE_SIZE, image_pages

logger = logging.getLogger(__name__)

COMMONS_API_URL = "https://commons.wikimedia.org/w/api.php"
FILE_NAMESPACE = 6


async def search_commons(client: httpx.AsyncClient, query: str, limit: int = 5) -> List[SearchResult]:
    """Media files matching the query, as web results."""
    data = await get_json(
        client,
        COMMONS_API_URL,
        source="Wikimedia Commons",
        params={
            "action": "query",
            "list": "search",
            "srsearch": query,
            "srnamespace": FILE_NAMESPACE,
            "format": "json",
            "srlimit": limit,
            "origin": "*",
        },
    )
    if not isinstance(data, dict):
        return []

    try:
        results = [
            SearchResult(
                title=item["title"].replace("File:", ""),
                url=f"https://commons.wikimedia.org/wiki/{url_quote(item['title'])}",
                description=strip_html(item.get("snippet")) or "Free media file from Wikimedia Commons",
                favicon=favicon_url("commons.wikimedia.org"),
                type="media",
            )
            for item in (data.get("query") or {}).get("search") or []
            if item.get("title")
        ]
    except Exception as e:
        logger.warning(f"Wikimedia Commons parse error: {e!r}")
        return []

    logger.info(f"Wikimedia Commons returned {len(results)} results")
    return results


def _meta(metadata: dict[str, Any], key: str) -> str:
    return strip_html((metadata.get(key) or {}).get("value"))


async def search_commons_images(client: httpx.AsyncClient, query: str, limit: int = 10) -> List[ImageResult]:
    """Bitmap images matching the query, at least 200x200 px."""
    data = await get_json(
        client,
        COMMONS_API_URL,
        source="Wikimedia Commons images",
        params={
            "action": "query",
            "generator": "search",
            "gsrsearch": f"{query} filetype:bitmap",
            "gsrlimit": limit,
            "gsrnamespace": FILE_NAMESPACE,
            "prop": "imageinfo",
            "iiprop": "url|size|extmetadata",
            "iiurlwidth": 800,
            "format": "json",
            "origin": "*",
        },
    )
    if not isinstance(data, dict):
        return []

    images: List[ImageResult] = []
    try:
        for page in image_pages(data):
            info = (page.get("imageinfo") or [None])[0]
            if not info or not info.get("url"):
                continue
            width, height = int(info.get("width") or 0), int(info.get("height") or 0)
            if width < MIN_IMAGE_SIZE or height < MIN_IMAGE_SIZE:
                continue
            name = (page.get("title") or "").replace("File:", "")
            metadata = info.get("extmetadata") or {}
            images.append(
                ImageResult(
                    id=f"wikimedia-{page.get('pageid')}",
                    url=info["url"],
                    thumbnail=info.get("thumburl") or info["url"],
                    title=_meta(metadata, "ObjectName") or name,
                    source=f"https://commons.wikimedia.org/wiki/File:{url_quote(name)}",
                    domain="commons.wikimedia.org",
                    width=width,
                    height=height,
                    author=_meta(metadata, "Artist") or "Wikimedia Commons",
                    license=_meta(metadata, "LicenseShortName") or "CC",
                )
            )
    except Exception as e:
        logger.warning(f"Wikimedia Commons images parse error: {e!r}")
        return []

    logger.info(f"Wikimedia Commons returned {len(images)} images")
    return images
