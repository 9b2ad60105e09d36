"""Wikipedia providers: full-text search, page summary and page images."""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

import httpx

from ..models.media import ImageResult
from ..models.results import KnowledgePanel, SearchResult
from ..utils.text import favicon_url, strip_html, url_quote
from .base import get_json

logger = logging.getLogger(__name__)

_LANG_RE = re.compile(r"^[a-z]{2,3}(-[a-z]+)?$")

MIN_IMAGE_SIZE = 200


def wiki_lang(lang: Optional[str]) -> str:
    """Wikipedia subdomain for a language code; falls back to English."""
    if lang and _LANG_RE.match(lang.lower()):
        return lang.lower()
    return "en"


def _api_url(lang: str) -> str:
    return f"https://{lang}.wikipedia.org/w/api.php"


def page_url(title: str, lang: str = "en") -> str:
    return f"https://{lang}.wikipedia.org/wiki/{url_quote(title.replace(' ', '_'))}"


async def search_wikipedia(
    client: httpx.AsyncClient, query: str, limit: int = 8, lang: str = "en"
) -> List[SearchResult]:
    """Full-text article search (``list=search``)."""
    lang = wiki_lang(lang)
    data = await get_json(
        client,
        _api_url(lang),
        source="Wikipedia",
        params={
            "action": "query",
            "list": "search",
            "srsearch": query,
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
                title=item["title"],
                url=page_url(item["title"], lang),
                description=strip_html(item.get("snippet")),
                favicon=favicon_url("wikipedia.org"),
                type="wikipedia",
            )
            for item in (data.get("query") or {}).get("search") or []
            if item.get("title")
        ]
    except Exception as e:
        logger.warning(f"Wikipedia parse error: {e!r}")
        return []

    logger.info(f"Wikipedia returned {len(results)} results")
    return results


async def get_wikipedia_summary(
    client: httpx.AsyncClient, query: str, lang: str = "en"
) -> Optional[KnowledgePanel]:
    """
    Knowledge-panel extract from the REST page-summary endpoint.

    Only ``standard`` and ``disambiguation`` pages produce a panel.
    """
    lang = wiki_lang(lang)
    url = f"https://{lang}.wikipedia.org/api/rest_v1/page/summary/{url_quote(query.replace(' ', '_'))}"
    data = await get_json(client, url, source="Wikipedia summary")
    if not isinstance(data, dict):
        return None
    if data.get("type") not in ("standard", "disambiguation"):
        return None

    try:
        return KnowledgePanel(
            title=data.get("title") or query,
            extract=data.get("extract") or "",
            thumbnail=(data.get("thumbnail") or {}).get("source"),
            url=((data.get("content_urls") or {}).get("desktop") or {}).get("page"),
        )
    except Exception as e:
        logger.warning(f"Wikipedia summary parse error: {e!r}")
        return None


def image_pages(data: Any) -> List[dict[str, Any]]:
    pages = ((data or {}).get("query") or {}).get("pages") or {}
    if isinstance(pages, dict):
        pages = list(pages.values())
    return sorted(pages, key=lambda p: (p.get("index", 0), p.get("pageid", 0)))


async def search_wikipedia_images(
    client: httpx.AsyncClient, query: str, limit: int = 10, lang: str = "en"
) -> List[ImageResult]:
    """Images used on the article titled by the query (skips SVGs and thumbnails)."""
    lang = wiki_lang(lang)
    data = await get_json(
        client,
        _api_url(lang),
        source="Wikipedia images",
        params={
            "action": "query",
            "generator": "images",
            "titles": query,
            "gimlimit": limit,
            "prop": "imageinfo",
            "iiprop": "url|size",
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
            if width < MIN_IMAGE_SIZE or height < MIN_IMAGE_SIZE or ".svg" in info["url"].lower():
                continue
            name = (page.get("title") or "").replace("File:", "")
            images.append(
                ImageResult(
                    id=f"wiki-{page.get('pageid')}",
                    url=info["url"],
                    thumbnail=info.get("thumburl") or info["url"],
                    title=name or query,
                    source=f"https://{lang}.wikipedia.org/wiki/File:{url_quote(name)}",
                    domain=f"{lang}.wikipedia.org",
                    width=width,
                    height=height,
                    author="Wikipedia",
                    license="Various",
                )
            )
    except Exception as e:
        logger.warning(f"Wikipedia images parse error: {e!r}")
        return []

    logger.info(f"Wikipedia returned {len(images)} images")
    return images[:limit]
