"""
Video providers.

YouTube is reached through public Invidious mirrors, with Piped mirrors as
the fallback; PeerTube is also a mirror family. Mirror families go through
``try_in_order`` and stop at the first instance that answers with videos.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Sequence

import httpx

from ..models.media import VideoResult
from ..utils.formatting import format_duration, format_views
from .base import JSON_HEADERS, get_json, try_in_order

logger = logging.getLogger(__name__)

DAILYMOTION_API_URL = "https://api.dailymotion.com/videos"
DAILYMOTION_FIELDS = "id,title,description,thumbnail_480_url,duration,created_time,views_total"


def youtube_thumbnail(video_id: str) -> str:
    return f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"


def _snippet(value: Any) -> str:
    return value[:200] if isinstance(value, str) else ""


def _iso_date(value: Any) -> str:
    """``YYYY-MM-DD`` from an epoch timestamp or ISO string; ``"Unknown"`` otherwise."""
    if isinstance(value, (int, float)) and value > 0:
        return datetime.fromtimestamp(value, tz=timezone.utc).strftime("%Y-%m-%d")
    if isinstance(value, str) and len(value) >= 10:
        return value[:10]
    return "Unknown"


def _invidious_video(item: dict[str, Any]) -> VideoResult:
    video_id = item.get("videoId") or ""
    thumbnails = item.get("videoThumbnails") or []
    return VideoResult(
        title=item.get("title") or "Untitled",
        url=f"https://www.youtube.com/watch?v={video_id}",
        thumbnail=(thumbnails[0].get("url") if thumbnails else None) or youtube_thumbnail(video_id),
        duration=format_duration(item.get("lengthSeconds")),
        source="YouTube",
        published_at=item.get("publishedText") or "Unknown",
        views=format_views(item.get("viewCount")),
        description=_snippet(item.get("description")),
    )


def _piped_video(item: dict[str, Any]) -> VideoResult:
    video_id = (item.get("url") or "").replace("/watch?v=", "")
    return VideoResult(
        title=item.get("title") or "Untitled",
        url=f"https://www.youtube.com/watch?v={video_id}",
        thumbnail=item.get("thumbnail") or youtube_thumbnail(video_id),
        duration=format_duration(item.get("duration")),
        source="YouTube",
        published_at=item.get("uploadedDate") or "Unknown",
        views=format_views(item.get("views")),
        description=_snippet(item.get("shortDescription")),
    )


async def search_invidious(
    client: httpx.AsyncClient, query: str, limit: int, instances: Sequence[str], timeout: float
) -> List[VideoResult]:
    async def attempt(instance: str) -> List[VideoResult]:
        data = await get_json(
            client,
            f"{instance}/api/v1/search",
            source=f"Invidious {instance}",
            params={"q": query, "type": "video", "sort_by": "relevance"},
            headers=JSON_HEADERS,
        )
        if not isinstance(data, list):
            return []
        return [_invidious_video(item) for item in data if item.get("type") == "video" and item.get("videoId")][:limit]

    return await try_in_order(instances, attempt, timeout=timeout, source="Invidious")


async def search_piped(
    client: httpx.AsyncClient, query: str, limit: int, instances: Sequence[str], timeout: float
) -> List[VideoResult]:
    async def attempt(instance: str) -> List[VideoResult]:
        data = await get_json(
            client,
            f"{instance}/search",
            source=f"Piped {instance}",
            params={"q": query, "filter": "videos"},
            headers=JSON_HEADERS,
        )
        if not isinstance(data, dict):
            return []
        items = [i for i in data.get("items") or [] if i.get("type") == "stream" and i.get("url")]
        return [_piped_video(item) for item in items[:limit]]

    return await try_in_order(instances, attempt, timeout=timeout, source="Piped")


async def search_dailymotion(client: httpx.AsyncClient, query: str, limit: int) -> List[VideoResult]:
    data = await get_json(
        client,
        DAILYMOTION_API_URL,
        source="Dailymotion",
        params={"search": query, "limit": limit, "fields": DAILYMOTION_FIELDS},
        headers=JSON_HEADERS,
    )
    if not isinstance(data, dict):
        return []

    try:
        videos = [
            VideoResult(
                title=item.get("title") or "Untitled",
                url=f"https://www.dailymotion.com/video/{item['id']}",
                thumbnail=item.get("thumbnail_480_url") or "",
                duration=format_duration(item.get("duration")),
                source="Dailymotion",
                published_at=_iso_date(item.get("created_time")),
                views=format_views(item.get("views_total")),
                description=_snippet(item.get("description")),
            )
            for item in data.get("list") or []
            if item.get("id")
        ]
    except Exception as e:
        logger.warning(f"Dailymotion parse error: {e!r}")
        return []

    logger.info(f"Dailymotion returned {len(videos)} videos")
    return videos


async def search_peertube(
    client: httpx.AsyncClient, query: str, limit: int, instances: Sequence[str], timeout: float
) -> List[VideoResult]:
    async def attempt(instance: str) -> List[VideoResult]:
        data = await get_json(
            client,
            f"{instance}/api/v1/search/videos",
            source=f"PeerTube {instance}",
            params={"search": query, "count": limit},
            headers=JSON_HEADERS,
        )
        if not isinstance(data, dict):
            return []
        return [
            VideoResult(
                title=item.get("name") or "Untitled",
                url=item.get("url") or f"{instance}/w/{item.get('uuid')}",
                thumbnail=f"{instance}{item['thumbnailPath']}" if item.get("thumbnailPath") else "",
                duration=format_duration(item.get("duration")),
                source="PeerTube",
                published_at=_iso_date(item.get("publishedAt")),
                views=format_views(item.get("views")),
                description=_snippet(item.get("description")),
            )
            for item in data.get("data") or []
            if item.get("url") or item.get("uuid")
        ]

    return await try_in_order(instances, attempt, timeout=timeout, source="PeerTube")
