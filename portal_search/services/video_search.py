"""Video search across YouTube mirrors, Dailymotion, Archive.org and PeerTube."""

import logging
import math

import httpx

from ..adapters import search_archive_videos, search_dailymotion, search_invidious, search_peertube, search_piped
from ..config import Settings
from ..models.requests import SearchOptions, VerticalSearchRequest
from ..models.responses import VideoSearchResponse
from .aggregation import dedupe, gather_settled, interleave

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 50


async def run_video_search(
    client: httpx.AsyncClient, settings: Settings, request: VerticalSearchRequest
) -> VideoSearchResponse:
    """
    Collect videos from every platform and interleave them, YouTube first.

    Invidious results stand for YouTube; Piped is used only when no
    Invidious mirror answered.
    """
    query = request.query.strip()
    options = request.options or SearchOptions()
    limit = options.limit_or(DEFAULT_LIMIT, MAX_LIMIT)
    youtube_limit = math.ceil(limit / 2)
    other_limit = math.ceil(limit / 4)
    logger.info(f'Video search: "{query}", limit: {limit}')

    settled = await gather_settled(
        {
            "invidious": search_invidious(
                client, query, youtube_limit, settings.invidious_instances, settings.mirror_timeout
            ),
            "piped": search_piped(client, query, youtube_limit, settings.piped_instances, settings.mirror_timeout),
            "dailymotion": search_dailymotion(client, query, other_limit),
            "archive": search_archive_videos(client, query, other_limit),
            "peertube": search_peertube(
                client, query, other_limit, settings.peertube_instances, settings.peertube_timeout
            ),
        }
    )
    youtube = settled["invidious"] or settled["piped"]
    logger.info(
        f"Sources - YouTube: {len(youtube)}, Dailymotion: {len(settled['dailymotion'])}, "
        f"Archive: {len(settled['archive'])}, PeerTube: {len(settled['peertube'])}"
    )

    videos = dedupe(interleave(youtube, settled["dailymotion"], settled["archive"], settled["peertube"]))[:limit]
    logger.info(f"Returning {len(videos)} unique videos")

    return VideoSearchResponse(videos=videos, total=len(videos), query=query)
