"""Image search over Wikimedia Commons and Wikipedia article images."""

import logging
import math

import httpx

from ..adapters import search_commons_images, search_wikipedia_images
from ..config import Settings
from ..models.requests import SearchOptions, VerticalSearchRequest
from ..models.responses import ImageSearchResponse
from .aggregation import dedupe, gather_settled, interleave

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 50


async def run_image_search(
    client: httpx.AsyncClient, settings: Settings, request: VerticalSearchRequest
) -> ImageSearchResponse:
    query = request.query.strip()
    options = request.options or SearchOptions()
    limit = options.limit_or(DEFAULT_LIMIT, MAX_LIMIT)
    per_source = math.ceil(limit / 2)
    logger.info(f'Image search: "{query}", limit: {limit}')

    settled = await gather_settled(
        {
            "commons": search_commons_images(client, query, per_source),
            "wikipedia": search_wikipedia_images(client, query, per_source, options.lang or "en"),
        }
    )

    merged = dedupe(interleave(settled["commons"], settled["wikipedia"]))[:limit]
    images = [image.model_copy(update={"id": f"img-{index}"}) for index, image in enumerate(merged)]
    logger.info(f"Image search completed with {len(images)} images")

    return ImageSearchResponse(images=images, total_results=len(images), query=query)
