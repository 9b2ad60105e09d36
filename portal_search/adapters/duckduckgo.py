"""DuckDuckGo Instant Answer provider."""

import logging
from typing import Any, List

import httpx

from ..models.results import InstantAnswer, SearchResult
from ..utils.text import favicon_url, hostname
from .base import get_json

logger = logging.getLogger(__name__)

DDG_INSTANT_ANSWER_URL = "https://api.duckduckgo.com/"


def _topic_result(topic: dict[str, Any], result_type: str) -> SearchResult | None:
    url = topic.get("FirstURL")
    text = topic.get("Text")
    if not url or not text:
        return None
    if result_type == "official":
        title = text
    else:
        title = text.split(" - ")[0] or text[:60]
    return SearchResult(
        title=title,
        url=url,
        description=text,
        favicon=favicon_url(hostname(url)),
        type=result_type,
    )


def parse_instant_answer(data: dict[str, Any]) -> InstantAnswer:
    """
    Flatten an Instant Answer payload into one related-topics list.

    Official ``Results`` come first, in reverse order of appearance, followed
    by ``RelatedTopics`` and one level of nested ``Topics`` groups.
    """
    official: List[SearchResult] = []
    for item in data.get("Results") or []:
        result = _topic_result(item, "official")
        if result:
            official.insert(0, result)

    related: List[SearchResult] = []
    for topic in data.get("RelatedTopics") or []:
        result = _topic_result(topic, "related")
        if result:
            related.append(result)
        for nested in topic.get("Topics") or []:
            nested_result = _topic_result(nested, "related")
            if nested_result:
                related.append(nested_result)

    return InstantAnswer(
        abstract=data.get("AbstractText") or "",
        related_topics=official + related,
        infobox=data.get("Infobox") or None,
    )


async def search_duckduckgo(client: httpx.AsyncClient, query: str) -> InstantAnswer:
    """
    Query the DuckDuckGo Instant Answer API.

    Returns an empty InstantAnswer on any failure.
    """
    data = await get_json(
        client,
        DDG_INSTANT_ANSWER_URL,
        source="DuckDuckGo",
        params={"q": query, "format": "json", "no_html": "1", "skip_disambig": "1"},
    )
    if not isinstance(data, dict):
        return InstantAnswer()

    try:
        answer = parse_instant_answer(data)
    except Exception as e:
        logger.warning(f"DuckDuckGo parse error: {e!r}")
        return InstantAnswer()

    logger.info(f"DuckDuckGo returned {len(answer.related_topics)} topics")
    return answer
