"""Wikidata entity search provider."""

import logging

import httpx

from ..models.results import SearchResult, WikidataEntity, WikidataSearch
from ..utils.text import favicon_url
from .base import get_json
from .wikipedia import wiki_lang

logger = logging.getLogger(__name__)

WIKIDATA_API_URL = "https://www.wikidata.org/w/api.php"


async def search_wikidata(
    client: httpx.AsyncClient, query: str, limit: int = 5, lang: str = "en"
) -> WikidataSearch:
    """Structured entities matching the query, plus their web-result form."""
    data = await get_json(
        client,
        WIKIDATA_API_URL,
        source="Wikidata",
        params={
            "action": "wbsearchentities",
            "search": query,
            "language": wiki_lang(lang),
            "format": "json",
            "limit": limit,
            "origin": "*",
        },
    )
    if not isinstance(data, dict):
        return WikidataSearch()

    entities = []
    results = []
    try:
        for item in data.get("search") or []:
            if not item.get("id") or not item.get("label"):
                continue
            entity_url = item.get("concepturi") or f"https://www.wikidata.org/wiki/{item['id']}"
            entities.append(
                WikidataEntity(
                    id=item["id"],
                    label=item["label"],
                    description=item.get("description"),
                    url=item.get("concepturi"),
                )
            )
            results.append(
                SearchResult(
                    title=item["label"],
                    url=entity_url,
                    description=item.get("description") or f"Wikidata entity: {item['label']}",
                    favicon=favicon_url("wikidata.org"),
                    type="wikidata",
                )
            )
    except Exception as e:
        logger.warning(f"Wikidata parse error: {e!r}")
        return WikidataSearch()

    logger.info(f"Wikidata returned {len(entities)} entities")
    return WikidataSearch(entities=entities, results=results)
