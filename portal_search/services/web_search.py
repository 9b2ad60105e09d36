"""
General web search: fan out to the free knowledge APIs and merge.

Result order is fixed: platform deep links detected from the query lead,
adapter output follows interleaved in priority order, and generic
search-engine links close the list.
"""

import logging
import time
from typing import List

import httpx

from ..adapters import (
    arxiv_result,
    get_wikipedia_summary,
    pubmed_result,
    search_arxiv,
    search_commons,
    search_duckduckgo,
    search_internet_archive,
    search_open_library,
    search_pubmed,
    search_wikidata,
    search_wikipedia,
)
from ..config import Settings
from ..models.requests import SearchOptions, WebSearchRequest
from ..models.responses import WebSearchResponse
from ..models.results import InstantAnswer, WikidataSearch
from .aggregation import gather_settled, merge_results, to_sources
from .intent import detect
from .platforms import academic_search_links, platform_results, web_search_links
from .suggestions import academic_related, related_searches
from .synthesis import Synthesizer, extractive_fallback

logger = logging.getLogger(__name__)

WEB_SOURCE_COUNT = 8
ACADEMIC_SOURCE_COUNT = 5
ACADEMIC_PER_SOURCE = 15
WEB_PAPERS_PER_SOURCE = 5

# Slot order here is the interleave priority
WEB_ADAPTER_ORDER = ("duckduckgo", "wikipedia", "wikidata", "openlibrary", "arxiv", "pubmed", "commons", "archive")

_COMPOSITE_FALLBACKS = {
    "duckduckgo": InstantAnswer,
    "wikidata": WikidataSearch,
    "summary": lambda: None,
}


def _now_ms() -> int:
    return int(time.time() * 1000)


async def _academic_web_search(
    client: httpx.AsyncClient,
    synthesizer: Synthesizer,
    query: str,
    limit: int,
    lang: str,
    categories: List[str],
) -> WebSearchResponse:
    settled = await gather_settled(
        {
            "arxiv": search_arxiv(client, query, ACADEMIC_PER_SOURCE),
            "pubmed": search_pubmed(client, query, ACADEMIC_PER_SOURCE, with_abstracts=False),
            "summary": get_wikipedia_summary(client, query, lang),
        },
        fallbacks=_COMPOSITE_FALLBACKS,
    )
    arxiv = [arxiv_result(p) for p in settled["arxiv"]]
    pubmed = [pubmed_result(p) for p in settled["pubmed"]]
    logger.info(f"Academic web results: arxiv={len(arxiv)} pubmed={len(pubmed)}")

    web_results = merge_results([], [arxiv, pubmed], academic_search_links(query), limit)
    ai_response = await synthesizer.summarize_research(query, web_results)

    return WebSearchResponse(
        ai_response=ai_response,
        sources=to_sources(web_results, ACADEMIC_SOURCE_COUNT),
        web_results=web_results,
        related_searches=academic_related(query),
        total_results=len(web_results),
        search_time=_now_ms(),
        detected_categories=categories,
        knowledge_panel=settled["summary"],
    )


async def run_web_search(
    client: httpx.AsyncClient,
    settings: Settings,
    synthesizer: Synthesizer,
    request: WebSearchRequest,
) -> WebSearchResponse:
    """
    Run a web (``mode="web"``) or AI (``mode="ai"``) search.

    ``options.filter == "academic"`` switches to the arXiv/PubMed path.
    Individual adapter failures only shrink the result list.
    """
    query = request.query.strip()
    options = request.options or SearchOptions()
    search_mode = options.filter or request.mode
    limit = options.limit_or(settings.web_result_limit, settings.web_result_limit)
    lang = options.lang or "en"

    intent = detect(query)
    categories = list(intent.categories)
    logger.info(
        f"Web search: mode={request.mode} filter={options.filter} "
        f"platforms={[p.name for p in intent.platforms]} categories={categories}"
    )
    if options.country or options.domain or options.file_type or options.tbs:
        logger.debug(
            f"Options not applied to free sources: country={options.country} domain={options.domain} "
            f"fileType={options.file_type} tbs={options.tbs}"
        )

    if search_mode == "academic":
        return await _academic_web_search(client, synthesizer, query, limit, lang, categories)

    tasks = {
        "duckduckgo": search_duckduckgo(client, query),
        "wikipedia": search_wikipedia(client, query, lang=lang),
        "summary": get_wikipedia_summary(client, query, lang),
        "wikidata": search_wikidata(client, query, lang=lang),
        "commons": search_commons(client, query),
        "archive": search_internet_archive(client, query),
    }
    if "books" in categories or "academic" in categories:
        tasks["openlibrary"] = search_open_library(client, query)
        tasks["arxiv"] = search_arxiv(client, query, WEB_PAPERS_PER_SOURCE)
        tasks["pubmed"] = search_pubmed(client, query, WEB_PAPERS_PER_SOURCE, with_abstracts=False)

    settled = await gather_settled(tasks, fallbacks=_COMPOSITE_FALLBACKS)
    ddg: InstantAnswer = settled["duckduckgo"]
    wikidata: WikidataSearch = settled["wikidata"]
    summary = settled["summary"]

    adapter_output = {
        "duckduckgo": ddg.related_topics,
        "wikipedia": settled["wikipedia"],
        "wikidata": wikidata.results,
        "openlibrary": settled.get("openlibrary", []),
        "arxiv": [arxiv_result(p) for p in settled.get("arxiv", [])],
        "pubmed": [pubmed_result(p) for p in settled.get("pubmed", [])],
        "commons": settled["commons"],
        "archive": settled["archive"],
    }
    logger.info("Adapter results: " + ", ".join(f"{k}={len(v)}" for k, v in adapter_output.items()))

    web_results = merge_results(
        platform_results(query, intent.platforms, categories),
        [adapter_output[name] for name in WEB_ADAPTER_ORDER],
        web_search_links(query),
        limit,
    )

    abstracts = [ddg.abstract, summary.extract if summary else ""]
    if web_results:
        fallback = f'Found {len(web_results)} results for "{query}".'
    else:
        fallback = f'No results for "{query}".'

    if request.mode == "ai":
        ai_response = await synthesizer.synthesize(query, web_results, abstracts, fallback)
    else:
        ai_response = extractive_fallback(abstracts, fallback)

    logger.info(f"Search completed: {len(web_results)} results")
    return WebSearchResponse(
        ai_response=ai_response,
        sources=to_sources(web_results, WEB_SOURCE_COUNT),
        web_results=web_results,
        related_searches=related_searches(query),
        total_results=len(web_results),
        search_time=_now_ms(),
        detected_categories=categories,
        knowledge_panel=summary,
        wikidata_entities=wikidata.entities,
        infobox=ddg.infobox,
    )
