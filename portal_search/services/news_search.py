"""News search backed by Firecrawl's time-filtered web search."""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from ..adapters import FirecrawlDocument, firecrawl_search
from ..config import Settings
from ..models.news import NewsArticle
from ..models.requests import NewsSearchRequest, SearchOptions
from ..models.responses import NewsSearchResponse
from ..utils.text import display_domain
from .suggestions import trending_topics
from .synthesis import Synthesizer

logger = logging.getLogger(__name__)

DEFAULT_QUERY = "latest news today"
DEFAULT_LIMIT = 15
MAX_LIMIT = 30
DEFAULT_TBS = "qdr:d"


def build_news_query(query: Optional[str], category: Optional[str]) -> str:
    """``"{category} news {query}"`` for a category, else the query or today's headlines."""
    query = (query or "").strip()
    if category and category != "all":
        return f"{category} news {query}".strip()
    return query or DEFAULT_QUERY


def to_article(index: int, doc: FirecrawlDocument, category: Optional[str], fetched_at: str) -> NewsArticle:
    markdown = doc.markdown or ""
    return NewsArticle(
        id=f"news-{index}",
        title=doc.title or doc.metadata.title or "Untitled Article",
        description=doc.description or doc.metadata.description or markdown[:200],
        content=markdown,
        url=doc.url,
        source=display_domain(doc.url),
        category=category or "general",
        # Firecrawl reports no publication dates; stamp the fetch time
        published_at=fetched_at,
        image=doc.screenshot or doc.metadata.og_image,
    )


async def run_news_search(
    client: httpx.AsyncClient,
    settings: Settings,
    synthesizer: Synthesizer,
    request: NewsSearchRequest,
) -> NewsSearchResponse:
    """
    Search recent news.

    Raises:
        ConfigurationError: If no Firecrawl key is configured
        UpstreamError: If Firecrawl rejects the search
        NetworkError: If Firecrawl cannot be reached
    """
    options = request.options or SearchOptions()
    search_query = build_news_query(request.query, request.category)
    logger.info(f"Searching news: {search_query!r}")

    documents = await firecrawl_search(
        client,
        settings.firecrawl_api_key,
        search_query,
        limit=options.limit_or(DEFAULT_LIMIT, MAX_LIMIT),
        lang=options.lang or "en",
        tbs=options.tbs or DEFAULT_TBS,
        formats=("markdown",),
        base_url=settings.firecrawl_base_url,
    )

    fetched_at = datetime.now(timezone.utc).isoformat()
    articles = [to_article(i, doc, request.category, fetched_at) for i, doc in enumerate(documents)]
    ai_summary = await synthesizer.summarize_news(search_query, articles)
    trending = trending_topics(a.title for a in articles)

    logger.info(f"News search completed with {len(articles)} articles")
    return NewsSearchResponse(
        articles=articles,
        ai_summary=ai_summary,
        trending=trending,
        total_results=len(articles),
        query=search_query,
    )
