"""
Firecrawl search client.

News and shopping have no other source, so unlike the other adapters this
one raises: ``ConfigurationError`` when no key is configured,
``UpstreamError`` on a non-2xx answer and ``NetworkError`` when the API
cannot be reached.
"""

import logging
from typing import List, Optional, Sequence

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ConfigurationError, NetworkError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.firecrawl.dev/v1"


class FirecrawlMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    og_image: Optional[str] = Field(default=None, alias="ogImage")


class FirecrawlDocument(BaseModel):
    """One search hit; ``markdown`` is present when scraping was requested."""

    model_config = ConfigDict(extra="ignore")

    url: str = ""
    title: Optional[str] = None
    description: Optional[str] = None
    markdown: Optional[str] = None
    screenshot: Optional[str] = None
    metadata: FirecrawlMetadata = Field(default_factory=FirecrawlMetadata)


async def firecrawl_search(
    client: httpx.AsyncClient,
    api_key: str,
    query: str,
    *,
    limit: int,
    lang: str = "en",
    tbs: Optional[str] = None,
    formats: Sequence[str] = ("markdown",),
    base_url: str = DEFAULT_BASE_URL,
) -> List[FirecrawlDocument]:
    """
    Run a Firecrawl web search and scrape each hit.

    Args:
        client: Shared HTTP client
        api_key: Firecrawl bearer token
        query: Search text
        limit: Maximum hits
        lang: Result language
        tbs: Optional time filter (``qdr:d`` for the past day)
        formats: Scrape formats to request for every hit

    Returns:
        Documents with a URL, in Firecrawl's order

    Raises:
        ConfigurationError: If no API key is configured
        UpstreamError: If Firecrawl answers with a non-2xx status
        NetworkError: If Firecrawl cannot be reached
    """
    if not api_key:
        raise ConfigurationError("FIRECRAWL_API_KEY not configured")

    payload = {
        "query": query,
        "limit": limit,
        "lang": lang,
        "scrapeOptions": {"formats": list(formats)},
    }
    if tbs:
        payload["tbs"] = tbs

    try:
        response = await client.post(
            f"{base_url.rstrip('/')}/search",
            json=payload,
            headers={"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"},
        )
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error(f"Firecrawl API error {status}: {e.response.text[:200]}")
        raise UpstreamError(
            source="Firecrawl",
            status_code=status,
            message=f"Search failed: {status}",
            response_text=e.response.text[:500],
        ) from e
    except httpx.RequestError as e:
        logger.error(f"Firecrawl network error: {e!r}")
        raise NetworkError(f"Network error connecting to Firecrawl: {e}") from e
    except ValueError as e:
        raise UpstreamError(source="Firecrawl", status_code=502, message="Invalid response from Firecrawl") from e

    documents = [
        FirecrawlDocument.model_validate(item)
        for item in (data.get("data") or [] if isinstance(data, dict) else [])
        if isinstance(item, dict) and item.get("url")
    ]
    logger.info(f"Firecrawl returned {len(documents)} results for query: {query[:50]}")
    return documents
