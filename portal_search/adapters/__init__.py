"""Upstream source adapters; every one except Firecrawl returns an empty result on failure."""

from .arxiv import arxiv_result, search_arxiv
from .base import try_in_order
from .duckduckgo import search_duckduckgo
from .firecrawl import FirecrawlDocument, firecrawl_search
from .internet_archive import search_archive_videos, search_internet_archive
from .openlibrary import search_open_library
from .pubmed import pubmed_result, search_pubmed
from .video import search_dailymotion, search_invidious, search_peertube, search_piped
from .wikidata import search_wikidata
from .wikimedia import search_commons, search_commons_images
from .wikipedia import get_wikipedia_summary, search_wikipedia, search_wikipedia_images

__all__ = [
    "FirecrawlDocument",
    "arxiv_result",
    "firecrawl_search",
    "get_wikipedia_summary",
    "pubmed_result",
    "search_archive_videos",
    "search_arxiv",
    "search_commons",
    "search_commons_images",
    "search_dailymotion",
    "search_duckduckgo",
    "search_internet_archive",
    "search_invidious",
    "search_open_library",
    "search_peertube",
    "search_piped",
    "search_pubmed",
    "search_wikidata",
    "search_wikipedia",
    "search_wikipedia_images",
    "try_in_order",
]
