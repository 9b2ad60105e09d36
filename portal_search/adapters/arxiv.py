"""
arXiv provider.

The export API answers with an Atom feed; entries are read with defusedxml
so hostile XML (entity expansion and the like) cannot reach the parser.
"""

import logging
from typing import List, Optional
from xml.etree.ElementTree import Element, ParseError

import defusedxml.ElementTree as ET
import httpx

from ..models.academic import AcademicPaper
from ..models.results import SearchResult
from ..utils.text import collapse_whitespace, favicon_url
from .base import get_text

logger = logging.getLogger(__name__)

ARXIV_API_URL = "https://export.arxiv.org/api/query"

NAMESPACES = {
    "atom": "http://www.w3.org/2005/Atom",
    "arxiv": "http://arxiv.org/schemas/atom",
}

CATEGORY_FILTERS = {
    "cs": "cat:cs.*",
    "physics": "cat:physics.*",
    "biology": "cat:q-bio.*",
    "medicine": "cat:q-bio.*",
    "neuroscience": "cat:q-bio.NC",
    "chemistry": "cat:physics.chem-ph",
}

MAX_CATEGORIES = 5


def _text(entry: Element, path: str) -> str:
    node = entry.find(path, NAMESPACES)
    if node is None or not node.text:
        return ""
    return collapse_whitespace(node.text)


def _parse_entry(entry: Element) -> Optional[AcademicPaper]:
    entry_id = _text(entry, "atom:id")
    title = _text(entry, "atom:title")
    # The API reports query errors as a single entry pointing at /api/errors
    if not entry_id or not title or "/api/errors" in entry_id:
        return None

    if "/abs/" in entry_id:
        arxiv_id = entry_id.split("/abs/", 1)[1]
    else:
        arxiv_id = entry_id.rstrip("/").rsplit("/", 1)[-1]

    authors = [
        collapse_whitespace(name.text)
        for name in entry.findall("atom:author/atom:name", NAMESPACES)
        if name.text and name.text.strip()
    ]
    categories = [
        cat.get("term")
        for cat in entry.findall("atom:category", NAMESPACES)
        if cat.get("term")
    ]

    return AcademicPaper(
        id=f"arxiv-{arxiv_id}",
        title=title,
        authors=authors,
        abstract=_text(entry, "atom:summary"),
        url=entry_id,
        pdf_url=entry_id.replace("/abs/", "/pdf/") + ".pdf",
        source="arxiv",
        published_date=_text(entry, "atom:published") or None,
        categories=categories[:MAX_CATEGORIES],
        doi=_text(entry, "arxiv:doi") or None,
    )


def parse_arxiv_feed(xml_text: str) -> List[AcademicPaper]:
    """Parse an arXiv Atom feed into papers; malformed entries are skipped."""
    root = ET.fromstring(xml_text)
    papers = []
    for entry in root.findall("atom:entry", NAMESPACES):
        paper = _parse_entry(entry)
        if paper:
            papers.append(paper)
    return papers


def build_search_query(query: str, category: Optional[str] = None) -> str:
    search_query = f"all:{query}"
    category_filter = CATEGORY_FILTERS.get(category or "")
    if category_filter:
        search_query = f"{search_query} AND {category_filter}"
    return search_query


async def search_arxiv(
    client: httpx.AsyncClient,
    query: str,
    limit: int = 20,
    category: Optional[str] = None,
) -> List[AcademicPaper]:
    """
    Search arXiv by relevance.

    Args:
        client: Shared HTTP client
        query: Free-text query, matched against all fields
        limit: Maximum entries to request
        category: Optional subject (cs, physics, biology, medicine,
            neuroscience, chemistry) narrowing the search

    Returns:
        Papers in feed order; empty on any failure
    """
    search_query = build_search_query(query, category)
    logger.debug(f"arXiv search: {search_query}")

    xml_text = await get_text(
        client,
        ARXIV_API_URL,
        source="arXiv",
        params={
            "search_query": search_query,
            "start": 0,
            "max_results": limit,
            "sortBy": "relevance",
        },
    )
    if not xml_text:
        return []

    try:
        papers = parse_arxiv_feed(xml_text)
    except ParseError as e:
        logger.warning(f"arXiv returned malformed XML: {e}")
        return []
    except Exception as e:
        logger.warning(f"arXiv parse error: {e!r}")
        return []

    logger.info(f"arXiv returned {len(papers)} papers")
    return papers[:limit]


def arxiv_result(paper: AcademicPaper) -> SearchResult:
    """Render a paper as a web result: ``By a, b, c • date • cats. summary...``."""
    description = ""
    if paper.authors:
        description += f"By {', '.join(paper.authors[:3])}"
    if paper.published_date:
        description += f" • {paper.published_date[:10]}"
    if paper.categories:
        description += f" • {', '.join(paper.categories[:2])}"
    description += f". {paper.abstract[:200]}..."

    return SearchResult(
        title=paper.title,
        url=paper.url,
        description=description,
        favicon=favicon_url("arxiv.org"),
        type="academic",
    )
