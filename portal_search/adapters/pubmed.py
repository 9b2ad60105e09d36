"""
PubMed provider via NCBI E-utilities.

A search is three round trips: ESearch for PMIDs, ESummary for metadata
and EFetch for abstracts. Abstracts are optional; when EFetch fails the
papers are still returned with empty abstracts.
"""

import logging
import re
from typing import Any, Dict, List, Optional
from xml.etree.ElementTree import ParseError

import defusedxml.ElementTree as ET
import httpx

from ..models.academic import AcademicPaper
from ..models.results import SearchResult
from ..utils.text import collapse_whitespace, favicon_url, strip_html
from .base import get_json, get_text

logger = logging.getLogger(__name__)

EUTILS_BASE = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"

MESH_QUALIFIERS = {
    "medicine": "[mesh]",
    "biology": "biology[mesh]",
    "neuroscience": "neuroscience[mesh]",
    "chemistry": "chemistry[mesh]",
}

_TAG_RE = re.compile(r"<[^>]*>")


def build_term(query: str, category: Optional[str] = None) -> str:
    qualifier = MESH_QUALIFIERS.get(category or "")
    return f"{query} {qualifier}" if qualifier else query


def parse_abstracts(xml_text: str) -> Dict[str, str]:
    """Map PMID to the text of its first ``<AbstractText>`` in an EFetch payload."""
    abstracts: Dict[str, str] = {}
    root = ET.fromstring(xml_text)
    for article in root.iter("PubmedArticle"):
        pmid = article.findtext(".//MedlineCitation/PMID") or article.findtext(".//PMID")
        node = article.find(".//Abstract/AbstractText")
        if not pmid or node is None:
            continue
        # AbstractText may carry inline markup (<i>, <sup>); itertext flattens it
        text = collapse_whitespace("".join(node.itertext()))
        if text:
            abstracts[pmid.strip()] = text
    return abstracts


def _article_id(article: Dict[str, Any], id_type: str) -> Optional[str]:
    for aid in article.get("articleids") or []:
        if aid.get("idtype") == id_type and aid.get("value"):
            return aid["value"]
    return None


def _to_paper(pmid: str, article: Dict[str, Any], abstract: str) -> Optional[AcademicPaper]:
    title = article.get("title")
    if not title:
        return None
    pmc_id = _article_id(article, "pmc")
    try:
        citations = int(article.get("pmcrefcount") or 0)
    except (TypeError, ValueError):
        citations = 0

    return AcademicPaper(
        id=f"pubmed-{pmid}",
        title=_TAG_RE.sub("", title).strip(),
        authors=[a["name"] for a in article.get("authors") or [] if a.get("name")],
        abstract=abstract,
        url=f"https://pubmed.ncbi.nlm.nih.gov/{pmid}/",
        pdf_url=f"https://www.ncbi.nlm.nih.gov/pmc/articles/{pmc_id}/pdf/" if pmc_id else None,
        source="pubmed",
        published_date=article.get("pubdate") or None,
        journal=article.get("source") or None,
        doi=_article_id(article, "doi"),
        citations=citations,
    )


async def _fetch_abstracts(client: httpx.AsyncClient, ids: List[str]) -> Dict[str, str]:
    xml_text = await get_text(
        client,
        f"{EUTILS_BASE}/efetch.fcgi",
        source="PubMed EFetch",
        params={"db": "pubmed", "id": ",".join(ids), "rettype": "abstract", "retmode": "xml"},
    )
    if not xml_text:
        return {}
    try:
        return parse_abstracts(xml_text)
    except ParseError as e:
        logger.warning(f"PubMed EFetch returned malformed XML: {e}")
    except Exception as e:
        logger.warning(f"PubMed abstract parse error: {e!r}")
    return {}


async def search_pubmed(
    client: httpx.AsyncClient,
    query: str,
    limit: int = 20,
    category: Optional[str] = None,
    with_abstracts: bool = True,
) -> List[AcademicPaper]:
    """
    Search PubMed by relevance.

    Args:
        client: Shared HTTP client
        query: Free-text query
        limit: Maximum PMIDs to request
        category: Optional subject; adds a MeSH qualifier to the term
        with_abstracts: Also run EFetch for abstracts (web mode skips it)

    Returns:
        Papers in ESearch order; empty on any failure
    """
    search = await get_json(
        client,
        f"{EUTILS_BASE}/esearch.fcgi",
        source="PubMed ESearch",
        params={
            "db": "pubmed",
            "term": build_term(query, category),
            "retmax": limit,
            "retmode": "json",
            "sort": "relevance",
        },
    )
    if not isinstance(search, dict):
        return []

    ids = [str(i) for i in (search.get("esearchresult") or {}).get("idlist") or []]
    logger.debug(f"PubMed found {len(ids)} ids")
    if not ids:
        return []

    summary = await get_json(
        client,
        f"{EUTILS_BASE}/esummary.fcgi",
        source="PubMed ESummary",
        params={"db": "pubmed", "id": ",".join(ids), "retmode": "json"},
    )
    if not isinstance(summary, dict):
        return []

    abstracts = await _fetch_abstracts(client, ids) if with_abstracts else {}

    papers: List[AcademicPaper] = []
    result = summary.get("result") or {}
    try:
        for pmid in ids:
            article = result.get(pmid)
            if not isinstance(article, dict):
                continue
            paper = _to_paper(pmid, article, abstracts.get(pmid, ""))
            if paper:
                papers.append(paper)
    except Exception as e:
        logger.warning(f"PubMed parse error: {e!r}")
        return []

    logger.info(f"PubMed returned {len(papers)} papers")
    return papers


def pubmed_result(paper: AcademicPaper) -> SearchResult:
    """Render a paper as a web result: ``By a, b, c • date • journal``."""
    parts = []
    if paper.authors:
        parts.append(f"By {', '.join(paper.authors[:3])}")
    if paper.published_date:
        parts.append(paper.published_date)
    if paper.journal:
        parts.append(paper.journal)

    return SearchResult(
        title=strip_html(paper.title),
        url=paper.url,
        description=" • ".join(parts),
        favicon=favicon_url("pubmed.ncbi.nlm.nih.gov"),
        type="academic",
    )
