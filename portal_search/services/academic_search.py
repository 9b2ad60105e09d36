"""Academic search over arXiv and PubMed."""

import logging

import httpx

from ..adapters import search_arxiv, search_pubmed
from ..config import Settings
from ..models.requests import AcademicSearchRequest
from ..models.responses import AcademicSearchResponse
from .aggregation import dedupe, gather_settled, interleave, sort_papers
from .suggestions import related_topics
from .synthesis import Synthesizer

logger = logging.getLogger(__name__)

PAPERS_PER_SOURCE = 15


async def run_academic_search(
    client: httpx.AsyncClient,
    settings: Settings,
    synthesizer: Synthesizer,
    request: AcademicSearchRequest,
) -> AcademicSearchResponse:
    """
    Interleave arXiv and PubMed papers, dedupe by URL, sort, then cap.

    When both sources come back empty the summary is ``""``.
    """
    query = request.query.strip()
    logger.info(f"Academic search: query={query!r} category={request.category} sortBy={request.sort_by}")

    settled = await gather_settled(
        {
            "arxiv": search_arxiv(client, query, PAPERS_PER_SOURCE, request.category),
            "pubmed": search_pubmed(client, query, PAPERS_PER_SOURCE, request.category),
        }
    )
    logger.info(f"Academic results: arxiv={len(settled['arxiv'])} pubmed={len(settled['pubmed'])}")

    papers = dedupe(interleave(settled["arxiv"], settled["pubmed"]))
    papers = sort_papers(papers, request.sort_by)[: settings.academic_result_limit]

    ai_summary = await synthesizer.summarize_papers(query, papers)

    return AcademicSearchResponse(
        papers=papers,
        total_results=len(papers),
        ai_summary=ai_summary,
        related_topics=related_topics(query),
    )
