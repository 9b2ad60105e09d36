"""Data models for academic papers."""

from typing import List, Literal, Optional

from pydantic import Field

from .base import CamelModel


class AcademicPaper(CamelModel):
    """
    A paper from arXiv or PubMed.

    ``id`` is prefixed with the source (``arxiv-2301.00001``, ``pubmed-12345``)
    so that saved-paper lists can dedupe across searches.
    """

    id: str
    title: str
    authors: List[str] = Field(default_factory=list)
    abstract: str = ""
    url: str
    pdf_url: Optional[str] = None
    source: Literal["arxiv", "pubmed"]
    published_date: Optional[str] = None
    citations: Optional[int] = None
    categories: Optional[List[str]] = None
    journal: Optional[str] = None
    doi: Optional[str] = None
