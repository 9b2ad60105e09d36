"""Pydantic models for results, requests and response envelopes."""

from .academic import AcademicPaper
from .media import ImageResult, VideoResult
from .news import NewsArticle
from .results import InstantAnswer, KnowledgePanel, SearchResult, Source, WikidataEntity, WikidataSearch
from .shopping import Product

__all__ = [
    "AcademicPaper",
    "ImageResult",
    "InstantAnswer",
    "KnowledgePanel",
    "NewsArticle",
    "Product",
    "SearchResult",
    "Source",
    "VideoResult",
    "WikidataEntity",
    "WikidataSearch",
]
