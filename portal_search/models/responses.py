"""Response envelopes returned by each search endpoint."""

from typing import Any, List, Optional

from pydantic import Field

from .academic import AcademicPaper
from .base import CamelModel
from .media import ImageResult, VideoResult
from .news import NewsArticle
from .results import KnowledgePanel, SearchResult, Source, WikidataEntity
from .shopping import Product


class WebSearchResponse(CamelModel):
    ai_response: str = ""
    sources: List[Source] = Field(default_factory=list)
    web_results: List[SearchResult] = Field(default_factory=list)
    related_searches: List[str] = Field(default_factory=list)
    total_results: int = 0
    search_time: int = 0  # epoch milliseconds when the response was assembled
    detected_categories: List[str] = Field(default_factory=list)
    knowledge_panel: Optional[KnowledgePanel] = None
    wikidata_entities: List[WikidataEntity] = Field(default_factory=list)
    infobox: Optional[Any] = None  # DuckDuckGo Infobox, passed through unchanged


class AcademicSearchResponse(CamelModel):
    papers: List[AcademicPaper] = Field(default_factory=list)
    total_results: int = 0
    ai_summary: str = ""
    related_topics: List[str] = Field(default_factory=list)


class VideoSearchResponse(CamelModel):
    success: bool = True
    videos: List[VideoResult] = Field(default_factory=list)
    total: int = 0
    query: str


class NewsSearchResponse(CamelModel):
    success: bool = True
    articles: List[NewsArticle] = Field(default_factory=list)
    ai_summary: str = ""
    trending: List[str] = Field(default_factory=list)
    total_results: int = 0
    query: str


class ImageSearchResponse(CamelModel):
    success: bool = True
    images: List[ImageResult] = Field(default_factory=list)
    total_results: int = 0
    query: str


class ShoppingSearchResponse(CamelModel):
    success: bool = True
    products: List[Product] = Field(default_factory=list)
    total_results: int = 0
    query: str


class AutocompleteResponse(CamelModel):
    success: bool = True
    suggestions: List[str] = Field(default_factory=list)
    type: str = "autocomplete"
    query: Optional[str] = None


class HealthResponse(CamelModel):
    status: str
    version: str
