"""Data models for general web search results."""

from typing import Any, List, Optional

from pydantic import Field

from .base import CamelModel


class SearchResult(CamelModel):
    """A single web result; ``url`` is the dedup key across adapters."""

    title: str
    url: str
    description: str = ""
    favicon: Optional[str] = None
    type: Optional[str] = None  # wikipedia, academic, platform, search, ...
    thumbnail: Optional[str] = None


class Source(CamelModel):
    """Citation-sized projection of a SearchResult."""

    title: str
    url: str
    domain: str


class KnowledgePanel(CamelModel):
    """Wikipedia page summary shown beside the results."""

    title: str
    extract: str = ""
    thumbnail: Optional[str] = None
    url: Optional[str] = None


class WikidataEntity(CamelModel):
    id: str
    label: str
    description: Optional[str] = None
    url: Optional[str] = None


class InstantAnswer(CamelModel):
    """Parsed DuckDuckGo Instant Answer payload."""

    abstract: str = ""
    related_topics: List[SearchResult] = Field(default_factory=list)
    infobox: Optional[Any] = None


class WikidataSearch(CamelModel):
    entities: List[WikidataEntity] = Field(default_factory=list)
    results: List[SearchResult] = Field(default_factory=list)
