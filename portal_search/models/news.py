"""Data models for news articles."""

from typing import Optional

from .base import CamelModel


class NewsArticle(CamelModel):
    id: str
    title: str
    description: str = ""
    content: str = ""
    url: str
    source: str  # publisher domain
    category: str = "general"
    published_at: str
    image: Optional[str] = None
