"""Request bodies accepted by the search endpoints."""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class SearchOptions(CamelModel):
    """Optional tuning knobs sent by the front-end; unknown keys are ignored."""

    limit: Optional[int] = Field(default=None, description="Maximum number of results")
    lang: Optional[str] = Field(default=None, description="Result language (e.g. 'en')")
    country: Optional[str] = None
    tbs: Optional[str] = Field(default=None, description="Time filter, e.g. 'qdr:d' for the past day")
    domain: Optional[str] = None
    file_type: Optional[str] = None
    filter: Optional[str] = Field(default=None, description="Search vertical override, e.g. 'academic'")

    def limit_or(self, default: int, cap: int) -> int:
        """Requested limit bounded to ``cap``; ``default`` when absent or not positive."""
        if not self.limit or self.limit <= 0:
            return min(default, cap)
        return min(self.limit, cap)


class WebSearchRequest(CamelModel):
    query: Optional[str] = None
    mode: str = "web"
    options: Optional[SearchOptions] = None


class AcademicSearchRequest(CamelModel):
    query: Optional[str] = None
    category: Optional[str] = Field(default=None, description="cs, physics, biology, medicine, neuroscience, chemistry")
    sort_by: Optional[str] = Field(default=None, description="relevance, date or citations")


class VerticalSearchRequest(CamelModel):
    """Body shared by the video, image and shopping endpoints."""

    query: Optional[str] = None
    options: Optional[SearchOptions] = None


class NewsSearchRequest(CamelModel):
    query: Optional[str] = None
    category: Optional[str] = None
    options: Optional[SearchOptions] = None


class AutocompleteRequest(CamelModel):
    query: Optional[str] = None
    limit: Optional[int] = None
