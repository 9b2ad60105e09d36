"""
Search endpoints.

Every endpoint takes a JSON body and answers with its mode's envelope. A
missing query is a 400; any other failure is a 500 carrying the mode's
empty collections so the front-end can still render an empty state.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

import httpx
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..dependencies import get_http_client, get_synthesizer
from ..exceptions import PortalError, QueryValidationError
from ..models.requests import AcademicSearchRequest, NewsSearchRequest, VerticalSearchRequest, WebSearchRequest
from ..models.responses import (
    AcademicSearchResponse,
    ImageSearchResponse,
    NewsSearchResponse,
    ShoppingSearchResponse,
    VideoSearchResponse,
    WebSearchResponse,
)
from ..services.academic_search import run_academic_search
from ..services.image_search import run_image_search
from ..services.news_search import run_news_search
from ..services.shopping_search import run_shopping_search
from ..services.synthesis import Synthesizer
from ..services.video_search import run_video_search
from ..services.web_search import run_web_search

router = APIRouter(tags=["search"])
logger = logging.getLogger(__name__)

SEARCH_PATHS = (
    "/real-search",
    "/academic-search",
    "/video-search",
    "/news-search",
    "/image-search",
    "/shopping-search",
)


def require_query(query: Optional[str]) -> str:
    if not query or not query.strip():
        raise QueryValidationError()
    return query


def error_response(status_code: int, message: str, **empty: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **empty})


async def _handle(
    name: str,
    call: Callable[[], Awaitable[Any]],
    *,
    success_flag: bool,
    empty: dict[str, Any],
) -> Any:
    """Run a search, mapping validation errors to 400 and failures to 500."""
    flag = {"success": False} if success_flag else {}
    try:
        return await call()
    except QueryValidationError as e:
        return error_response(400, str(e), **flag)
    except PortalError as e:
        logger.error(f"{name} failed: {e}")
        return error_response(500, str(e), **flag, **empty)
    except Exception as e:
        logger.exception(f"{name} error: {e!r}")
        return error_response(500, f"{name} failed", **flag, **empty)


@router.post("/real-search", response_model=WebSearchResponse)
async def real_search(
    body: Optional[WebSearchRequest] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    synthesizer: Synthesizer = Depends(get_synthesizer),
):
    """Web and AI search across the free knowledge APIs."""
    body = body or WebSearchRequest()

    async def call():
        require_query(body.query)
        return await run_web_search(client, settings, synthesizer, body)

    return await _handle(
        "Search",
        call,
        success_flag=False,
        empty={"aiResponse": "", "sources": [], "webResults": [], "relatedSearches": []},
    )


@router.post("/academic-search", response_model=AcademicSearchResponse)
async def academic_search(
    body: Optional[AcademicSearchRequest] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    synthesizer: Synthesizer = Depends(get_synthesizer),
):
    """arXiv and PubMed papers, optionally sorted by date or citations."""
    body = body or AcademicSearchRequest()

    async def call():
        require_query(body.query)
        return await run_academic_search(client, settings, synthesizer, body)

    return await _handle(
        "Academic search",
        call,
        success_flag=False,
        empty={"papers": [], "totalResults": 0, "aiSummary": "", "relatedTopics": []},
    )


@router.post("/video-search", response_model=VideoSearchResponse)
async def video_search(
    body: Optional[VerticalSearchRequest] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    body = body or VerticalSearchRequest()

    async def call():
        require_query(body.query)
        return await run_video_search(client, settings, body)

    return await _handle("Video search", call, success_flag=True, empty={"videos": [], "total": 0})


@router.post("/news-search", response_model=NewsSearchResponse)
async def news_search(
    body: Optional[NewsSearchRequest] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    synthesizer: Synthesizer = Depends(get_synthesizer),
):
    """Recent news; the query is optional and defaults to today's headlines."""
    body = body or NewsSearchRequest()

    async def call():
        return await run_news_search(client, settings, synthesizer, body)

    return await _handle(
        "News search",
        call,
        success_flag=True,
        empty={"articles": [], "trending": [], "totalResults": 0},
    )


@router.post("/image-search", response_model=ImageSearchResponse)
async def image_search(
    body: Optional[VerticalSearchRequest] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    body = body or VerticalSearchRequest()

    async def call():
        require_query(body.query)
        return await run_image_search(client, settings, body)

    return await _handle("Image search", call, success_flag=True, empty={"images": [], "totalResults": 0})


@router.post("/shopping-search", response_model=ShoppingSearchResponse)
async def shopping_search(
    body: Optional[VerticalSearchRequest] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    body = body or VerticalSearchRequest()

    async def call():
        require_query(body.query)
        return await run_shopping_search(client, settings, body)

    return await _handle("Shopping search", call, success_flag=True, empty={"products": [], "totalResults": 0})


async def preflight() -> Response:
    return Response(status_code=200)


for _path in SEARCH_PATHS:
    router.add_api_route(_path, preflight, methods=["OPTIONS"], include_in_schema=False)
