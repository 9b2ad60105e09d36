"""Shared fixtures: settings without credentials and a stubbed upstream network."""

from typing import Callable, Dict, Tuple, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from portal_search.config import Settings, get_settings
from portal_search.dependencies import get_http_client
from portal_search.main import create_app

Handler = Callable[[httpx.Request], httpx.Response]
RouteTable = Dict[Tuple[str, str], Union[httpx.Response, Handler]]


def make_transport(routes: RouteTable, calls: list | None = None) -> httpx.MockTransport:
    """
    Route requests by ``(host, path prefix)``; anything unrouted gets a 404.

    Every request is appended to ``calls`` when a list is given.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        for (host, prefix), answer in routes.items():
            if request.url.host == host and request.url.path.startswith(prefix):
                if callable(answer):
                    return answer(request)
                # Fresh copy per request so one canned answer can serve repeated calls
                return httpx.Response(answer.status_code, headers=answer.headers, content=answer.content)
        return httpx.Response(404, json={"error": "not found"})

    return httpx.MockTransport(handler)


@pytest.fixture
def settings():
    """Settings with no AI or Firecrawl credentials and fast mirror timeouts."""
    return Settings(
        ai_gateway_api_key="",
        firecrawl_api_key="",
        log_json=False,
        log_level="WARNING",
        mirror_timeout=0.5,
        peertube_timeout=0.5,
    )


@pytest.fixture
def routes() -> RouteTable:
    """Upstream routes for the test; tests add entries before making requests."""
    return {}


@pytest.fixture
def upstream_calls() -> list:
    return []


@pytest.fixture
def app(settings, routes, upstream_calls):
    application = create_app(settings)

    async def _client():
        async with httpx.AsyncClient(transport=make_transport(routes, upstream_calls)) as client:
            yield client

    application.dependency_overrides[get_settings] = lambda: settings
    application.dependency_overrides[get_http_client] = _client
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Test client."""
    return TestClient(app)


@pytest.fixture
async def http_client(routes, upstream_calls):
    """Async client for adapter tests, answering from ``routes``."""
    async with httpx.AsyncClient(transport=make_transport(routes, upstream_calls)) as client:
        yield client
