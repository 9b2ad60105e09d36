"""FastAPI dependencies."""

from collections.abc import AsyncGenerator

import httpx
from fastapi import Depends

from .config import Settings, get_settings
from .services.synthesis import Synthesizer


async def get_http_client(settings: Settings = Depends(get_settings)) -> AsyncGenerator[httpx.AsyncClient, None]:
    """One client per request, shared by every adapter the request fans out to."""
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout),
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    ) as client:
        yield client


async def get_synthesizer(settings: Settings = Depends(get_settings)) -> AsyncGenerator[Synthesizer, None]:
    """Synthesizer for one request; its gateway client is closed when the request ends."""
    synthesizer = Synthesizer(settings)
    try:
        yield synthesizer
    finally:
        await synthesizer.aclose()
