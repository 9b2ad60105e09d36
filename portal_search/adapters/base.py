"""
Shared request helpers for upstream adapters.

Every adapter follows the same failure-isolation contract: a network error,
non-2xx status (including 429) or unparseable body is logged and turned into
``None`` here, and the adapter maps that to an empty result set. Nothing
raised by an upstream crosses an adapter boundary.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_HEADERS = {"Accept": "application/json"}


def _request_kwargs(
    params: Optional[dict[str, Any]],
    headers: Optional[dict[str, str]],
    timeout: Optional[float],
) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    if params is not None:
        kwargs["params"] = params
    if headers:
        kwargs["headers"] = headers
    if timeout is not None:
        kwargs["timeout"] = timeout
    return kwargs


def _log_status_error(source: str, error: httpx.HTTPStatusError) -> None:
    status = error.response.status_code
    if status == 429:
        logger.warning(f"{source} rate limited (429)")
    else:
        logger.warning(f"{source} HTTP error {status}: {error.response.reason_phrase}")


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    source: str,
    params: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> Any:
    """GET ``url`` and decode JSON; ``None`` on any failure."""
    try:
        response = await client.get(url, **_request_kwargs(params, headers, timeout))
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        _log_status_error(source, e)
    except httpx.HTTPError as e:
        logger.warning(f"{source} request failed: {e!r}")
    except ValueError as e:
        logger.warning(f"{source} returned invalid JSON: {e}")
    return None


async def get_text(
    client: httpx.AsyncClient,
    url: str,
    *,
    source: str,
    params: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> Optional[str]:
    """GET ``url`` and return the body text; ``None`` on any failure."""
    try:
        response = await client.get(url, **_request_kwargs(params, headers, timeout))
        response.raise_for_status()
        return response.text
    except httpx.HTTPStatusError as e:
        _log_status_error(source, e)
    except httpx.HTTPError as e:
        logger.warning(f"{source} request failed: {e!r}")
    return None


async def try_in_order(
    instances: Sequence[str],
    attempt: Callable[[str], Awaitable[list[T]]],
    *,
    timeout: float,
    source: str,
) -> list[T]:
    """
    Try mirror instances one after another until one yields results.

    Each attempt is bounded by ``timeout`` seconds and cancelled when it runs
    over. A timeout, an exception or an empty list moves on to the next
    instance; the first non-empty list is returned. Returns ``[]`` when every
    instance fails.
    """
    for instance in instances:
        try:
            results = await asyncio.wait_for(attempt(instance), timeout=timeout)
        except asyncio.TimeoutError:
            logger.info(f"{source} {instance} timed out after {timeout}s")
            continue
        except Exception as e:
            logger.info(f"{source} {instance} error: {e!r}")
            continue

        if results:
            logger.info(f"Got {len(results)} {source} results from {instance}")
            return results
        logger.info(f"{source} {instance} returned no results")

    logger.warning(f"{source}: no instance returned results")
    return []
