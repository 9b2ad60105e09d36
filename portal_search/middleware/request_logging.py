"""Per-request logging: one completion line per search, tagged with a request id."""

import logging
import time
from typing import Callable, Optional
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from portal_search.utils.logging import request_id_var, search_mode_var

logger = logging.getLogger(__name__)

SEARCH_MODES = {
    "/real-search": "web",
    "/academic-search": "academic",
    "/video-search": "video",
    "/news-search": "news",
    "/image-search": "image",
    "/shopping-search": "shopping",
    "/autocomplete": "autocomplete",
}


def search_mode(path: str) -> Optional[str]:
    return SEARCH_MODES.get(path.rstrip("/") or "/")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Bind a request id and search mode for the duration of the request.

    The id is taken from ``X-Request-ID`` when the caller sends one and is
    echoed back on the response together with ``X-Response-Time``.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or uuid4().hex[:12]
        id_token = request_id_var.set(request_id)
        mode_token = search_mode_var.set(search_mode(request.url.path))

        method = request.method
        path = request.url.path
        started = time.perf_counter()
        context = {"method": method, "path": path, "client_ip": request.client.host if request.client else "unknown"}

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = round((time.perf_counter() - started) * 1000, 1)
            logger.exception(
                f"{method} {path} failed after {duration_ms}ms",
                extra={**context, "status_code": 500, "duration_ms": duration_ms},
            )
            raise
        else:
            duration_ms = round((time.perf_counter() - started) * 1000, 1)
            status_code = response.status_code
            # Preflights are noise at INFO
            if method == "OPTIONS":
                level = logging.DEBUG
            elif status_code >= 500:
                level = logging.ERROR
            elif status_code >= 400:
                level = logging.WARNING
            else:
                level = logging.INFO
            logger.log(
                level,
                f"{method} {path} -> {status_code} in {duration_ms}ms",
                extra={**context, "status_code": status_code, "duration_ms": duration_ms},
            )
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"
            return response
        finally:
            search_mode_var.reset(mode_token)
            request_id_var.reset(id_token)
