"""FastAPI application for the search portal API."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portal_search.config import Settings, get_settings
from portal_search.middleware.request_logging import RequestLoggingMiddleware
from portal_search.routers import autocomplete, health, search
from portal_search.utils.logging import setup_logging

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Invalid request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(level=settings.log_level, json_format=settings.log_json, log_file=settings.log_file)

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        description="Multi-source search aggregation over free public APIs",
        debug=settings.debug,
    )

    app.add_middleware(RequestLoggingMiddleware)
    # Added last so it wraps the logging middleware and answers preflights first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(search.router)
    app.include_router(autocomplete.router)
    app.include_router(health.router)

    logger.info(f"{settings.app_title} {settings.app_version} ready (AI summaries: {settings.ai_enabled})")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("portal_search.main:app", host=_settings.host, port=_settings.port, reload=_settings.debug)
