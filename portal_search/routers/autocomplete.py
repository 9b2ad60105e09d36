"""Query autocomplete endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from ..models.requests import AutocompleteRequest
from ..models.responses import AutocompleteResponse
from ..services.suggestions import autocomplete as suggest

router = APIRouter(tags=["autocomplete"])
logger = logging.getLogger(__name__)


@router.post("/autocomplete", response_model=AutocompleteResponse, response_model_exclude_none=True)
async def autocomplete(body: Optional[AutocompleteRequest] = None):
    body = body or AutocompleteRequest()
    try:
        return suggest(body.query, body.limit)
    except Exception as e:
        logger.exception(f"Autocomplete error: {e!r}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "suggestions": [], "error": "Autocomplete failed"},
        )


@router.options("/autocomplete", include_in_schema=False)
async def autocomplete_preflight() -> Response:
    return Response(status_code=200)
