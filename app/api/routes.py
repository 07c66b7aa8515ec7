"""
FastAPI route definitions for the screenshot service.

- GET /get/width/{w}/height/{h}/quality/{q}/scale/{s}/page/{type}/url/{url}
      render (or serve from cache) a JPEG of http://{url}
- GET /health

Error mapping:
- Unparseable or out-of-range path parameters -> 400, plain text.
- Any capture or cache I/O failure             -> 500, plain text.
Failure details are logged, never returned to the caller.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError

from .schemas import CaptureRequest, HealthResponse
from ..service.capture_service import CaptureService, get_service

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Service health check endpoint."""
    return HealthResponse()


# ---------------------------------------------------------------------------
# Screenshots
# ---------------------------------------------------------------------------

@router.get(
    "/get/width/{width}/height/{height}/quality/{quality}"
    "/scale/{scale}/page/{page_type}/url/{url:path}",
    tags=["screenshot"],
    response_class=Response,
    responses={200: {"content": {"image/jpeg": {}}}},
)
async def get_screenshot(
    width: str,
    height: str,
    quality: str,
    scale: str,
    page_type: str,
    url: str,
    service: CaptureService = Depends(get_service),
):
    """
    Return a JPEG screenshot of http://{url}.

    height=0 captures the full scrollable page. The result is cached on disk
    under a key derived from all parameters; later identical requests are
    served from the cache without rendering.
    """
    try:
        request = CaptureRequest(
            width=width,
            height=height,
            quality=quality,
            scale=scale,
            page_type=page_type,
            url=url,
        )
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        logger.warning("Rejected capture request for %s: %s", url, e)
        return PlainTextResponse(f"Bad Request: invalid {fields}", status_code=400)

    try:
        image, _cache_hit = await service.get_image(request)
    except Exception as e:
        logger.error("Error capturing or caching screenshot for %s: %s", url, e, exc_info=True)
        return PlainTextResponse("Internal Server Error", status_code=500)

    return Response(content=image, media_type="image/jpeg")
