"""
Pydantic schemas for API request / response models.
"""

from pydantic import BaseModel, Field

from ..service.image_cache import build_cache_key


# ---------------------------------------------------------------------------
# Capture schemas
# ---------------------------------------------------------------------------

class CaptureRequest(BaseModel):
    """One screenshot request, parsed from the route's path segments."""
    width: int = Field(..., ge=0, description="Viewport width in pixels")
    height: int = Field(..., ge=0, description="Viewport height in pixels; 0 = full page")
    quality: int = Field(..., ge=0, le=100, description="JPEG quality")
    scale: float = Field(..., gt=0, allow_inf_nan=False, description="Output scale factor")
    page_type: str = Field(..., description="Page type label (case-insensitive)")
    url: str = Field(..., min_length=1, description="Host and optional path, fetched over http://")

    def cache_key(self) -> str:
        return build_cache_key(
            self.width, self.height, self.quality, self.scale, self.page_type, self.url,
        )


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    service: str = "shutter"
