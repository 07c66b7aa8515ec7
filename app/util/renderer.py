"""
Playwright page capture.

Loads a remote page in a fresh headless Chromium, screenshots it as JPEG
and scales the result with Pillow. One browser per call, no pooling.
"""

import re
import logging

from playwright.sync_api import sync_playwright

from ..config import get_settings
from .resizer import resize_jpeg, round_half_up

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:/+")

_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
]


class CaptureError(RuntimeError):
    """Raised when navigating, screenshotting or resizing a page fails."""


def build_target_url(url: str) -> str:
    """Force plain HTTP, dropping any scheme the caller embedded."""
    return "http://" + _SCHEME_RE.sub("", url)


def capture_page(url: str, width: int, height: int, quality: int, scale: float) -> bytes:
    """
    Render a page to a scaled JPEG.

    Args:
        url: Host (plus optional path/query), fetched over http://.
        width: Viewport width in pixels.
        height: Viewport height in pixels; 0 captures the full scrollable page
                with a default viewport height.
        quality: JPEG quality (0-100).
        scale: Output scale factor applied to the viewport dimensions.

    Returns:
        JPEG bytes.

    Raises:
        CaptureError: on any navigation, screenshot or resize failure.
    """
    settings = get_settings()
    full_page = height == 0
    viewport = {
        "width": width,
        "height": settings.render_default_height if full_page else height,
    }
    target = build_target_url(url)

    goto_kwargs = {"wait_until": settings.render_wait_until}
    if settings.render_navigation_timeout_ms is not None:
        goto_kwargs["timeout"] = settings.render_navigation_timeout_ms

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True, args=_LAUNCH_ARGS)
            try:
                page = browser.new_page(viewport=viewport)
                page.goto(target, **goto_kwargs)
                screenshot = page.screenshot(type="jpeg", quality=quality, full_page=full_page)
            finally:
                browser.close()

        image = resize_jpeg(
            screenshot,
            width=round_half_up(viewport["width"] * scale),
            height=None if full_page else round_half_up(viewport["height"] * scale),
            quality=quality,
        )
    except Exception as e:
        logger.error("[renderer] Capture failed for %s: %s", target, e)
        raise CaptureError(f"Capture failed for {target}: {e}") from e

    logger.info(
        "[renderer] Captured %s (viewport=%dx%d, full_page=%s, scale=%s, %d bytes)",
        target, viewport["width"], viewport["height"], full_page, scale, len(image),
    )
    return image
