"""
Screenshot capture service.

Ties the on-disk cache to the Playwright capture function:
cache hit -> stored bytes; cache miss -> render, store, return.

Concurrency:
- Blocking work (browser, Pillow, disk) runs in the thread pool via
  run_in_threadpool, so the event loop keeps serving other requests.
- Optional asyncio.Semaphore caps simultaneous browser launches
  (render_max_concurrency; 0 = unlimited).
- Optional in-flight registry: concurrent misses for the same cache key
  await one shared render instead of each launching a browser.
"""

import asyncio
import logging
from typing import Callable

from starlette.concurrency import run_in_threadpool

from ..api.schemas import CaptureRequest
from ..config import get_settings
from ..util.renderer import capture_page
from .image_cache import ImageCache

logger = logging.getLogger(__name__)

CaptureFn = Callable[[str, int, int, int, float], bytes]


class CaptureService:
    """Serves screenshots from the cache, rendering on a miss."""

    def __init__(
        self,
        cache: ImageCache,
        capture: CaptureFn = capture_page,
        max_concurrency: int = 0,
        dedupe_inflight: bool = True,
    ):
        self.cache = cache
        self._capture = capture
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency > 0 else None
        self._dedupe_inflight = dedupe_inflight
        self._inflight: dict[str, asyncio.Future] = {}

    async def get_image(self, request: CaptureRequest) -> tuple[bytes, bool]:
        """
        Return (jpeg_bytes, cache_hit) for a capture request.

        Errors from rendering or file I/O propagate to the caller; nothing is
        written to the cache unless the capture succeeded.
        """
        key = request.cache_key()

        cached = await run_in_threadpool(self.cache.read, key)
        if cached is not None:
            logger.info("Returning cached image for %s", request.url)
            return cached, True

        if not self._dedupe_inflight:
            return await self._render_and_store(key, request), False

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._render_and_store(key, request))
            self._inflight[key] = task
            task.add_done_callback(lambda _t: self._inflight.pop(key, None))
        else:
            logger.info("Joining in-flight render for %s", key)

        # shield: one client disconnecting must not cancel the shared render.
        return await asyncio.shield(task), False

    async def _render_and_store(self, key: str, request: CaptureRequest) -> bytes:
        if self._semaphore is None:
            image = await self._render(request)
        else:
            async with self._semaphore:
                image = await self._render(request)

        await run_in_threadpool(self.cache.write, key, image)
        return image

    async def _render(self, request: CaptureRequest) -> bytes:
        logger.info(
            "Rendering %s (%dx%d, quality=%d, scale=%s, page=%s)",
            request.url, request.width, request.height,
            request.quality, request.scale, request.page_type.lower(),
        )
        return await run_in_threadpool(
            self._capture,
            request.url,
            request.width,
            request.height,
            request.quality,
            request.scale,
        )


_service: CaptureService | None = None


def get_service() -> CaptureService:
    """Return the process-wide CaptureService built from settings."""
    global _service
    if _service is None:
        settings = get_settings()
        _service = CaptureService(
            ImageCache(settings.cache_dir),
            max_concurrency=settings.render_max_concurrency,
            dedupe_inflight=settings.render_dedupe_inflight,
        )
    return _service
