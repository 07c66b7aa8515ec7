"""
Pillow post-processing for captured screenshots.
"""

import io
import math
import logging

from PIL import Image

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round like JavaScript's Math.round (halves go up, not to even)."""
    return int(math.floor(value + 0.5))


def resize_jpeg(data: bytes, width: int, height: int | None = None, quality: int = 80) -> bytes:
    """
    Resize an encoded image and return it as JPEG bytes.

    Args:
        data: Encoded source image.
        width: Target width in pixels.
        height: Target height in pixels, or None to keep the source aspect ratio.
        quality: JPEG quality of the re-encoded output.

    Raises:
        ValueError: if a target dimension is not positive.
    """
    if width <= 0:
        raise ValueError(f"Invalid resize width: {width}")
    if height is not None and height <= 0:
        raise ValueError(f"Invalid resize height: {height}")

    with Image.open(io.BytesIO(data)) as source:
        if height is None:
            height = max(1, round_half_up(source.height * width / source.width))
        resized = source.convert("RGB").resize((width, height), Image.Resampling.LANCZOS)

    buf = io.BytesIO()
    resized.save(buf, format="JPEG", quality=quality)
    logger.debug("[resizer] Resized to %dx%d (quality=%d)", width, height, quality)
    return buf.getvalue()
