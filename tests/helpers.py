"""
Test helpers: synthetic JPEGs and a stand-in for the Playwright capture.
"""

import io

from PIL import Image

from app.util.resizer import round_half_up


def make_jpeg(width: int, height: int, color=(200, 40, 40)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="JPEG", quality=90)
    return buf.getvalue()


class FakeCapture:
    """Stands in for capture_page; counts renders and can be told to fail."""

    def __init__(self, error: Exception | None = None):
        self.calls = []
        self.error = error

    def __call__(self, url, width, height, quality, scale):
        self.calls.append((url, width, height, quality, scale))
        if self.error is not None:
            raise self.error
        out_h = height or 3000
        return make_jpeg(round_half_up(width * scale), round_half_up(out_h * scale))
