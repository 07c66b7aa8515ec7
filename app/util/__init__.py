"""
Utility functions: Playwright page capture and Pillow resizing.
"""

from .renderer import CaptureError, capture_page
from .resizer import resize_jpeg

__all__ = [
    "CaptureError",
    "capture_page",
    "resize_jpeg",
]
