"""
On-disk screenshot cache.

A flat directory of JPEG files, one per distinct capture request, named
by a key built from the request parameters. Entries are written once and
never expired or deleted.
"""

import os
import uuid
import logging
from urllib.parse import quote

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_URL_SAFE = "-_.!~*'()"


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_cache_key(
    width: int,
    height: int,
    quality: int,
    scale: float,
    page_type: str,
    url: str,
) -> str:
    """
    Build the cache key for one capture request.

    page_type is case-folded and url is percent-encoded, so the key is safe
    to use as a file name.
    """
    return "{}*{}_{}_{}_{}_{}".format(
        _format_number(width),
        _format_number(height),
        _format_number(quality),
        _format_number(scale),
        page_type.lower(),
        quote(url, safe=_URL_SAFE),
    )


class ImageCache:
    """Directory-backed cache of rendered JPEGs, keyed by capture key."""

    def __init__(self, directory: str):
        self.directory = directory

    def ensure_dir(self) -> None:
        """Create the cache directory if missing. Raises OSError on failure."""
        if not os.path.isdir(self.directory):
            os.makedirs(self.directory, exist_ok=True)
            logger.info("[cache] Created cache directory %s", self.directory)

    def path_for(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.jpg")

    def exists(self, key: str) -> bool:
        return os.path.isfile(self.path_for(key))

    def read(self, key: str) -> bytes | None:
        """Return the cached bytes for key, or None if nothing is stored."""
        try:
            with open(self.path_for(key), "rb") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def write(self, key: str, data: bytes) -> str:
        """
        Store data under key, replacing any existing entry.

        The bytes go to a temporary sibling first and are moved into place
        with os.replace, so readers see either nothing or the whole file.
        """
        path = self.path_for(key)
        tmp_path = os.path.join(self.directory, f".{uuid.uuid4().hex}.tmp")
        try:
            with open(tmp_path, "wb") as f:
                f.write(data)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.info("[cache] Stored %s (%d bytes)", os.path.basename(path), len(data))
        return path
