"""
Unit tests for the on-disk screenshot cache and its key scheme.

Usage:
    pytest tests/test_image_cache.py -v
"""

import os

import pytest

from app.service.image_cache import ImageCache, build_cache_key


# ---------------------------------------------------------------------------
# Cache keys
# ---------------------------------------------------------------------------

def test_key_format():
    key = build_cache_key(800, 600, 80, 1.0, "desktop", "example.com")
    assert key == "800*600_80_1_desktop_example.com"


def test_key_folds_page_type_case():
    assert build_cache_key(800, 600, 80, 1, "Desktop", "example.com") == \
        build_cache_key(800, 600, 80, 1, "desktop", "example.com")


def test_key_keeps_fractional_scale():
    assert build_cache_key(800, 0, 80, 0.5, "mobile", "example.com") == \
        "800*0_80_0.5_mobile_example.com"


def test_key_url_encodes_like_encode_uri_component():
    key = build_cache_key(800, 600, 80, 1, "desktop", "example.com/a b?x=1&y=(2)")
    assert key.endswith("_example.com%2Fa%20b%3Fx%3D1%26y%3D(2)")
    assert "/" not in key


@pytest.mark.parametrize("changed", [
    (801, 600, 80, 1, "desktop", "example.com"),
    (800, 601, 80, 1, "desktop", "example.com"),
    (800, 600, 81, 1, "desktop", "example.com"),
    (800, 600, 80, 1.5, "desktop", "example.com"),
    (800, 600, 80, 1, "desktop", "example.org"),
])
def test_key_changes_with_any_parameter(changed):
    base = build_cache_key(800, 600, 80, 1, "desktop", "example.com")
    assert build_cache_key(*changed) != base


# ---------------------------------------------------------------------------
# ImageCache
# ---------------------------------------------------------------------------

def test_ensure_dir_creates_missing_directory(tmp_path):
    target = tmp_path / "nested" / "cache"
    ImageCache(str(target)).ensure_dir()
    assert target.is_dir()


def test_ensure_dir_is_idempotent(tmp_path):
    cache = ImageCache(str(tmp_path))
    cache.ensure_dir()
    cache.ensure_dir()
    assert tmp_path.is_dir()


def test_read_missing_returns_none(tmp_path):
    cache = ImageCache(str(tmp_path))
    assert cache.read("nothing") is None
    assert not cache.exists("nothing")


def test_write_then_read(tmp_path):
    cache = ImageCache(str(tmp_path))
    path = cache.write("k", b"\xff\xd8jpeg")
    assert path == os.path.join(str(tmp_path), "k.jpg")
    assert cache.exists("k")
    assert cache.read("k") == b"\xff\xd8jpeg"


def test_write_overwrites_and_leaves_no_temp_files(tmp_path):
    cache = ImageCache(str(tmp_path))
    cache.write("k", b"first")
    cache.write("k", b"second")
    assert cache.read("k") == b"second"
    assert os.listdir(tmp_path) == ["k.jpg"]


def test_failed_write_leaves_nothing_behind(tmp_path):
    cache = ImageCache(str(tmp_path / "missing-dir"))
    with pytest.raises(OSError):
        cache.write("k", b"data")
    assert not cache.exists("k")
