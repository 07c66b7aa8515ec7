"""
Shared fixtures. No browser or network access is needed: the Playwright
capture function is replaced by an in-process fake.
"""

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.main import app
from app.service.capture_service import CaptureService, get_service
from app.service.image_cache import ImageCache
from tests.helpers import FakeCapture


@pytest.fixture
def cache_dir(tmp_path, monkeypatch):
    path = tmp_path / "cached_images"
    monkeypatch.setenv("CACHE_DIR", str(path))
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()


@pytest.fixture
def fake_capture():
    return FakeCapture()


@pytest.fixture
def service(cache_dir, fake_capture):
    return CaptureService(ImageCache(str(cache_dir)), capture=fake_capture)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_service] = lambda: service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
