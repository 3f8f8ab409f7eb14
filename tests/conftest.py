"""
Pytest configuration and fixtures for Dashboard Content Backend tests.
"""

import os
import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing the app
_TEST_ROOT = tempfile.mkdtemp(prefix="dashboard_test_")
os.environ["DASHBOARD_DB_PATH"] = str(Path(_TEST_ROOT) / "api" / "dashboard.db")
os.environ["DASHBOARD_CACHE_DIR"] = str(Path(_TEST_ROOT) / "cache")
os.environ["LOG_LEVEL"] = "WARNING"

from dashboard_backend.content_store import ContentStore
from dashboard_backend.database import ContentDatabase
from dashboard_backend.local_cache import LocalCache
from dashboard_backend.main import app, get_content_store
from dashboard_backend.models import ContentDocument


@pytest.fixture(scope="session", autouse=True)
def test_root():
    """Create and cleanup the temporary test directory."""
    yield Path(_TEST_ROOT)
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)


@pytest.fixture
def store(tmp_path):
    """A content store backed by a fresh, empty database."""
    return ContentStore(ContentDatabase(tmp_path / "content.db"))


@pytest.fixture
def client(store):
    """Create a test client whose endpoints use an isolated store."""
    app.dependency_overrides[get_content_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def cache(tmp_path):
    return LocalCache(tmp_path / "cache")


@pytest.fixture
def valid_payload():
    """A request body that passes every content rule."""
    return {
        "header": {"title": "Jaffna Bakery", "imageUrl": "https://cdn.example.com/logo.png"},
        "navbar": {
            "links": [
                {"label": "Home", "url": "/"},
                {"label": "Menu", "url": "#menu"},
                {"label": "Blog", "url": "https://blog.example.com"},
            ]
        },
        "footer": {
            "email": "hello@bakery.example",
            "phone": "123-456-7890",
            "address": "123 Main St, Jaffna, Sri Lanka",
        },
    }


@pytest.fixture
def valid_document(valid_payload):
    return ContentDocument.model_validate(valid_payload)
