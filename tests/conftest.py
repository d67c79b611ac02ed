"""Pytest configuration and fixtures."""

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config
from shorty.store import URLStore
from shorty.shortcode import ShortCodeGenerator
from shorty.common.logging_config import setup_logging
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store_path(tmp_path):
    """Snapshot path inside a per-test temporary directory."""
    return str(tmp_path / "urls.json")


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator()


@pytest.fixture
def store(store_path, short_code_generator, logger):
    """Create store instance; pending snapshots are flushed on teardown."""
    url_store = URLStore(
        store_path,
        short_code_generator=short_code_generator,
        logger=logger.getChild("store"),
    )

    yield url_store

    url_store.flush(timeout=5)


@pytest.fixture
def config(store_path):
    """Create test configuration."""
    return Config(store_path=store_path)


@pytest.fixture
def app(store, config):
    """Create test FastAPI app."""
    return create_app(store=store, config=config)


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
