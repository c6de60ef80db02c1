"""Shared test fixtures for CKey-Engine."""

import os
import pytest
from httpx import ASGITransport, AsyncClient


API_KEY = "test-admin-api-key"
NAMES = ["charles", "alice", "bob", "", "a" * 100, "张三", "Владимир", "José"]


@pytest.fixture
def api_key():
    return API_KEY


@pytest.fixture
def app():
    """Create a test app with a known admin key."""
    os.environ["CKEY_API_KEY"] = API_KEY
    os.environ.pop("CKEY_REQUIRE_API_KEY_FOR_GENERATE", None)
    os.environ.pop("CKEY_MAX_BATCH_SIZE", None)

    # Clear caches so new env vars take effect
    from ckey_engine.common.config import get_settings
    get_settings.cache_clear()

    from ckey_engine.app import create_app
    return create_app()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers():
    return {"X-Ckey-Api-Key": API_KEY}
