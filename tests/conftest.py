"""Shared test fixtures.

Settings are read once at import, so the environment is prepared before
anything from src is imported.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ODDS_API_KEY", "")

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app


@pytest.fixture
async def api() -> AsyncClient:
    """In-process client for endpoints that need neither PostgreSQL nor Redis."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
