"""API test fixtures — FastAPI test client wired to the in-memory repository.

Invariants:
    - get_repository dependency overridden to use the test repository
    - Lifespan never runs (ASGITransport), so no driver client is created
"""

import pytest
from httpx import ASGITransport, AsyncClient

from personstore.api.dependencies import get_repository
from personstore.main import app


@pytest.fixture
async def client(repository):
    """FastAPI test client with the repository dependency overridden."""
    app.dependency_overrides[get_repository] = lambda: repository
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
