"""API test fixtures — FastAPI test client over an in-memory SQLite database.

Invariants:
    - get_db dependency overridden to use the test engine's sessions
    - db_manager patched so the readiness probe sees the test engine
"""

import pytest
from httpx import ASGITransport, AsyncClient

import what_writers_like.infrastructure.database as db_module
from what_writers_like.infrastructure.database import DatabaseSessionManager, get_db
from what_writers_like.main import app


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _post(client, path, body):
    res = await client.post(path, json=body)
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
async def seeded(client):
    """Austen wrote Emma, Dickens wrote Bleak House (created through the API)."""
    austen = await _post(client, "/api/v1/writers", {
        "name": "Jane Austen", "birth_year": 1775, "death_year": 1817,
        "bio": "English novelist",
    })
    dickens = await _post(client, "/api/v1/writers", {
        "name": "Charles Dickens", "birth_year": 1812,
    })
    emma = await _post(client, "/api/v1/works", {
        "title": "Emma", "author_id": austen["id"],
    })
    bleak = await _post(client, "/api/v1/works", {
        "title": "Bleak House", "author_id": dickens["id"],
    })
    return austen, dickens, emma, bleak
